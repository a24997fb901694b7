"""
Derivatives Analysis Engine

This module runs the full derivatives analysis for one ticker: chain analytics,
PCR, OI buildup and IV skew each contribute signals, and the weighted vote turns
them into a single recommendation.

Signal set:
- PCR: 5-band PCR signal (confidence 0.6)
- MaxPain: spot distance from max pain, > 2% above → SELL, > 2% below → BUY (confidence 0.5)
- FuturesOI: futures buildup regime (0.6, or 0.45 for covering/unwinding)
- IVSkew: put IV more than 5 points over call IV at ATM → SELL (confidence 0.4)

Usage:
    result = full_derivatives_analysis("NIFTY", chain, futures)
    print(result.recommendation, result.confidence)
"""

from typing import Optional

from loguru import logger

from fno_engine.analysis.models import (
    AnalysisResult,
    AnalysisType,
    ChainAnalysis,
)
from fno_engine.analysis.option_chain import analyze_option_chain
from fno_engine.analysis.pcr_oi import analyze_oi_buildup, buildup_signal, compute_pcr, pcr_signal
from fno_engine.decisions.models import Recommendation, Signal, SignalType
from fno_engine.decisions.voting import aggregate_signals
from fno_engine.models.market_models import FuturesContract, OptionChain

AGENT_NAME = "derivatives-analysis"

MAX_PAIN_BAND_PCT = 2.0
MAX_PAIN_CONFIDENCE = 0.5

IV_SKEW_THRESHOLD = 5.0
IV_SKEW_CONFIDENCE = 0.4


def max_pain_signal(spot_price: float, max_pain: float) -> Optional[Signal]:
    """
    Signal from the distance between spot and max pain.

    Price tends to gravitate towards max pain into expiry.

    Returns:
        Signal (MaxPain source), or None when spot or max pain is not positive
    """
    if max_pain <= 0 or spot_price <= 0:
        return None

    diff = (spot_price - max_pain) / max_pain * 100

    if diff > MAX_PAIN_BAND_PCT:
        signal_type = SignalType.SELL
        reason = f"Price {diff:.1f}% above max pain ({max_pain:.0f}) — gravitational pull downward"
    elif diff < -MAX_PAIN_BAND_PCT:
        signal_type = SignalType.BUY
        reason = f"Price {diff:.1f}% below max pain ({max_pain:.0f}) — gravitational pull upward"
    else:
        signal_type = SignalType.NEUTRAL
        reason = f"Price near max pain ({max_pain:.0f})"

    return Signal(source="MaxPain", type=signal_type, confidence=MAX_PAIN_CONFIDENCE, reason=reason)


def iv_skew_signal(chain_analysis: ChainAnalysis) -> Optional[Signal]:
    """
    Signal from elevated put IV over call IV at the ATM strike.

    Returns:
        SELL signal (IVSkew source) when skew exceeds the threshold, else None
    """
    if chain_analysis.iv_skew <= IV_SKEW_THRESHOLD:
        return None

    return Signal(
        source="IVSkew",
        type=SignalType.SELL,
        confidence=IV_SKEW_CONFIDENCE,
        reason=f"High IV skew ({chain_analysis.iv_skew:.1f}) — elevated put demand, hedging activity",
    )


def full_derivatives_analysis(
    ticker: str,
    chain: Optional[OptionChain],
    futures: Optional[FuturesContract] = None,
) -> AnalysisResult:
    """
    Run the complete derivatives analysis.

    Args:
        ticker: Ticker the analysis is for
        chain: Option chain snapshot (may be None)
        futures: Near-month futures contract (optional)

    Returns:
        AnalysisResult with signals, recommendation, confidence, summary and the
        chain_analysis / pcr_analysis / oi_analysis detail records.
        A missing chain yields a HOLD result at confidence 0 with no signals.
    """
    if chain is None:
        logger.warning(f"Derivatives analysis for {ticker}: no option chain data")
        return AnalysisResult(
            ticker=ticker,
            type=AnalysisType.DERIVATIVES,
            agent_name=AGENT_NAME,
            signals=(),
            recommendation=Recommendation.HOLD,
            confidence=0.0,
            summary=f"Derivatives analysis for {ticker}: no option chain data available",
        )

    chain_analysis = analyze_option_chain(chain)
    pcr_analysis = compute_pcr(chain)
    oi_analysis = analyze_oi_buildup(chain, futures)

    candidates = [
        pcr_signal(pcr_analysis) if pcr_analysis.signal else None,
        max_pain_signal(chain.spot_price, chain_analysis.max_pain),
        buildup_signal(oi_analysis) if futures is not None else None,
        iv_skew_signal(chain_analysis),
    ]
    signals = tuple(s for s in candidates if s is not None)

    vote = aggregate_signals(signals)

    summary = (
        f"Derivatives analysis for {ticker}: PCR {pcr_analysis.pcr:.2f} ({pcr_analysis.signal}), "
        f"Max Pain {chain_analysis.max_pain:.0f}, {oi_analysis.interpretation}"
    )

    result = AnalysisResult(
        ticker=ticker,
        type=AnalysisType.DERIVATIVES,
        agent_name=AGENT_NAME,
        signals=signals,
        recommendation=vote.recommendation,
        confidence=vote.confidence,
        summary=summary,
        details={
            "chain_analysis": chain_analysis,
            "pcr_analysis": pcr_analysis,
            "oi_analysis": oi_analysis,
        },
    )

    logger.info(
        f"Derivatives analysis for {ticker}: {vote.recommendation.name} "
        f"(confidence {vote.confidence:.2f}, net {vote.net_score:+.2f}, {len(signals)} signals)"
    )
    return result
