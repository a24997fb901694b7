"""
Put-Call Ratio and Open-Interest Buildup

This module computes PCR signals and classifies OI changes into the four buildup
regimes, for the futures contract (ticker-level) and per option strike.

Buildup regimes:
    price up,   OI up    → long buildup
    price down, OI up    → short buildup
    price down, OI down  → long unwinding
    price up,   OI down  → short covering
    anything else        → long buildup (price unchanged is not a regime of its own)

Usage:
    pcr = compute_pcr(chain)
    regime = classify_oi_buildup(price_change=12.5, oi_change=40_000)
    buildup = analyze_oi_buildup(chain, futures)
"""

from typing import Optional

from loguru import logger

from fno_engine.analysis.models import (
    OIBuildupAnalysis,
    OIBuildupData,
    OIBuildupType,
    PCRAnalysis,
    StrikeBuildup,
)
from fno_engine.decisions.models import Signal, SignalType
from fno_engine.models.market_models import FuturesContract, OptionChain

TOP_BUILDUPS = 5

# (lower bound, signal, interpretation), evaluated in descending order with strict ">"
PCR_BANDS = (
    (1.5, "strongly_bullish", "Very high PCR — excessive put writing indicates strong support"),
    (1.2, "bullish", "High PCR — more puts sold, indicating bullish undertone"),
    (0.8, "neutral", "PCR in normal range — no clear directional bias"),
    (0.5, "bearish", "Low PCR — more calls than puts, indicating bearish sentiment"),
)
PCR_FLOOR = ("strongly_bearish", "Very low PCR — excessive call buying, potential top formation")

PCR_SIGNAL_CONFIDENCE = 0.6

BUILDUP_INTERPRETATIONS = {
    OIBuildupType.LONG_BUILDUP: "Long buildup in futures — fresh longs being added, bullish",
    OIBuildupType.SHORT_BUILDUP: "Short buildup in futures — fresh shorts being added, bearish",
    OIBuildupType.LONG_UNWINDING: "Long unwinding in futures — longs exiting, weak sentiment",
    OIBuildupType.SHORT_COVERING: "Short covering in futures — shorts exiting, potential bounce",
}

BUILDUP_SIGNALS = {
    OIBuildupType.LONG_BUILDUP: (SignalType.BUY, 0.6),
    OIBuildupType.SHORT_BUILDUP: (SignalType.SELL, 0.6),
    OIBuildupType.SHORT_COVERING: (SignalType.BUY, 0.45),
    OIBuildupType.LONG_UNWINDING: (SignalType.SELL, 0.45),
}


def classify_pcr(pcr: float) -> tuple[str, str]:
    """
    Map a PCR value onto its 5-band signal.

    Returns:
        Tuple of (signal, interpretation)
    """
    for lower, signal, interpretation in PCR_BANDS:
        if pcr > lower:
            return signal, interpretation
    return PCR_FLOOR


def compute_pcr(chain: Optional[OptionChain]) -> PCRAnalysis:
    """
    Calculate the put-call ratio by open interest and by volume.

    Args:
        chain: Option chain snapshot (may be None)

    Returns:
        PCRAnalysis; all-zero with empty signal for a missing or empty chain
    """
    if chain is None or not chain.contracts:
        return PCRAnalysis()

    total_put_oi = total_call_oi = 0
    total_put_vol = total_call_vol = 0

    for c in chain.contracts:
        if c.is_put:
            total_put_oi += c.oi
            total_put_vol += c.volume
        else:
            total_call_oi += c.oi
            total_call_vol += c.volume

    pcr = total_put_oi / total_call_oi if total_call_oi > 0 else 0.0
    pcr_by_volume = total_put_vol / total_call_vol if total_call_vol > 0 else 0.0
    signal, interpretation = classify_pcr(pcr)

    logger.debug(
        f"PCR {chain.ticker}: OI {total_put_oi}/{total_call_oi} = {pcr:.3f}, "
        f"volume {total_put_vol}/{total_call_vol} = {pcr_by_volume:.3f} ({signal})"
    )

    return PCRAnalysis(
        pcr=pcr,
        pcr_by_volume=pcr_by_volume,
        signal=signal,
        interpretation=interpretation,
    )


def pcr_signal(analysis: PCRAnalysis) -> Signal:
    """Turn a PCR analysis into a Signal (bullish bands BUY, bearish bands SELL)."""
    if analysis.signal in ("strongly_bullish", "bullish"):
        signal_type = SignalType.BUY
    elif analysis.signal in ("bearish", "strongly_bearish"):
        signal_type = SignalType.SELL
    else:
        signal_type = SignalType.NEUTRAL

    return Signal(
        source="PCR",
        type=signal_type,
        confidence=PCR_SIGNAL_CONFIDENCE,
        reason=analysis.interpretation,
    )


def classify_oi_buildup(price_change: float, oi_change: int) -> OIBuildupType:
    """
    Classify an OI change into a buildup regime.

    Args:
        price_change: Price change (sign matters)
        oi_change: Open-interest change (sign matters)

    Returns:
        OIBuildupType; defaults to LONG_BUILDUP when price or OI is unchanged
    """
    if price_change > 0 and oi_change > 0:
        return OIBuildupType.LONG_BUILDUP
    if price_change < 0 and oi_change > 0:
        return OIBuildupType.SHORT_BUILDUP
    if price_change < 0 and oi_change < 0:
        return OIBuildupType.LONG_UNWINDING
    if price_change > 0 and oi_change < 0:
        return OIBuildupType.SHORT_COVERING
    return OIBuildupType.LONG_BUILDUP


def _top_by_oi_change(buildups: list[StrikeBuildup], limit: int) -> tuple[StrikeBuildup, ...]:
    ranked = sorted(buildups, key=lambda b: abs(b.oi_change), reverse=True)
    return tuple(ranked[:limit])


def analyze_oi_buildup(
    chain: Optional[OptionChain],
    futures: Optional[FuturesContract],
) -> OIBuildupAnalysis:
    """
    Classify OI changes across the futures contract and the option chain.

    Put OI increase is treated as support being built (bullish), call OI increase
    as resistance being built (bearish). Strikes are ranked by absolute OI change.

    Args:
        chain: Option chain snapshot (may be None)
        futures: Futures contract (may be None)

    Returns:
        OIBuildupAnalysis
    """
    futures_buildup = OIBuildupData()
    interpretation = ""

    if futures is not None:
        buildup = classify_oi_buildup(futures.change, futures.oi_change)
        oi_change_pct = futures.oi_change / futures.oi * 100 if futures.oi > 0 else 0.0
        futures_buildup = OIBuildupData(
            ticker=futures.ticker,
            buildup=buildup,
            price_change=futures.change,
            oi_change=futures.oi_change,
            oi_change_pct=oi_change_pct,
        )
        interpretation = BUILDUP_INTERPRETATIONS[buildup]
        logger.debug(
            f"Futures {futures.ticker}: price {futures.change:+.2f}, "
            f"OI {futures.oi_change:+d} ({oi_change_pct:+.2f}%) -> {buildup.value}"
        )

    long_build: list[StrikeBuildup] = []
    short_build: list[StrikeBuildup] = []

    if chain is not None:
        for c in chain.contracts:
            if c.oi_change <= 0:
                continue
            entry = StrikeBuildup(
                strike=c.strike_price,
                option_type=c.option_type,
                oi_change=c.oi_change,
                oi_change_pct=c.oi_change_pct,
            )
            if c.is_put:
                long_build.append(entry)
            else:
                short_build.append(entry)

    return OIBuildupAnalysis(
        futures_buildup=futures_buildup,
        top_long_buildup=_top_by_oi_change(long_build, TOP_BUILDUPS),
        top_short_buildup=_top_by_oi_change(short_build, TOP_BUILDUPS),
        interpretation=interpretation,
    )


def buildup_signal(analysis: OIBuildupAnalysis) -> Optional[Signal]:
    """
    Turn the futures-level regime into a Signal.

    Returns:
        Signal (FuturesOI source), or None when no futures regime was classified
    """
    buildup = analysis.futures_buildup.buildup
    if buildup is None:
        return None

    signal_type, confidence = BUILDUP_SIGNALS[buildup]
    return Signal(
        source="FuturesOI",
        type=signal_type,
        confidence=confidence,
        reason=analysis.interpretation,
    )
