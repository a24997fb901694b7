"""
Option Chain Analytics

Derives ATM strike, ATM implied volatility, IV skew, OI-based support/resistance,
max pain and a PCR sentiment label from a single option-chain snapshot.

Usage:
    analysis = analyze_option_chain(chain)
    max_pain = compute_max_pain(chain.contracts)
    atm = find_atm_strike(chain.contracts, chain.spot_price)
"""

import math
from typing import Iterable, Optional, Sequence

from loguru import logger

from fno_engine.analysis.models import ChainAnalysis, OISupportResistance
from fno_engine.analysis.pcr_oi import compute_pcr
from fno_engine.models.market_models import OptionChain, OptionContract, OptionType

# Coarse 3-band sentiment; the 5-band PCR signal in pcr_oi uses its own thresholds.
BULLISH_PCR = 1.2
BEARISH_PCR = 0.7

TOP_OI_LEVELS = 3


def find_atm_strike(contracts: Sequence[OptionContract], spot: float) -> float:
    """
    Find the chain strike closest to spot.

    Ties (two strikes equidistant from spot) resolve to the lower strike,
    so the result does not depend on contract order.

    Args:
        contracts: Option contracts of any type
        spot: Spot price of the underlying

    Returns:
        ATM strike, or 0.0 if there are no contracts or spot is not positive
    """
    if not contracts or spot <= 0:
        return 0.0

    best = min(contracts, key=lambda c: (abs(c.strike_price - spot), c.strike_price))
    return best.strike_price


def find_nearest_strike(
    contracts: Iterable[OptionContract],
    option_type: OptionType,
    target: float,
) -> float:
    """
    Find the strike of the given type closest to target.

    Args:
        contracts: Option contracts
        option_type: CE or PE
        target: Target strike

    Returns:
        Nearest strike (lower strike on ties), or 0.0 if no contract of that type exists
    """
    best = 0.0
    best_diff = math.inf

    for c in contracts:
        if c.option_type != option_type:
            continue
        diff = abs(c.strike_price - target)
        if diff < best_diff or (diff == best_diff and c.strike_price < best):
            best_diff = diff
            best = c.strike_price

    return best


def compute_max_pain(contracts: Iterable[OptionContract]) -> float:
    """
    Calculate the max pain strike.

    For each candidate settlement strike S, the total writer payout is the sum of
    (S - K) * call_OI(K) over strikes K below S plus (K - S) * put_OI(K) over
    strikes K above S. The strike with the smallest payout wins; on equal payout
    the lowest strike wins.

    Args:
        contracts: Option contracts of one expiry

    Returns:
        Max pain strike, or 0.0 for an empty input
    """
    call_oi: dict[float, int] = {}
    put_oi: dict[float, int] = {}

    for c in contracts:
        book = call_oi if c.is_call else put_oi
        book[c.strike_price] = book.get(c.strike_price, 0) + c.oi
        # Both books carry every strike of the chain
        (put_oi if c.is_call else call_oi).setdefault(c.strike_price, 0)

    strikes = sorted(call_oi)
    if not strikes:
        return 0.0

    min_pain = math.inf
    max_pain_strike = 0.0

    for expiry in strikes:
        total_pain = 0.0
        for s in strikes:
            if s < expiry:
                total_pain += (expiry - s) * call_oi[s]
            elif s > expiry:
                total_pain += (s - expiry) * put_oi[s]

        if total_pain < min_pain:
            min_pain = total_pain
            max_pain_strike = expiry

    logger.debug(f"Max pain {max_pain_strike} over {len(strikes)} strikes (payout {min_pain:,.0f})")
    return max_pain_strike


def compute_oi_support_resistance(
    contracts: Iterable[OptionContract],
    top_n: int = TOP_OI_LEVELS,
) -> OISupportResistance:
    """
    Rank strikes by aggregate OI per side.

    Calls with the largest OI mark resistance, puts with the largest OI mark support.

    Args:
        contracts: Option contracts
        top_n: Number of levels to keep per side

    Returns:
        OISupportResistance with max-OI strikes and top levels
    """
    call_oi: dict[float, int] = {}
    put_oi: dict[float, int] = {}

    for c in contracts:
        book = call_oi if c.is_call else put_oi
        book[c.strike_price] = book.get(c.strike_price, 0) + c.oi

    # Highest OI first, lower strike first on equal OI
    calls = sorted(call_oi.items(), key=lambda kv: (-kv[1], kv[0]))
    puts = sorted(put_oi.items(), key=lambda kv: (-kv[1], kv[0]))

    return OISupportResistance(
        max_put_oi_strike=puts[0][0] if puts else 0.0,
        max_call_oi_strike=calls[0][0] if calls else 0.0,
        top_put_strikes=tuple(strike for strike, _ in puts[:top_n]),
        top_call_strikes=tuple(strike for strike, _ in calls[:top_n]),
    )


def pcr_sentiment(pcr: float) -> str:
    """Map PCR to the coarse sentiment label (high PCR means puts are being written)."""
    if pcr > BULLISH_PCR:
        return "bullish"
    if pcr < BEARISH_PCR:
        return "bearish"
    return "neutral"


def analyze_option_chain(chain: Optional[OptionChain]) -> ChainAnalysis:
    """
    Perform the chain-level analysis.

    PCR and max pain are recomputed from the contracts; the chain's precomputed
    fields are not trusted.

    Args:
        chain: Option chain snapshot (may be None)

    Returns:
        ChainAnalysis (all-zero for a missing or empty chain)
    """
    if chain is None or not chain.contracts:
        logger.warning("Option chain analysis skipped: no contracts")
        return ChainAnalysis()

    contracts = chain.contracts
    atm_strike = find_atm_strike(contracts, chain.spot_price)

    atm_call = chain.find(OptionType.CE, atm_strike)
    atm_put = chain.find(OptionType.PE, atm_strike)
    call_iv = atm_call.iv if atm_call else 0.0
    put_iv = atm_put.iv if atm_put else 0.0

    atm_iv = 0.0
    iv_skew = 0.0
    if call_iv > 0 and put_iv > 0:
        atm_iv = (call_iv + put_iv) / 2
        iv_skew = put_iv - call_iv

    pcr = compute_pcr(chain).pcr

    analysis = ChainAnalysis(
        ticker=chain.ticker,
        spot_price=chain.spot_price,
        pcr=pcr,
        max_pain=compute_max_pain(contracts),
        iv_skew=iv_skew,
        atm_strike=atm_strike,
        atm_iv=atm_iv,
        oi_sr_levels=compute_oi_support_resistance(contracts),
        sentiment=pcr_sentiment(pcr),
    )

    logger.debug(
        f"Chain analysis {chain.ticker}: ATM={analysis.atm_strike}, ATM IV={analysis.atm_iv:.2f}, "
        f"skew={analysis.iv_skew:.2f}, PCR={analysis.pcr:.2f} ({analysis.sentiment})"
    )
    return analysis
