"""
Weighted Signal Voting

This module provides the confidence-weighted voting primitive that turns a set of
directional signals into a single recommendation. Every analysis domain supplies
its own signal list and shares this banding logic.

Voting:
- Each signal contributes its confidence as weight
- net = (sum BUY weights - sum SELL weights) / sum of all weights
- NEUTRAL signals dilute the net score without pushing it either way

Bands (checked in order):
    net > 0.3   → MODERATE_BUY,  confidence 0.6 + net * 0.3
    net > 0.1   → MODERATE_BUY,  confidence 0.5
    net < -0.3  → MODERATE_SELL, confidence 0.6 + |net| * 0.3
    net < -0.1  → MODERATE_SELL, confidence 0.5
    otherwise   → HOLD,          confidence 0.4

Usage:
    result = weighted_vote([(SignalType.BUY, 0.6), (SignalType.SELL, 0.4)])
    result = aggregate_signals(signals)
"""

from typing import Iterable

from loguru import logger

from fno_engine.decisions.models import Recommendation, Signal, SignalType, VoteResult

STRONG_BAND = 0.3
MODERATE_BAND = 0.1


def weighted_vote(votes: Iterable[tuple[SignalType, float]]) -> VoteResult:
    """
    Combine (direction, confidence) pairs into one recommendation.

    Args:
        votes: Iterable of (SignalType, confidence) pairs

    Returns:
        VoteResult with net score, recommendation and confidence.
        With no votes (or zero total weight) the result is HOLD at confidence 0.
    """
    buy_score = 0.0
    sell_score = 0.0
    total = 0.0
    count = 0

    for signal_type, weight in votes:
        count += 1
        total += weight
        if signal_type == SignalType.BUY:
            buy_score += weight
        elif signal_type == SignalType.SELL:
            sell_score += weight

    if count == 0 or total == 0:
        logger.debug("No weighted votes to aggregate, returning HOLD")
        return VoteResult(net_score=0.0, recommendation=Recommendation.HOLD, confidence=0.0)

    net = (buy_score - sell_score) / total

    if net > STRONG_BAND:
        result = VoteResult(net, Recommendation.MODERATE_BUY, 0.6 + net * 0.3, SignalType.BUY)
    elif net > MODERATE_BAND:
        result = VoteResult(net, Recommendation.MODERATE_BUY, 0.5, SignalType.BUY)
    elif net < -STRONG_BAND:
        result = VoteResult(net, Recommendation.MODERATE_SELL, 0.6 + (-net) * 0.3, SignalType.SELL)
    elif net < -MODERATE_BAND:
        result = VoteResult(net, Recommendation.MODERATE_SELL, 0.5, SignalType.SELL)
    else:
        result = VoteResult(net, Recommendation.HOLD, 0.4, SignalType.NEUTRAL)

    logger.debug(
        f"Weighted vote over {count} signals: buy={buy_score:.2f}, sell={sell_score:.2f}, "
        f"total={total:.2f} -> {result}"
    )
    return result


def aggregate_signals(signals: Iterable[Signal]) -> VoteResult:
    """
    Run the weighted vote over Signal objects.

    Args:
        signals: Signals from any analysis lens

    Returns:
        VoteResult (see weighted_vote)
    """
    return weighted_vote((s.type, s.confidence) for s in signals)
