"""
Signal Decisions Package

This package provides the signal types and the weighted-voting primitive shared
by every analysis domain.

Key exports:
- Signal, SignalType, Recommendation, VoteResult: Data models
- weighted_vote, aggregate_signals: Confidence-weighted voting
"""

from fno_engine.decisions.models import Recommendation, Signal, SignalType, VoteResult
from fno_engine.decisions.voting import aggregate_signals, weighted_vote

__all__ = [
    "Recommendation",
    "Signal",
    "SignalType",
    "VoteResult",
    "aggregate_signals",
    "weighted_vote",
]
