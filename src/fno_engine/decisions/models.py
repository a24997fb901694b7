"""
Signal Data Models and Enums

This module provides the signal and recommendation types shared by every
analysis domain (derivatives, fundamental, sentiment, technical).
Uses dataclasses with slots=True for performance (internal data, validated on entry).

Key patterns:
- dataclass(slots=True, frozen=True): signals are immutable values
- __post_init__ validation for data integrity
- Type hints for all fields

Decision tree:
    Is this data internal to my process?
    ├─ Yes → Use dataclass (performance matters) ← WE ARE HERE
    └─ No → Use Pydantic (validation critical)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SignalType(str, Enum):
    """Direction of a single trading signal."""

    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


class Recommendation(str, Enum):
    """
    Aggregated recommendation enum.

    Wire values keep the short BUY/SELL spelling for the moderate bands.
    """

    STRONG_BUY = "STRONG_BUY"
    MODERATE_BUY = "BUY"
    HOLD = "HOLD"
    MODERATE_SELL = "SELL"
    STRONG_SELL = "STRONG_SELL"


@dataclass(slots=True, frozen=True)
class Signal:
    """
    Signal data model.

    A single directional vote produced by one analysis lens.

    Attributes:
        source: Origin tag (e.g. "PCR", "MaxPain", "FuturesOI", "IVSkew")
        type: BUY, SELL or NEUTRAL
        confidence: Weight of this vote in [0, 1]
        reason: Human-readable rationale

    Raises:
        ValueError: If source is empty or confidence is outside [0, 1]
    """

    source: str
    type: SignalType
    confidence: float
    reason: str = ""

    def __post_init__(self):
        if not self.source or not self.source.strip():
            raise ValueError("Signal source cannot be empty")

        if not isinstance(self.type, SignalType):
            raise ValueError(f"Invalid signal type: {self.type}")

        if not (0.0 <= self.confidence <= 1.0):
            raise ValueError(f"Signal confidence must be between 0 and 1, got {self.confidence}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "type": self.type.value,
            "confidence": self.confidence,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        return f"Signal({self.source}: {self.type.value} @ {self.confidence:.2f})"


@dataclass(slots=True, frozen=True)
class VoteResult:
    """
    Outcome of a weighted vote over signals.

    Attributes:
        net_score: (buy weight - sell weight) / total weight, in [-1, 1]
        recommendation: Banded recommendation
        confidence: Combined confidence in [0, 1]
        direction: Overall signal direction implied by the recommendation
    """

    net_score: float
    recommendation: Recommendation
    confidence: float
    direction: SignalType = SignalType.NEUTRAL

    def __repr__(self) -> str:
        return (
            f"VoteResult(net={self.net_score:+.3f}, "
            f"recommendation={self.recommendation.name}, confidence={self.confidence:.2f})"
        )
