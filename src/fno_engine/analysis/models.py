"""
Analysis Result Models

This module provides the result records produced by the derivatives analytics.
Uses dataclasses with slots=True for performance (internal data, validated on entry).

Key patterns:
- dataclass(slots=True, frozen=True): results are immutable once returned
- Zero-valued defaults: degenerate input yields an all-zero record, never None
- to_dict(): stable wire field names for the report and API layers
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from fno_engine.decisions.models import Recommendation, Signal
from fno_engine.models.market_models import OptionType


class AnalysisType(str, Enum):
    """Kind of analysis that produced a result."""

    TECHNICAL = "technical"
    FUNDAMENTAL = "fundamental"
    DERIVATIVES = "derivatives"
    SENTIMENT = "sentiment"
    RISK = "risk"
    COMPOSITE = "composite"


class OIBuildupType(str, Enum):
    """
    Open-interest buildup regime.

    Classified from the sign of the price change and the sign of the OI change.
    """

    LONG_BUILDUP = "long_buildup"  # Price up, OI up
    SHORT_BUILDUP = "short_buildup"  # Price down, OI up
    LONG_UNWINDING = "long_unwinding"  # Price down, OI down
    SHORT_COVERING = "short_covering"  # Price up, OI down


@dataclass(slots=True, frozen=True)
class OISupportResistance:
    """
    OI-based support and resistance levels.

    Attributes:
        max_put_oi_strike: Strike with the highest put OI (strongest support)
        max_call_oi_strike: Strike with the highest call OI (strongest resistance)
        top_put_strikes: Top 3 support levels by put OI
        top_call_strikes: Top 3 resistance levels by call OI
    """

    max_put_oi_strike: float = 0.0
    max_call_oi_strike: float = 0.0
    top_put_strikes: tuple[float, ...] = ()
    top_call_strikes: tuple[float, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_put_oi_strike": self.max_put_oi_strike,
            "max_call_oi_strike": self.max_call_oi_strike,
            "top_put_strikes": list(self.top_put_strikes),
            "top_call_strikes": list(self.top_call_strikes),
        }


@dataclass(slots=True, frozen=True)
class ChainAnalysis:
    """
    Derived insights from one option-chain snapshot.

    Attributes:
        ticker: Underlying ticker
        spot_price: Spot price of the underlying
        pcr: Put-call ratio by open interest
        max_pain: Strike minimizing option-writer payout
        iv_skew: PE ATM IV minus CE ATM IV
        atm_strike: Chain strike closest to spot
        atm_iv: Average of CE and PE IV at the ATM strike
        oi_sr_levels: OI-based support/resistance
        sentiment: "bullish", "bearish" or "neutral" (empty for no data)
    """

    ticker: str = ""
    spot_price: float = 0.0
    pcr: float = 0.0
    max_pain: float = 0.0
    iv_skew: float = 0.0
    atm_strike: float = 0.0
    atm_iv: float = 0.0
    oi_sr_levels: OISupportResistance = field(default_factory=OISupportResistance)
    sentiment: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "spot_price": self.spot_price,
            "pcr": self.pcr,
            "max_pain": self.max_pain,
            "iv_skew": self.iv_skew,
            "atm_strike": self.atm_strike,
            "atm_iv": self.atm_iv,
            "oi_sr_levels": self.oi_sr_levels.to_dict(),
            "sentiment": self.sentiment,
        }


@dataclass(slots=True, frozen=True)
class PCRAnalysis:
    """
    Put-call ratio analysis.

    Attributes:
        pcr: Total put OI / total call OI (0 when call OI is 0)
        pcr_by_volume: Total put volume / total call volume (0 when call volume is 0)
        signal: strongly_bullish, bullish, neutral, bearish or strongly_bearish
        interpretation: Fixed sentence describing the band
    """

    pcr: float = 0.0
    pcr_by_volume: float = 0.0
    signal: str = ""
    interpretation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "pcr": self.pcr,
            "pcr_by_volume": self.pcr_by_volume,
            "signal": self.signal,
            "interpretation": self.interpretation,
        }


@dataclass(slots=True, frozen=True)
class StrikeBuildup:
    """OI change at a single strike."""

    strike: float
    option_type: OptionType
    oi_change: int
    oi_change_pct: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "strike": self.strike,
            "option_type": self.option_type.value,
            "oi_change": self.oi_change,
            "oi_change_pct": self.oi_change_pct,
        }


@dataclass(slots=True, frozen=True)
class OIBuildupData:
    """
    Ticker-level OI buildup classification (from the futures contract).

    ``buildup`` is None when no futures contract was supplied.
    """

    ticker: str = ""
    buildup: Optional[OIBuildupType] = None
    price_change: float = 0.0
    oi_change: int = 0
    oi_change_pct: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "buildup": self.buildup.value if self.buildup else "",
            "price_change": self.price_change,
            "oi_change": self.oi_change,
            "oi_change_pct": self.oi_change_pct,
        }


@dataclass(slots=True, frozen=True)
class OIBuildupAnalysis:
    """
    Complete OI buildup analysis.

    Attributes:
        futures_buildup: Futures-level regime
        top_long_buildup: Top 5 put strikes with OI increase (support being built)
        top_short_buildup: Top 5 call strikes with OI increase (resistance being built)
        interpretation: Sentence for the futures regime (empty without futures)
    """

    futures_buildup: OIBuildupData = field(default_factory=OIBuildupData)
    top_long_buildup: tuple[StrikeBuildup, ...] = ()
    top_short_buildup: tuple[StrikeBuildup, ...] = ()
    interpretation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "futures_buildup": self.futures_buildup.to_dict(),
            "top_long_buildup": [b.to_dict() for b in self.top_long_buildup],
            "top_short_buildup": [b.to_dict() for b in self.top_short_buildup],
            "interpretation": self.interpretation,
        }


@dataclass(slots=True, frozen=True)
class FuturesBasisResult:
    """
    Futures premium/discount analysis.

    Attributes:
        ticker: Futures ticker
        basis: Futures LTP - spot
        basis_pct: Basis as percent of spot
        signal: "bullish" (premium), "bearish" (discount) or "neutral"
        annualized: Annualized basis percent
    """

    ticker: str = ""
    basis: float = 0.0
    basis_pct: float = 0.0
    signal: str = ""
    annualized: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "basis": self.basis,
            "basis_pct": self.basis_pct,
            "signal": self.signal,
            "annualized": self.annualized,
        }


@dataclass(slots=True, frozen=True)
class AnalysisResult:
    """
    Output of one analysis call.

    Attributes:
        ticker: Underlying ticker
        type: Analysis kind (DERIVATIVES here)
        agent_name: Name of the producing agent
        signals: Individual signals that were aggregated
        recommendation: Aggregated recommendation
        confidence: Aggregated confidence in [0, 1]
        summary: Human-readable summary
        details: Nested sub-results keyed by name (read-only mapping)
        timestamp: When the analysis was produced

    Raises:
        ValueError: If confidence is outside [0, 1]
    """

    ticker: str
    type: AnalysisType
    agent_name: str
    signals: tuple[Signal, ...]
    recommendation: Recommendation
    confidence: float
    summary: str
    details: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not (0.0 <= self.confidence <= 1.0):
            raise ValueError(f"Confidence must be between 0 and 1, got {self.confidence}")

        # Detail bag is exposed read-only
        object.__setattr__(self, "signals", tuple(self.signals))
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def to_dict(self) -> dict[str, Any]:
        """Serialize with stable wire field names."""
        return {
            "ticker": self.ticker,
            "type": self.type.value,
            "agent_name": self.agent_name,
            "signals": [s.to_dict() for s in self.signals],
            "recommendation": self.recommendation.value,
            "confidence": self.confidence,
            "summary": self.summary,
            "details": {
                key: value.to_dict() if hasattr(value, "to_dict") else value
                for key, value in self.details.items()
            },
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"AnalysisResult(ticker={self.ticker}, type={self.type.value}, "
            f"recommendation={self.recommendation.name}, confidence={self.confidence:.2f}, "
            f"signals={len(self.signals)})"
        )
