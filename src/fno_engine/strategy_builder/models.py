"""
Strategy Data Models

This module provides data models for multi-leg option strategies built from a chain.
Uses dataclasses with slots=True for performance (internal data, validated on entry).

Key patterns:
- dataclass(slots=True, frozen=True) for immutable strategy snapshots
- __post_init__ validation for data integrity
- Type hints for all fields

Decision tree:
    Is this data internal to my process?
    ├─ Yes → Use dataclass (performance matters) ← WE ARE HERE
    └─ No → Use Pydantic (validation critical)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from fno_engine.models.market_models import OptionType


class StrategyType(str, Enum):
    """
    Strategy type enum.

    Types of option strategies the builders construct.
    """

    BULL_CALL_SPREAD = "bull_call_spread"
    IRON_CONDOR = "iron_condor"


class LegAction(str, Enum):
    """Leg action enum (BUY or SELL)."""

    BUY = "BUY"
    SELL = "SELL"


@dataclass(slots=True, frozen=True)
class OptionLeg:
    """
    Option leg data model.

    Represents a single leg of a strategy, priced at construction time.

    Attributes:
        option_type: CE or PE
        strike_price: Strike price
        action: BUY or SELL
        lots: Lot multiplier for this leg
        premium: Premium per unit (the contract's LTP when the strategy was built)

    Raises:
        ValueError: If strike is not positive, lots < 1 or premium is negative
    """

    option_type: OptionType
    strike_price: float
    action: LegAction
    lots: int = 1
    premium: float = 0.0

    def __post_init__(self):
        # Validate strike is positive
        if self.strike_price <= 0:
            raise ValueError(f"Strike must be positive, got {self.strike_price}")

        # Validate lots is positive (action separates direction)
        if self.lots < 1:
            raise ValueError(f"Lots must be positive, got {self.lots}")

        if self.premium < 0:
            raise ValueError(f"Premium cannot be negative, got {self.premium}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "option_type": self.option_type.value,
            "strike_price": self.strike_price,
            "action": self.action.value,
            "lots": self.lots,
            "premium": self.premium,
        }

    def __repr__(self) -> str:
        return (
            f"OptionLeg({self.action.value} {self.lots}x "
            f"{self.option_type.value} {self.strike_price} @ {self.premium})"
        )


@dataclass(slots=True, frozen=True)
class PayoffPoint:
    """One point of a payoff curve."""

    underlying_price: float
    pnl: float

    def to_dict(self) -> dict[str, float]:
        return {"underlying_price": self.underlying_price, "pnl": self.pnl}


@dataclass(slots=True, frozen=True)
class OptionStrategy:
    """
    Strategy data model.

    A strategy without legs is a placeholder: the builder could not locate the
    contracts it needed, but the strategy still carries its name.

    Attributes:
        name: Display name (e.g., "Bull Call Spread")
        strategy_type: Strategy type
        legs: Leg specifications
        net_premium: Positive = net credit received, negative = net debit paid
        max_profit: Maximum profit for the whole position
        max_loss: Maximum loss for the whole position
        breakevens: Underlying prices where P&L crosses zero
        payoff: P&L curve across the underlying range
    """

    name: str
    strategy_type: Optional[StrategyType] = None
    legs: tuple[OptionLeg, ...] = ()
    net_premium: float = 0.0
    max_profit: float = 0.0
    max_loss: float = 0.0
    breakevens: tuple[float, ...] = ()
    payoff: tuple[PayoffPoint, ...] = ()

    def __post_init__(self):
        # Validate name is not empty
        if not self.name or not self.name.strip():
            raise ValueError("Strategy name cannot be empty")

    @property
    def is_empty(self) -> bool:
        """True for a named placeholder with no legs."""
        return not self.legs

    def to_dict(self) -> dict[str, Any]:
        data = {
            "name": self.name,
            "legs": [leg.to_dict() for leg in self.legs],
            "max_profit": self.max_profit,
            "max_loss": self.max_loss,
            "breakevens": list(self.breakevens),
            "net_premium": self.net_premium,
        }
        if self.payoff:
            data["payoff"] = [p.to_dict() for p in self.payoff]
        return data

    def __repr__(self) -> str:
        return (
            f"OptionStrategy(name={self.name}, legs={len(self.legs)}, "
            f"net_premium={self.net_premium:.2f}, max_profit={self.max_profit:.2f}, "
            f"max_loss={self.max_loss:.2f})"
        )
