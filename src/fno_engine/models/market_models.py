"""
Pydantic Models for Option Chain and Futures Snapshots

This module provides Pydantic models for validating option-chain and futures data
handed over by the data layer. Pydantic is used here (instead of dataclasses) because
exchange data is external and can be malformed. Field validation ensures data
integrity before it enters the analytics.

Key patterns:
- Field constraints: ge/gt for non-negative OI, volume and prices
- Custom validators: option type aliases, unique (strike, type) pairs
- frozen=True: Snapshots are read-only once constructed

Decision tree:
    Does this data come from outside my process?
    ├─ Yes → Use Pydantic (validation critical) ← WE ARE HERE
    └─ No → Use dataclass (performance matters)
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class OptionType(str, Enum):
    """Option type enum (CE = call, PE = put)."""

    CE = "CE"
    PE = "PE"


_OPTION_TYPE_ALIASES = {
    "CE": OptionType.CE,
    "C": OptionType.CE,
    "CALL": OptionType.CE,
    "PE": OptionType.PE,
    "P": OptionType.PE,
    "PUT": OptionType.PE,
}


class Greeks(BaseModel):
    """
    Option Greeks as supplied by the data layer.

    Greeks are never computed here; they are carried through when present.
    """

    delta: Optional[float] = None
    gamma: Optional[float] = None
    theta: Optional[float] = None
    vega: Optional[float] = None
    rho: Optional[float] = None

    class Config:
        frozen = True


class OptionContract(BaseModel):
    """
    A single option contract (CE or PE) at a strike.

    Attributes:
        strike_price: Strike price (currency units, must be positive)
        option_type: CE or PE (CALL/PUT/C/P accepted)
        expiry_date: Expiry tag as delivered by the exchange
        ltp: Last traded price
        volume: Traded volume
        oi: Open interest (non-negative)
        oi_change: Change in open interest since previous session (signed)
        oi_change_pct: OI change in percent
        iv: Implied volatility in percentage points (13.5 means 13.5%)
        greeks: Optional Greeks

    Raises:
        ValueError: If OI/volume are negative or the option type is unknown
    """

    strike_price: float = Field(..., gt=0, description="Strike price")
    option_type: OptionType
    expiry_date: str = ""
    ltp: float = Field(0.0, ge=0, description="Last traded price")
    change: float = 0.0
    change_pct: float = 0.0
    volume: int = Field(0, ge=0)
    oi: int = Field(0, ge=0, description="Open interest")
    oi_change: int = 0
    oi_change_pct: float = 0.0
    bid_price: float = Field(0.0, ge=0)
    ask_price: float = Field(0.0, ge=0)
    bid_qty: int = Field(0, ge=0)
    ask_qty: int = Field(0, ge=0)
    iv: float = Field(0.0, ge=0, description="Implied volatility (percentage points)")
    greeks: Optional[Greeks] = None

    @field_validator("option_type", mode="before")
    def normalize_option_type(cls, v):
        """
        Map broker spellings onto CE/PE.

        Different feeds label calls and puts as CE/PE, CALL/PUT or C/P.

        Raises:
            ValueError: If the value is not a recognised option type
        """
        if isinstance(v, OptionType):
            return v
        key = str(v).strip().upper()
        if key not in _OPTION_TYPE_ALIASES:
            raise ValueError(f"Unknown option type: {v!r}")
        return _OPTION_TYPE_ALIASES[key]

    @property
    def is_call(self) -> bool:
        return self.option_type == OptionType.CE

    @property
    def is_put(self) -> bool:
        return self.option_type == OptionType.PE

    class Config:
        frozen = True


class OptionChain(BaseModel):
    """
    Full option chain for a ticker on one expiry date.

    The precomputed aggregates (total OI, PCR, max pain) come from the data layer
    and may be stale; the analytics recompute them from ``contracts``.

    Raises:
        ValueError: If two contracts share the same (strike, type) pair
    """

    ticker: str = ""
    spot_price: float = Field(0.0, ge=0)
    expiry_date: str = ""
    expiries: tuple[str, ...] = ()
    contracts: tuple[OptionContract, ...] = ()
    total_ce_oi: int = Field(0, ge=0)
    total_pe_oi: int = Field(0, ge=0)
    pcr: float = 0.0
    max_pain: float = 0.0
    fetched_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_unique_contracts(self):
        """Reject chains that carry the same (strike, type) twice."""
        seen = set()
        for contract in self.contracts:
            key = (contract.strike_price, contract.option_type)
            if key in seen:
                raise ValueError(
                    f"Duplicate contract in chain: {contract.option_type.value} {contract.strike_price}"
                )
            seen.add(key)
        return self

    def calls(self) -> list[OptionContract]:
        """Return CE contracts in chain order."""
        return [c for c in self.contracts if c.is_call]

    def puts(self) -> list[OptionContract]:
        """Return PE contracts in chain order."""
        return [c for c in self.contracts if c.is_put]

    def strikes(self) -> list[float]:
        """Return the distinct strikes of the chain, ascending."""
        return sorted({c.strike_price for c in self.contracts})

    def find(self, option_type: OptionType, strike: float) -> Optional[OptionContract]:
        """Return the contract for (type, strike), or None."""
        for c in self.contracts:
            if c.option_type == option_type and c.strike_price == strike:
                return c
        return None

    class Config:
        frozen = True


class FuturesContract(BaseModel):
    """
    A single futures contract snapshot.

    Attributes:
        ticker: Underlying ticker
        ltp: Last traded price
        change: Price change since previous close
        oi: Open interest
        oi_change: Change in open interest (signed)
        lot_size: Exchange lot size
    """

    ticker: str = ""
    expiry_date: str = ""
    ltp: float = Field(0.0, ge=0)
    change: float = 0.0
    change_pct: float = 0.0
    volume: int = Field(0, ge=0)
    oi: int = Field(0, ge=0)
    oi_change: int = 0
    lot_size: int = Field(0, ge=0)
    fetched_at: Optional[datetime] = None

    class Config:
        frozen = True
