"""
Market Data Models Package

This package provides validated input records for the derivatives analytics:
- Pydantic models: For validating option-chain and futures snapshots from the data layer

Usage:
    from fno_engine.models import OptionChain, OptionContract, FuturesContract
"""

from fno_engine.models.market_models import (
    FuturesContract,
    Greeks,
    OptionChain,
    OptionContract,
    OptionType,
)

__all__ = [
    "OptionType",
    "Greeks",
    "OptionContract",
    "OptionChain",
    "FuturesContract",
]
