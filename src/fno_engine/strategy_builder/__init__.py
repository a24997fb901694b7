"""
Strategy Builder Package

Builds multi-leg option strategies from an option chain and synthesizes their payoff curves.

Key exports:
- BullCallSpreadBuilder, IronCondorBuilder: Chain-driven builders
- build_bull_call_spread, build_iron_condor: Convenience functions
- OptionLeg, OptionStrategy, PayoffPoint: Data models
- compute_payoff: Payoff curve synthesis
"""

from fno_engine.strategy_builder.builders import (
    BullCallSpreadBuilder,
    IronCondorBuilder,
    StrategyBuilder,
    build_bull_call_spread,
    build_iron_condor,
)
from fno_engine.strategy_builder.models import (
    LegAction,
    OptionLeg,
    OptionStrategy,
    PayoffPoint,
    StrategyType,
)
from fno_engine.strategy_builder.payoff import compute_payoff

__all__ = [
    "BullCallSpreadBuilder",
    "IronCondorBuilder",
    "StrategyBuilder",
    "build_bull_call_spread",
    "build_iron_condor",
    "LegAction",
    "OptionLeg",
    "OptionStrategy",
    "PayoffPoint",
    "StrategyType",
    "compute_payoff",
]
