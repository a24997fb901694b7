"""
Payoff Curve Synthesis

Evaluates the expiry P&L of a set of option legs across a band of underlying prices.

For each leg:
    intrinsic = max(0, price - strike) for a call, max(0, strike - price) for a put
    BUY  leg contributes (intrinsic - premium) * lot_size * lots
    SELL leg contributes (premium - intrinsic) * lot_size * lots
"""

from typing import Sequence

import numpy as np

from fno_engine.models.market_models import OptionType
from fno_engine.strategy_builder.models import LegAction, OptionLeg, PayoffPoint

DEFAULT_RANGE_PCT = 0.10
DEFAULT_STEPS = 50


def payoff_prices(spot: float, range_pct: float = DEFAULT_RANGE_PCT, steps: int = DEFAULT_STEPS) -> np.ndarray:
    """Underlying prices from spot*(1-range_pct) to spot*(1+range_pct), steps+1 points."""
    return np.linspace(spot * (1 - range_pct), spot * (1 + range_pct), steps + 1)


def compute_payoff(
    legs: Sequence[OptionLeg],
    spot: float,
    lot_size: int,
    range_pct: float = DEFAULT_RANGE_PCT,
    steps: int = DEFAULT_STEPS,
) -> tuple[PayoffPoint, ...]:
    """
    Compute the payoff curve of a strategy at expiry.

    Args:
        legs: Strategy legs
        spot: Current spot price
        lot_size: Exchange lot size
        range_pct: Half-width of the price band as a fraction of spot
        steps: Number of equal steps across the band (steps + 1 points)

    Returns:
        Tuple of PayoffPoint, empty when there are no legs or spot is not positive
    """
    if not legs or spot <= 0 or steps <= 0:
        return ()

    prices = payoff_prices(spot, range_pct, steps)
    pnl = np.zeros_like(prices)

    for leg in legs:
        if leg.option_type == OptionType.CE:
            intrinsic = np.maximum(0.0, prices - leg.strike_price)
        else:
            intrinsic = np.maximum(0.0, leg.strike_price - prices)

        mult = lot_size * leg.lots
        if leg.action == LegAction.BUY:
            pnl += (intrinsic - leg.premium) * mult
        else:
            pnl += (leg.premium - intrinsic) * mult

    return tuple(
        PayoffPoint(underlying_price=float(price), pnl=float(value))
        for price, value in zip(prices, pnl)
    )
