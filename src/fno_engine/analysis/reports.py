"""
Option Chain Report Views

JSON-ready views of an option chain for the report and API layers:
- chain_frame / strike_table: Polars tables (one row per contract / per strike)
- filter_atm_contracts: Contracts near the money
- chain_summary: Compact summary instead of the full chain (which is too large to ship)
"""

from typing import Any, Optional

import polars as pl

from fno_engine.analysis.option_chain import compute_max_pain
from fno_engine.analysis.pcr_oi import compute_pcr
from fno_engine.models.market_models import OptionChain, OptionContract

ATM_WINDOW_PCT = 0.05
MAX_ATM_CONTRACTS = 20

CHAIN_SCHEMA = {
    "strike_price": pl.Float64,
    "option_type": pl.Utf8,
    "ltp": pl.Float64,
    "volume": pl.Int64,
    "oi": pl.Int64,
    "oi_change": pl.Int64,
    "iv": pl.Float64,
}

SIDE_COLUMNS = ("ltp", "volume", "oi", "oi_change", "iv")


def chain_frame(chain: Optional[OptionChain]) -> pl.DataFrame:
    """One row per contract, in chain order."""
    if chain is None or not chain.contracts:
        return pl.DataFrame(schema=CHAIN_SCHEMA)

    return pl.DataFrame(
        {
            "strike_price": [c.strike_price for c in chain.contracts],
            "option_type": [c.option_type.value for c in chain.contracts],
            "ltp": [c.ltp for c in chain.contracts],
            "volume": [c.volume for c in chain.contracts],
            "oi": [c.oi for c in chain.contracts],
            "oi_change": [c.oi_change for c in chain.contracts],
            "iv": [c.iv for c in chain.contracts],
        },
        schema=CHAIN_SCHEMA,
    )


def _side(frame: pl.DataFrame, option_type: str, prefix: str) -> pl.DataFrame:
    return frame.filter(pl.col("option_type") == option_type).select(
        pl.col("strike_price"),
        *[pl.col(name).alias(f"{prefix}_{name}") for name in SIDE_COLUMNS],
    )


def strike_table(chain: Optional[OptionChain]) -> pl.DataFrame:
    """
    Strike-wise table with CE and PE columns side by side.

    Columns: strike_price, ce_ltp, ce_volume, ce_oi, ce_oi_change, ce_iv and the
    same five for pe. Strikes listed on one side only get zeros on the other.
    Sorted by strike ascending.
    """
    frame = chain_frame(chain)
    calls = _side(frame, "CE", "ce")
    puts = _side(frame, "PE", "pe")

    return (
        calls.join(puts, on="strike_price", how="full", coalesce=True)
        .fill_null(0)
        .sort("strike_price")
    )


def filter_atm_contracts(
    chain: OptionChain,
    window_pct: float = ATM_WINDOW_PCT,
    limit: int = MAX_ATM_CONTRACTS,
) -> list[OptionContract]:
    """
    Contracts with strikes within window_pct of spot, in chain order.

    Args:
        chain: Option chain snapshot
        window_pct: Window half-width as a fraction of spot
        limit: Maximum number of contracts returned

    Returns:
        Up to ``limit`` contracts near the money
    """
    spot = chain.spot_price
    near = [c for c in chain.contracts if abs(c.strike_price - spot) < spot * window_pct]
    return near[:limit]


def chain_summary(
    chain: OptionChain,
    window_pct: float = ATM_WINDOW_PCT,
    limit: int = MAX_ATM_CONTRACTS,
) -> dict[str, Any]:
    """
    Summarize a chain for transport: headline numbers plus the near-the-money slice.

    PCR and max pain are recomputed from the contracts.
    """
    summary: dict[str, Any] = {
        "ticker": chain.ticker,
        "spot_price": chain.spot_price,
        "expiry": chain.expiry_date,
        "contracts": len(chain.contracts),
        "pcr": compute_pcr(chain).pcr,
        "max_pain": compute_max_pain(chain.contracts),
    }

    if chain.contracts:
        atm_contracts = filter_atm_contracts(chain, window_pct, limit)
        summary["atm_contracts"] = [c.model_dump(mode="json") for c in atm_contracts]

        spot = chain.spot_price
        summary["strike_table"] = (
            strike_table(chain)
            .filter((pl.col("strike_price") - spot).abs() < spot * window_pct)
            .to_dicts()
        )

    return summary
