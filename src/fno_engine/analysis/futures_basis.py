"""
Futures Basis Analyzer

Measures the premium/discount of a futures contract over spot and annualizes it.

Purpose: A rich premium signals leveraged long demand, a discount signals hedging
or short pressure.

Usage:
    result = analyze_futures_basis(futures, spot_price=1250.0, days_to_expiry=20)
    days = days_to_expiry("27-Mar-2025", today=date(2025, 3, 7))
"""

from datetime import date, datetime
from typing import Optional

from loguru import logger

from fno_engine.analysis.models import FuturesBasisResult
from fno_engine.decisions.models import Signal, SignalType
from fno_engine.models.market_models import FuturesContract

PREMIUM_THRESHOLD_PCT = 1.0
DISCOUNT_THRESHOLD_PCT = -0.5
DAYS_PER_YEAR = 365

BASIS_SIGNAL_CONFIDENCE = 0.5

# Exchange expiry formats, tried in order
EXPIRY_FORMATS = ("%d-%b-%Y", "%Y-%m-%d", "%d-%m-%Y", "%Y%m%d")


def analyze_futures_basis(
    futures: Optional[FuturesContract],
    spot_price: float,
    days_to_expiry: int,
) -> FuturesBasisResult:
    """
    Evaluate the futures premium or discount.

    Args:
        futures: Futures contract (may be None)
        spot_price: Spot price of the underlying
        days_to_expiry: Calendar days until the futures contract expires

    Returns:
        FuturesBasisResult; all-zero for missing futures or non-positive spot
    """
    if futures is None or spot_price <= 0:
        logger.debug("Futures basis skipped: no futures contract or non-positive spot")
        return FuturesBasisResult()

    basis = futures.ltp - spot_price
    basis_pct = basis / spot_price * 100
    annualized = basis_pct * DAYS_PER_YEAR / days_to_expiry if days_to_expiry > 0 else 0.0

    if basis_pct > PREMIUM_THRESHOLD_PCT:
        signal = "bullish"
    elif basis_pct < DISCOUNT_THRESHOLD_PCT:
        signal = "bearish"
    else:
        signal = "neutral"

    logger.debug(
        f"Futures basis {futures.ticker}: {basis:+.2f} ({basis_pct:+.2f}%, "
        f"annualized {annualized:+.2f}%) -> {signal}"
    )

    return FuturesBasisResult(
        ticker=futures.ticker,
        basis=basis,
        basis_pct=basis_pct,
        signal=signal,
        annualized=annualized,
    )


def basis_signal(result: FuturesBasisResult) -> Optional[Signal]:
    """
    Turn a basis result into a Signal.

    Returns:
        Signal (FuturesBasis source), or None for an empty result
    """
    if not result.signal:
        return None

    if result.signal == "bullish":
        signal_type = SignalType.BUY
        reason = f"Futures at {result.basis_pct:.2f}% premium — longs paying up"
    elif result.signal == "bearish":
        signal_type = SignalType.SELL
        reason = f"Futures at {abs(result.basis_pct):.2f}% discount — hedging pressure"
    else:
        signal_type = SignalType.NEUTRAL
        reason = f"Futures basis {result.basis_pct:.2f}% — near fair value"

    return Signal(
        source="FuturesBasis",
        type=signal_type,
        confidence=BASIS_SIGNAL_CONFIDENCE,
        reason=reason,
    )


def days_to_expiry(expiry: str, today: Optional[date] = None) -> int:
    """
    Calendar days from today until an expiry date string.

    Args:
        expiry: Expiry date (DD-Mon-YYYY, YYYY-MM-DD, DD-MM-YYYY or YYYYMMDD)
        today: Reference date (default: date.today())

    Returns:
        Days to expiry (negative once expired)

    Raises:
        ValueError: If the expiry string matches none of the supported formats
    """
    today = today or date.today()
    text = expiry.strip()

    for fmt in EXPIRY_FORMATS:
        try:
            expiry_date = datetime.strptime(text, fmt).date()
        except ValueError:
            continue
        return (expiry_date - today).days

    raise ValueError(f"Unrecognised expiry date: {expiry!r}")
