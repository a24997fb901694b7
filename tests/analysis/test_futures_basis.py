"""
Unit Tests for Futures Basis Analyzer

Test cases:
- test_premium_is_bullish: LTP 1280, spot 1250, 20 days -> 30 / 2.4% / 43.8% / bullish
- test_discount_is_bearish: Discount beyond -0.5% is bearish
- test_neutral_band: Basis between -0.5% and 1% is neutral
- test_zero_days_no_annualization: days_to_expiry 0 gives annualized 0
- test_degenerate_inputs: Missing futures or non-positive spot
- test_basis_signal: Result to signal mapping
- test_days_to_expiry_formats: Supported expiry formats
"""

from datetime import date

import pytest

from fno_engine.analysis.futures_basis import analyze_futures_basis, basis_signal, days_to_expiry
from fno_engine.analysis.models import FuturesBasisResult
from fno_engine.decisions.models import SignalType
from fno_engine.models.market_models import FuturesContract


def _futures(ltp: float) -> FuturesContract:
    return FuturesContract(ticker="RELIANCE", expiry_date="27-Mar-2025", ltp=ltp, lot_size=500)


# =============================================================================
# Basis analysis
# =============================================================================


def test_premium_is_bullish():
    """Test the worked premium example."""
    result = analyze_futures_basis(_futures(1280.0), spot_price=1250.0, days_to_expiry=20)

    assert result.ticker == "RELIANCE"
    assert result.basis == pytest.approx(30.0)
    assert result.basis_pct == pytest.approx(2.4)
    assert result.annualized == pytest.approx(43.8)
    assert result.signal == "bullish"


def test_discount_is_bearish():
    """Test a discount beyond -0.5% is bearish."""
    result = analyze_futures_basis(_futures(1240.0), spot_price=1250.0, days_to_expiry=10)

    assert result.basis == pytest.approx(-10.0)
    assert result.basis_pct == pytest.approx(-0.8)
    assert result.signal == "bearish"


@pytest.mark.parametrize("ltp", [1250.0, 1256.25, 1262.5, 1243.75])
def test_neutral_band(ltp):
    """Test basis within [-0.5%, 1%] is neutral (thresholds are strict)."""
    result = analyze_futures_basis(_futures(ltp), spot_price=1250.0, days_to_expiry=20)
    assert result.signal == "neutral"


def test_zero_days_no_annualization():
    """Test expiry day does not annualize."""
    result = analyze_futures_basis(_futures(1280.0), spot_price=1250.0, days_to_expiry=0)

    assert result.basis_pct == pytest.approx(2.4)
    assert result.annualized == 0.0


def test_degenerate_inputs():
    """Test missing futures or non-positive spot gives an empty result."""
    assert analyze_futures_basis(None, 1250.0, 20) == FuturesBasisResult()
    assert analyze_futures_basis(_futures(1280.0), 0.0, 20) == FuturesBasisResult()


# =============================================================================
# Basis signal
# =============================================================================


@pytest.mark.parametrize(
    "ltp,expected",
    [
        (1280.0, SignalType.BUY),
        (1240.0, SignalType.SELL),
        (1252.0, SignalType.NEUTRAL),
    ],
)
def test_basis_signal(ltp, expected):
    """Test basis results map onto signals at confidence 0.5."""
    signal = basis_signal(analyze_futures_basis(_futures(ltp), 1250.0, 20))

    assert signal.source == "FuturesBasis"
    assert signal.type == expected
    assert signal.confidence == 0.5


def test_basis_signal_empty_result():
    """Test an empty result produces no signal."""
    assert basis_signal(FuturesBasisResult()) is None


# =============================================================================
# Days to expiry
# =============================================================================


@pytest.mark.parametrize(
    "expiry",
    ["27-Mar-2025", "2025-03-27", "27-03-2025", "20250327", " 27-Mar-2025 "],
)
def test_days_to_expiry_formats(expiry):
    """Test each supported expiry format."""
    assert days_to_expiry(expiry, today=date(2025, 3, 7)) == 20


def test_days_to_expiry_expired():
    """Test expired contracts give negative days."""
    assert days_to_expiry("2025-03-27", today=date(2025, 3, 28)) == -1


def test_days_to_expiry_unknown_format():
    """Test an unknown format raises."""
    with pytest.raises(ValueError, match="Unrecognised expiry date"):
        days_to_expiry("March 27th", today=date(2025, 3, 7))
