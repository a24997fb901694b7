"""
Unit Tests for Weighted Signal Voting

Test cases:
- test_no_votes_returns_hold: Empty input gives HOLD at confidence 0
- test_balanced_votes_hold: BUY 0.6 + SELL 0.6 gives HOLD 0.4
- test_single_buy: BUY 0.6 gives MODERATE_BUY 0.9
- test_bands: Moderate and strong band boundaries on both sides
- test_neutral_dilutes: NEUTRAL votes reduce the net score
- test_signal_validation: Signal rejects empty source and bad confidence
"""

import pytest

from fno_engine.decisions.models import Recommendation, Signal, SignalType
from fno_engine.decisions.voting import aggregate_signals, weighted_vote


# =============================================================================
# Weighted vote
# =============================================================================


def test_no_votes_returns_hold():
    """Test no votes gives HOLD at confidence 0."""
    result = weighted_vote([])

    assert result.recommendation == Recommendation.HOLD
    assert result.confidence == 0.0
    assert result.net_score == 0.0


def test_zero_weight_returns_hold():
    """Test votes with zero total weight give HOLD at confidence 0."""
    result = weighted_vote([(SignalType.BUY, 0.0), (SignalType.SELL, 0.0)])

    assert result.recommendation == Recommendation.HOLD
    assert result.confidence == 0.0


def test_balanced_votes_hold():
    """Test equal BUY and SELL weight gives HOLD 0.4."""
    result = aggregate_signals(
        [
            Signal("PCR", SignalType.BUY, 0.6),
            Signal("FuturesOI", SignalType.SELL, 0.6),
        ]
    )

    assert result.net_score == 0.0
    assert result.recommendation == Recommendation.HOLD
    assert result.confidence == pytest.approx(0.4)
    assert result.direction == SignalType.NEUTRAL


def test_single_buy():
    """Test a lone BUY gives MODERATE_BUY at 0.6 + 1.0 * 0.3."""
    result = aggregate_signals([Signal("PCR", SignalType.BUY, 0.6)])

    assert result.net_score == 1.0
    assert result.recommendation == Recommendation.MODERATE_BUY
    assert result.confidence == pytest.approx(0.9)
    assert result.direction == SignalType.BUY


def test_single_sell():
    """Test a lone SELL gives MODERATE_SELL 0.9."""
    result = aggregate_signals([Signal("IVSkew", SignalType.SELL, 0.4)])

    assert result.net_score == -1.0
    assert result.recommendation == Recommendation.MODERATE_SELL
    assert result.confidence == pytest.approx(0.9)


@pytest.mark.parametrize(
    "buy,sell,expected,confidence",
    [
        # net = 0.4 -> strong band
        (0.7, 0.3, Recommendation.MODERATE_BUY, 0.6 + 0.4 * 0.3),
        # net = 0.2 -> moderate band
        (0.6, 0.4, Recommendation.MODERATE_BUY, 0.5),
        # net = 0.05 -> hold
        (0.525, 0.475, Recommendation.HOLD, 0.4),
        # net = -0.2 -> moderate band
        (0.4, 0.6, Recommendation.MODERATE_SELL, 0.5),
        # net = -0.4 -> strong band
        (0.3, 0.7, Recommendation.MODERATE_SELL, 0.6 + 0.4 * 0.3),
    ],
)
def test_bands(buy, sell, expected, confidence):
    """Test recommendation bands on both sides."""
    result = weighted_vote([(SignalType.BUY, buy), (SignalType.SELL, sell)])

    assert result.recommendation == expected
    assert result.confidence == pytest.approx(confidence)


def test_neutral_dilutes():
    """Test NEUTRAL weight pulls a BUY majority back into HOLD."""
    # net = 0.6 / 6.6 < 0.1
    result = weighted_vote([(SignalType.BUY, 0.6)] + [(SignalType.NEUTRAL, 1.0)] * 6)

    assert result.recommendation == Recommendation.HOLD
    assert result.confidence == pytest.approx(0.4)


def test_accepts_generator():
    """Test votes may be any iterable."""
    result = weighted_vote((SignalType.BUY, c) for c in (0.5, 0.5))
    assert result.recommendation == Recommendation.MODERATE_BUY


def test_recommendation_wire_values():
    """Test moderate bands use the short BUY/SELL spelling."""
    assert Recommendation.MODERATE_BUY.value == "BUY"
    assert Recommendation.MODERATE_SELL.value == "SELL"
    assert Recommendation.STRONG_BUY.value == "STRONG_BUY"


# =============================================================================
# Signal validation
# =============================================================================


def test_signal_validation():
    """Test Signal rejects empty source and out-of-range confidence."""
    with pytest.raises(ValueError, match="source"):
        Signal("", SignalType.BUY, 0.5)

    with pytest.raises(ValueError, match="confidence"):
        Signal("PCR", SignalType.BUY, 1.5)

    with pytest.raises(ValueError, match="confidence"):
        Signal("PCR", SignalType.SELL, -0.1)


def test_signal_to_dict():
    """Test wire field names."""
    signal = Signal("MaxPain", SignalType.NEUTRAL, 0.5, "Price near max pain (25000)")

    assert signal.to_dict() == {
        "source": "MaxPain",
        "type": "NEUTRAL",
        "confidence": 0.5,
        "reason": "Price near max pain (25000)",
    }
