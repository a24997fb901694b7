"""
Unit Tests for Option Chain Analytics

Test cases:
- test_atm_equals_spot: CE and PE at spot make spot the ATM strike
- test_atm_tie_goes_to_lower_strike: Equidistant strikes resolve downward
- test_find_nearest_strike_tie_goes_to_lower_strike: Equidistant targets resolve downward
- test_max_pain_sample_chain: Sample chain max pain is 25000
- test_max_pain_order_independent: Reordering contracts does not change max pain
- test_oi_support_resistance: Max-OI strikes and top-3 levels per side
- test_pcr_sentiment_bands: Coarse sentiment thresholds
- test_analyze_option_chain: ATM IV, IV skew, recomputed PCR and max pain
- test_degenerate_chains: None / empty chains give an all-zero analysis
"""

import random

import pytest

from fno_engine.analysis.models import ChainAnalysis
from fno_engine.analysis.option_chain import (
    analyze_option_chain,
    compute_max_pain,
    compute_oi_support_resistance,
    find_atm_strike,
    find_nearest_strike,
    pcr_sentiment,
)
from fno_engine.models.market_models import OptionType
from tests.fixtures.chain_fixtures import make_chain, make_contract, nifty_contracts


# =============================================================================
# ATM and nearest strike
# =============================================================================


def test_atm_equals_spot(sample_chain):
    """Test ATM is the spot strike when CE and PE exist there."""
    assert find_atm_strike(sample_chain.contracts, 25000) == 25000


def test_atm_nearest_strike(sample_chain):
    """Test ATM snaps to the closest listed strike."""
    assert find_atm_strike(sample_chain.contracts, 25180) == 25200
    assert find_atm_strike(sample_chain.contracts, 24600) == 24500


def test_atm_tie_goes_to_lower_strike():
    """Test equidistant strikes resolve to the lower strike regardless of order."""
    contracts = [
        make_contract(OptionType.CE, 25200),
        make_contract(OptionType.CE, 25000),
    ]
    assert find_atm_strike(contracts, 25100) == 25000
    assert find_atm_strike(list(reversed(contracts)), 25100) == 25000


def test_atm_degenerate_inputs(sample_chain):
    """Test no contracts or non-positive spot gives 0."""
    assert find_atm_strike([], 25000) == 0.0
    assert find_atm_strike(sample_chain.contracts, 0) == 0.0


def test_find_nearest_strike_by_type(sample_chain):
    """Test nearest strike only considers the requested type."""
    # Nearest put to 24600 is 24500, nearest call to 25400 is 25500
    assert find_nearest_strike(sample_chain.contracts, OptionType.PE, 24600) == 24500
    assert find_nearest_strike(sample_chain.contracts, OptionType.CE, 25400) == 25500
    # No put above 25000, so 25300 snaps to 25000
    assert find_nearest_strike(sample_chain.contracts, OptionType.PE, 25300) == 25000


def test_find_nearest_strike_tie_goes_to_lower_strike():
    """Test an equidistant target resolves to the lower strike regardless of order."""
    contracts = [
        make_contract(OptionType.PE, 24900),
        make_contract(OptionType.PE, 24700),
    ]
    assert find_nearest_strike(contracts, OptionType.PE, 24800) == 24700
    assert find_nearest_strike(list(reversed(contracts)), OptionType.PE, 24800) == 24700


def test_find_nearest_strike_missing_type():
    """Test 0.0 when the chain has no contract of that type."""
    contracts = [make_contract(OptionType.CE, 25000)]
    assert find_nearest_strike(contracts, OptionType.PE, 25000) == 0.0


# =============================================================================
# Max pain
# =============================================================================


def test_max_pain_sample_chain(sample_chain):
    """Test sample chain max pain (writer payout is zero at 25000)."""
    assert compute_max_pain(sample_chain.contracts) == 25000


def test_max_pain_is_chain_strike(sample_chain):
    """Test max pain is always one of the chain's strikes."""
    assert compute_max_pain(sample_chain.contracts) in sample_chain.strikes()


def test_max_pain_order_independent():
    """Test reordering contracts never changes max pain."""
    contracts = nifty_contracts()
    expected = compute_max_pain(contracts)

    rng = random.Random(7)
    for _ in range(10):
        shuffled = contracts[:]
        rng.shuffle(shuffled)
        assert compute_max_pain(shuffled) == expected


def test_max_pain_tie_goes_to_lowest_strike():
    """Test equal payout resolves to the lowest strike."""
    # No OI anywhere: every strike has zero payout
    contracts = [
        make_contract(OptionType.CE, 100),
        make_contract(OptionType.PE, 90),
        make_contract(OptionType.CE, 110),
    ]
    assert compute_max_pain(contracts) == 90


def test_max_pain_one_sided_chain():
    """Test a calls-only chain still picks a strike."""
    contracts = [
        make_contract(OptionType.CE, 100, oi=500),
        make_contract(OptionType.CE, 110, oi=300),
        make_contract(OptionType.CE, 120, oi=100),
    ]
    # Calls only: payout grows with settlement, lowest strike wins
    assert compute_max_pain(contracts) == 100


def test_max_pain_empty():
    """Test empty input gives 0."""
    assert compute_max_pain([]) == 0.0


# =============================================================================
# OI support / resistance
# =============================================================================


def test_oi_support_resistance(sample_chain):
    """Test max-OI strikes and top levels per side."""
    levels = compute_oi_support_resistance(sample_chain.contracts)

    assert levels.max_put_oi_strike == 25000
    assert levels.max_call_oi_strike == 25200
    assert levels.top_put_strikes == (25000, 24500, 24800)
    assert levels.top_call_strikes == (25200, 25000, 25500)


def test_oi_support_resistance_tie_lower_strike():
    """Test equal OI ranks the lower strike first."""
    contracts = [
        make_contract(OptionType.PE, 24800, oi=1000),
        make_contract(OptionType.PE, 24500, oi=1000),
    ]
    levels = compute_oi_support_resistance(contracts)
    assert levels.max_put_oi_strike == 24500
    assert levels.top_put_strikes == (24500, 24800)
    assert levels.max_call_oi_strike == 0.0
    assert levels.top_call_strikes == ()


# =============================================================================
# Sentiment and full chain analysis
# =============================================================================


@pytest.mark.parametrize(
    "pcr,expected",
    [
        (1.5, "bullish"),
        (1.21, "bullish"),
        (1.2, "neutral"),
        (0.9, "neutral"),
        (0.7, "neutral"),
        (0.69, "bearish"),
        (0.0, "bearish"),
    ],
)
def test_pcr_sentiment_bands(pcr, expected):
    """Test coarse sentiment uses strict comparisons at 1.2 and 0.7."""
    assert pcr_sentiment(pcr) == expected


def test_analyze_option_chain(sample_chain):
    """Test chain-level analysis on the sample chain."""
    analysis = analyze_option_chain(sample_chain)

    assert analysis.ticker == "NIFTY"
    assert analysis.spot_price == 25000
    assert analysis.atm_strike == 25000
    assert analysis.atm_iv == pytest.approx(12.75)
    assert analysis.iv_skew == pytest.approx(1.5)
    assert analysis.pcr == pytest.approx(400000 / 520000)
    assert analysis.max_pain == 25000
    assert analysis.sentiment == "neutral"
    assert analysis.oi_sr_levels.max_call_oi_strike == 25200


def test_analyze_ignores_precomputed_fields():
    """Test PCR and max pain are recomputed, not taken from the chain."""
    chain = make_chain(nifty_contracts()).model_copy(update={"pcr": 9.9, "max_pain": 1.0})
    analysis = analyze_option_chain(chain)

    assert analysis.pcr == pytest.approx(400000 / 520000)
    assert analysis.max_pain == 25000


def test_atm_iv_needs_both_sides():
    """Test ATM IV and skew stay 0 when one side has no IV."""
    chain = make_chain(
        [
            make_contract(OptionType.CE, 25000, iv=12.0, oi=100),
            make_contract(OptionType.PE, 24900, iv=14.0, oi=100),
        ]
    )
    analysis = analyze_option_chain(chain)

    assert analysis.atm_strike == 25000
    assert analysis.atm_iv == 0.0
    assert analysis.iv_skew == 0.0


def test_degenerate_chains(empty_chain, log_messages):
    """Test None and empty chains give an all-zero analysis."""
    assert analyze_option_chain(None) == ChainAnalysis()
    assert analyze_option_chain(empty_chain) == ChainAnalysis()
    assert any("skipped" in m for m in log_messages)
