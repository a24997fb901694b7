"""
Strategy Builders for Options Trading

This module provides builder classes for constructing common option strategies
from a live option chain. Legs are always priced from contracts that exist in the
chain; when a required contract is missing the builder returns a named placeholder
strategy with no legs instead of raising.

Key patterns:
- Protocol-based interface shared by all builders
- dataclass(slots=True) for performance
- Validation in build() and validate() methods
- Type hints for all fields

Supported strategies:
- Bull Call Spread: Buy ATM call, sell next higher call (debit)
- Iron Condor: Sell OTM put + OTM call, buy further OTM wings (credit)
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from loguru import logger

from fno_engine.analysis.option_chain import find_atm_strike, find_nearest_strike
from fno_engine.models.market_models import OptionChain, OptionType
from fno_engine.strategy_builder.models import (
    LegAction,
    OptionLeg,
    OptionStrategy,
    StrategyType,
)
from fno_engine.strategy_builder.payoff import DEFAULT_RANGE_PCT, DEFAULT_STEPS, compute_payoff

BULL_CALL_SPREAD = "Bull Call Spread"
IRON_CONDOR = "Iron Condor"

DEFAULT_CONDOR_WIDTH = 200.0  # points, sized for NIFTY


class StrategyBuilder(Protocol):
    """
    Strategy builder protocol.

    All strategy builders must implement this protocol.
    """

    name: str

    def build(
        self,
        chain: Optional[OptionChain],
        lot_size: int,
        params: Optional[dict] = None
    ) -> OptionStrategy:
        """
        Build a strategy from the chain.

        Args:
            chain: Option chain snapshot
            lot_size: Exchange lot size
            params: Strategy-specific parameters

        Returns:
            OptionStrategy (named placeholder if legs cannot be located)
        """
        ...

    def validate(self, strategy: OptionStrategy) -> bool:
        """
        Validate a strategy.

        Args:
            strategy: Strategy to validate

        Returns:
            True if valid, False otherwise
        """
        ...


@dataclass(slots=True)
class BullCallSpreadBuilder:
    """
    Bull call spread builder.

    Builds a 2-leg debit spread: buy the ATM call, sell the next higher-strike call.

    Example structure:
        - Long Call (ATM strike)
        - Short Call (next strike above ATM)

    Parameters:
        - payoff_range_pct: Half-width of the payoff band (default: 0.10)
        - payoff_steps: Steps across the payoff band (default: 50)
    """

    name: str = "BullCallSpreadBuilder"
    payoff_range_pct: float = DEFAULT_RANGE_PCT
    payoff_steps: int = DEFAULT_STEPS

    def build(
        self,
        chain: Optional[OptionChain],
        lot_size: int,
        params: Optional[dict] = None
    ) -> OptionStrategy:
        """
        Build a bull call spread.

        Args:
            chain: Option chain snapshot
            lot_size: Exchange lot size
            params: Unused, kept for interface consistency

        Returns:
            OptionStrategy with 2 legs, or a placeholder named "Bull Call Spread"
        """
        placeholder = OptionStrategy(name=BULL_CALL_SPREAD, strategy_type=StrategyType.BULL_CALL_SPREAD)

        if chain is None or not chain.contracts or lot_size <= 0:
            logger.warning("Bull Call Spread not built: empty chain or invalid lot size")
            return placeholder

        atm = find_atm_strike(chain.contracts, chain.spot_price)
        buy_call = chain.find(OptionType.CE, atm)
        higher_calls = [c for c in chain.calls() if c.strike_price > atm]
        sell_call = min(higher_calls, key=lambda c: c.strike_price) if higher_calls else None

        if buy_call is None or sell_call is None:
            logger.warning(
                f"Bull Call Spread not built for {chain.ticker}: "
                f"missing {'ATM call' if buy_call is None else 'higher-strike call'} (ATM={atm})"
            )
            return placeholder

        debit = (buy_call.ltp - sell_call.ltp) * lot_size
        max_profit = (sell_call.strike_price - buy_call.strike_price) * lot_size - abs(debit)
        breakeven = buy_call.strike_price + buy_call.ltp - sell_call.ltp

        legs = (
            # Long Call (ATM)
            OptionLeg(
                option_type=OptionType.CE,
                strike_price=buy_call.strike_price,
                action=LegAction.BUY,
                lots=1,
                premium=buy_call.ltp,
            ),
            # Short Call (next OTM)
            OptionLeg(
                option_type=OptionType.CE,
                strike_price=sell_call.strike_price,
                action=LegAction.SELL,
                lots=1,
                premium=sell_call.ltp,
            ),
        )

        strategy = OptionStrategy(
            name=BULL_CALL_SPREAD,
            strategy_type=StrategyType.BULL_CALL_SPREAD,
            legs=legs,
            net_premium=-debit,
            max_profit=max_profit,
            max_loss=abs(debit),
            breakevens=(breakeven,),
            payoff=compute_payoff(legs, chain.spot_price, lot_size, self.payoff_range_pct, self.payoff_steps),
        )

        logger.info(
            f"Built Bull Call Spread for {chain.ticker}: "
            f"long={buy_call.strike_price}, short={sell_call.strike_price}, "
            f"net={strategy.net_premium:.2f}, BE={breakeven:.2f}"
        )

        return strategy

    def validate(self, strategy: OptionStrategy) -> bool:
        """
        Validate a bull call spread.

        Checks:
        - Has exactly 2 legs
        - Both legs are calls
        - One leg is BUY, one is SELL
        - Bought strike is below sold strike

        Args:
            strategy: Strategy to validate

        Returns:
            True if valid, False otherwise
        """
        # Check leg count
        if len(strategy.legs) != 2:
            logger.error(f"Bull Call Spread must have 2 legs, got {len(strategy.legs)}")
            return False

        long_leg, short_leg = strategy.legs

        # Check both calls
        if long_leg.option_type != OptionType.CE or short_leg.option_type != OptionType.CE:
            logger.error("Bull Call Spread legs must both be calls")
            return False

        # Check one BUY, one SELL
        if long_leg.action != LegAction.BUY or short_leg.action != LegAction.SELL:
            logger.error(
                f"Bull Call Spread must buy then sell, got {long_leg.action.value}/{short_leg.action.value}"
            )
            return False

        # Check strike order
        if long_leg.strike_price >= short_leg.strike_price:
            logger.error(
                f"Bull Call Spread strikes out of order: "
                f"long={long_leg.strike_price}, short={short_leg.strike_price}"
            )
            return False

        return True


@dataclass(slots=True)
class IronCondorBuilder:
    """
    Iron Condor strategy builder.

    Builds a 4-leg iron condor: sell OTM put spread + sell OTM call spread.

    Example structure:
        - Long Put (ATM - 2 * width, protection)
        - Short Put (ATM - width, credit)
        - Short Call (ATM + width, credit)
        - Long Call (ATM + 2 * width, protection)

    Each target strike snaps to the nearest listed strike of the matching type.

    Parameters:
        - width: Distance between ATM and the short strikes (default: 200)
        - payoff_range_pct: Half-width of the payoff band (default: 0.10)
        - payoff_steps: Steps across the payoff band (default: 50)
    """

    name: str = "IronCondorBuilder"
    default_width: float = DEFAULT_CONDOR_WIDTH
    payoff_range_pct: float = DEFAULT_RANGE_PCT
    payoff_steps: int = DEFAULT_STEPS

    def build(
        self,
        chain: Optional[OptionChain],
        lot_size: int,
        params: Optional[dict] = None
    ) -> OptionStrategy:
        """
        Build an iron condor.

        Args:
            chain: Option chain snapshot
            lot_size: Exchange lot size
            params: Strategy parameters (width); width <= 0 falls back to default_width

        Returns:
            OptionStrategy with 4 legs, or a placeholder named "Iron Condor"
        """
        placeholder = OptionStrategy(name=IRON_CONDOR, strategy_type=StrategyType.IRON_CONDOR)

        if chain is None or not chain.contracts or lot_size <= 0:
            logger.warning("Iron Condor not built: empty chain or invalid lot size")
            return placeholder

        width = (params or {}).get("width", 0) or 0
        if width <= 0:
            width = self.default_width

        contracts = chain.contracts
        atm = find_atm_strike(contracts, chain.spot_price)

        sell_put_strike = find_nearest_strike(contracts, OptionType.PE, atm - width)
        buy_put_strike = find_nearest_strike(contracts, OptionType.PE, atm - width * 2)
        sell_call_strike = find_nearest_strike(contracts, OptionType.CE, atm + width)
        buy_call_strike = find_nearest_strike(contracts, OptionType.CE, atm + width * 2)

        if not all((sell_put_strike, buy_put_strike, sell_call_strike, buy_call_strike)):
            logger.warning(f"Iron Condor not built for {chain.ticker}: missing wing strikes (ATM={atm})")
            return placeholder

        sell_put = chain.find(OptionType.PE, sell_put_strike)
        buy_put = chain.find(OptionType.PE, buy_put_strike)
        sell_call = chain.find(OptionType.CE, sell_call_strike)
        buy_call = chain.find(OptionType.CE, buy_call_strike)

        net_credit = (sell_put.ltp - buy_put.ltp + sell_call.ltp - buy_call.ltp) * lot_size
        put_width = sell_put_strike - buy_put_strike
        call_width = buy_call_strike - sell_call_strike
        max_loss = max(put_width, call_width) * lot_size - net_credit
        credit_per_unit = net_credit / lot_size

        legs = (
            # Long Put (protection)
            OptionLeg(OptionType.PE, buy_put_strike, LegAction.BUY, 1, buy_put.ltp),
            # Short Put (credit)
            OptionLeg(OptionType.PE, sell_put_strike, LegAction.SELL, 1, sell_put.ltp),
            # Short Call (credit)
            OptionLeg(OptionType.CE, sell_call_strike, LegAction.SELL, 1, sell_call.ltp),
            # Long Call (protection)
            OptionLeg(OptionType.CE, buy_call_strike, LegAction.BUY, 1, buy_call.ltp),
        )

        strategy = OptionStrategy(
            name=IRON_CONDOR,
            strategy_type=StrategyType.IRON_CONDOR,
            legs=legs,
            net_premium=net_credit,
            max_profit=net_credit,
            max_loss=max_loss,
            breakevens=(sell_put_strike - credit_per_unit, sell_call_strike + credit_per_unit),
            payoff=compute_payoff(legs, chain.spot_price, lot_size, self.payoff_range_pct, self.payoff_steps),
        )

        logger.info(
            f"Built Iron Condor for {chain.ticker}: "
            f"LP={buy_put_strike}, SP={sell_put_strike}, "
            f"SC={sell_call_strike}, LC={buy_call_strike}, credit={net_credit:.2f}"
        )

        return strategy

    def validate(self, strategy: OptionStrategy) -> bool:
        """
        Validate an iron condor strategy.

        Checks:
        - Has exactly 4 legs
        - Has one leg of each BUY/SELL x PUT/CALL combination
        - Strikes are in correct order (LP <= SP < SC <= LC)

        Args:
            strategy: Strategy to validate

        Returns:
            True if valid, False otherwise
        """
        # Check leg count
        if len(strategy.legs) != 4:
            logger.error(f"Iron Condor must have 4 legs, got {len(strategy.legs)}")
            return False

        # Extract legs by action and type
        legs_by_type = {f"{leg.action.value}_{leg.option_type.value}": leg for leg in strategy.legs}

        # Verify all required legs exist
        for req in ("BUY_PE", "SELL_PE", "SELL_CE", "BUY_CE"):
            if req not in legs_by_type:
                logger.error(f"Iron Condor missing leg type: {req}")
                return False

        lp_strike = legs_by_type["BUY_PE"].strike_price
        sp_strike = legs_by_type["SELL_PE"].strike_price
        sc_strike = legs_by_type["SELL_CE"].strike_price
        lc_strike = legs_by_type["BUY_CE"].strike_price

        # Verify strike order: LP <= SP < SC <= LC
        if not (lp_strike <= sp_strike < sc_strike <= lc_strike):
            logger.error(
                f"Iron Condor strikes out of order: "
                f"LP={lp_strike}, SP={sp_strike}, SC={sc_strike}, LC={lc_strike}"
            )
            return False

        return True


def build_bull_call_spread(chain: Optional[OptionChain], lot_size: int) -> OptionStrategy:
    """Build a bull call spread with default settings."""
    return BullCallSpreadBuilder().build(chain, lot_size)


def build_iron_condor(chain: Optional[OptionChain], lot_size: int, width: float = 0) -> OptionStrategy:
    """Build an iron condor with default settings (width <= 0 uses the default width)."""
    return IronCondorBuilder().build(chain, lot_size, {"width": width})
