"""
Analysis Configuration Loader

Loads and validates derivatives-analysis configuration from YAML file.

Config location: config/analysis_config.yaml

Schema:
- strategy_defaults: Lot size, iron condor width and payoff band for the strategy builders
- report_defaults: Near-the-money window used by chain summaries
- logging: Log level and optional log file
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import yaml
from loguru import logger

from fno_engine.analysis import reports
from fno_engine.models.market_models import OptionChain
from fno_engine.strategy_builder.builders import BullCallSpreadBuilder, IronCondorBuilder


@dataclass
class StrategyDefaults:
    """Strategy builder defaults."""
    lot_size: int = 25                 # NIFTY lot size
    iron_condor_width: float = 200.0   # points between ATM and short strikes
    payoff_range_pct: float = 0.10     # payoff band is spot +/- 10%
    payoff_steps: int = 50


@dataclass
class ReportDefaults:
    """Chain summary defaults."""
    atm_window_pct: float = 0.05
    max_atm_contracts: int = 20


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: Optional[str] = None
    rotation: str = "10 MB"


@dataclass
class AnalysisConfig:
    """Complete analysis configuration."""

    strategy_defaults: StrategyDefaults = field(default_factory=StrategyDefaults)
    report_defaults: ReportDefaults = field(default_factory=ReportDefaults)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisConfig":
        """Create config from dictionary with nested dataclass instantiation."""
        strategy = data.get("strategy_defaults", {}) or {}
        report = data.get("report_defaults", {}) or {}
        log = data.get("logging", {}) or {}

        return cls(
            strategy_defaults=StrategyDefaults(
                lot_size=strategy.get("lot_size", 25),
                iron_condor_width=strategy.get("iron_condor_width", 200.0),
                payoff_range_pct=strategy.get("payoff_range_pct", 0.10),
                payoff_steps=strategy.get("payoff_steps", 50),
            ),
            report_defaults=ReportDefaults(
                atm_window_pct=report.get("atm_window_pct", 0.05),
                max_atm_contracts=report.get("max_atm_contracts", 20),
            ),
            logging=LoggingConfig(
                level=log.get("level", "INFO"),
                log_file=log.get("log_file"),
                rotation=log.get("rotation", "10 MB"),
            ),
        )

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        # Validate strategy defaults
        if self.strategy_defaults.lot_size < 1:
            errors.append(f"lot_size must be >= 1: {self.strategy_defaults.lot_size}")
        if self.strategy_defaults.iron_condor_width <= 0:
            errors.append(f"iron_condor_width must be positive: {self.strategy_defaults.iron_condor_width}")
        if not (0 < self.strategy_defaults.payoff_range_pct < 1):
            errors.append(f"payoff_range_pct must be between 0 and 1: {self.strategy_defaults.payoff_range_pct}")
        if self.strategy_defaults.payoff_steps < 1:
            errors.append(f"payoff_steps must be >= 1: {self.strategy_defaults.payoff_steps}")

        # Validate report defaults
        if not (0 < self.report_defaults.atm_window_pct < 1):
            errors.append(f"atm_window_pct must be between 0 and 1: {self.report_defaults.atm_window_pct}")
        if self.report_defaults.max_atm_contracts < 1:
            errors.append(f"max_atm_contracts must be >= 1: {self.report_defaults.max_atm_contracts}")

        # Validate logging
        if self.logging.level.upper() not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Invalid log level: {self.logging.level}")

        return errors

    def bull_call_spread_builder(self) -> BullCallSpreadBuilder:
        """Bull call spread builder using the configured payoff band."""
        return BullCallSpreadBuilder(
            payoff_range_pct=self.strategy_defaults.payoff_range_pct,
            payoff_steps=self.strategy_defaults.payoff_steps,
        )

    def iron_condor_builder(self) -> IronCondorBuilder:
        """Iron condor builder using the configured width and payoff band."""
        return IronCondorBuilder(
            default_width=self.strategy_defaults.iron_condor_width,
            payoff_range_pct=self.strategy_defaults.payoff_range_pct,
            payoff_steps=self.strategy_defaults.payoff_steps,
        )

    def chain_summary(self, chain: OptionChain) -> dict[str, Any]:
        """Chain summary using the configured near-the-money window and contract limit."""
        return reports.chain_summary(
            chain,
            window_pct=self.report_defaults.atm_window_pct,
            limit=self.report_defaults.max_atm_contracts,
        )


def load_analysis_config(config_path: Optional[str] = None) -> AnalysisConfig:
    """
    Load analysis configuration from YAML file.

    Args:
        config_path: Path to config file (default: config/analysis_config.yaml)

    Returns:
        AnalysisConfig object

    Raises:
        ValueError: If the YAML is malformed or the configuration is invalid
    """
    if config_path is None:
        # Determine project root and config path
        project_root = Path(__file__).parent.parent.parent.parent
        config_path = project_root / "config" / "analysis_config.yaml"

    config_file = Path(config_path)

    if not config_file.exists():
        logger.warning(f"Analysis config file not found: {config_file}, using defaults")
        return AnalysisConfig()

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML config: {e}") from e

    if not data:
        logger.warning(f"Empty config file: {config_file}, using defaults")
        return AnalysisConfig()

    config = AnalysisConfig.from_dict(data)

    # Validate
    errors = config.validate()
    if errors:
        error_msg = "Configuration validation errors:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)

    logger.info(f"✓ Loaded analysis config from {config_file}")
    logger.debug(f"  Lot size: {config.strategy_defaults.lot_size}")
    logger.debug(f"  Iron condor width: {config.strategy_defaults.iron_condor_width}")

    return config
