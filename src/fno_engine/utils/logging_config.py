"""
Logging Setup

Configures loguru sinks for processes that embed the analytics.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from fno_engine.config.analysis_config import LoggingConfig

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
) -> None:
    """
    Replace loguru's default handler with a stderr sink and an optional file sink.

    Args:
        level: Minimum level for the stderr sink
        log_file: Optional path of a rotating log file (always DEBUG)
        rotation: Rotation policy for the log file
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, rotation=rotation, level="DEBUG", format=FILE_FORMAT)


def configure_from(config: LoggingConfig) -> None:
    """Apply a LoggingConfig section."""
    configure_logging(config.level, config.log_file, config.rotation)
