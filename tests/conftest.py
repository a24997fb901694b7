"""Shared pytest fixtures for fno_engine tests."""

import sys
from pathlib import Path

import pytest
from loguru import logger

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Import all fixtures for global availability
from tests.fixtures.chain_fixtures import *


@pytest.fixture
def log_messages():
    """
    Capture loguru records emitted during a test.

    Returns:
        list[str]: Formatted messages, appended as they are logged

    Example:
        def test_warns(log_messages):
            analyze_option_chain(None)
            assert any("skipped" in m for m in log_messages)
    """
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} | {message}")
    yield messages
    logger.remove(handler_id)
