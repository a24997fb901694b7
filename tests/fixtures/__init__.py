"""Test fixtures for the derivatives analytics tests.

This package provides reusable test fixtures for:
- Option chains and contract builders
- Futures contracts

Fixtures are auto-discovered by pytest through conftest.py.
"""

from tests.fixtures.chain_fixtures import (
    empty_chain,
    sample_chain,
    sample_futures,
)

__all__ = [
    "empty_chain",
    "sample_chain",
    "sample_futures",
]
