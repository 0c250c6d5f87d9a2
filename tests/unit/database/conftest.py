"""Database adapter test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def make_pool():
    """Build pool mocks whose ``acquire()`` yields a connection as an async context."""
    def factory(connection) -> MagicMock:
        pool = MagicMock()
        pool.acquire.return_value.__aenter__ = AsyncMock(return_value=connection)
        pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)
        return pool
    return factory
