"""Simple import test to verify logging module can be imported."""

import pytest


def test_import_logging_module():
    """Test that logging module can be imported without errors."""
    try:
        from dbviewer.logging import (  # noqa: F401
            PerformanceLogger,
            StructuredLogger,
            configure_logging,
            get_logger,
            get_performance_logger,
        )
    except ImportError as e:
        pytest.fail(f"Failed to import logging module: {e}")


def test_create_simple_logger():
    from dbviewer.logging import get_logger

    logger = get_logger("test.simple")
    assert logger.name == "test.simple"


def test_basic_logging():
    """Logging calls at every level must not raise."""
    from dbviewer.logging import get_logger

    logger = get_logger("test.basic")

    logger.info("Test info message")
    logger.debug("Test debug message")
    logger.warning("Test warning message")
    logger.error("Test error message", table="users")
