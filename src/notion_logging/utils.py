"""Environment helpers for Notion logging."""

import os
import sys

LOG_LEVEL_ENV = "NOTION_LOG_LEVEL"
TEST_MODE_ENV = "NOTION_TEST_MODE"

VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_log_level(default: str = "WARNING") -> str:
    """Get the log level from ``NOTION_LOG_LEVEL``.

    Parameters
    ----------
    default : str
        Level used when the variable is unset or invalid

    Returns
    -------
    str
        Upper-cased level name
    """
    level = os.environ.get(LOG_LEVEL_ENV, default).strip().upper()
    if level not in VALID_LOG_LEVELS:
        return default
    return level


def is_test_environment() -> bool:
    """Check whether we are running under pytest."""
    return (
        "pytest" in sys.modules
        or TEST_MODE_ENV in os.environ
        or "PYTEST_CURRENT_TEST" in os.environ
    )
