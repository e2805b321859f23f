"""Logger configuration profiles for Notion."""

import logging
import sys

from notion_logging.formatters import ColoredFormatter
from notion_logging.utils import get_log_level, is_test_environment

PROFILES = ("cli", "test")

# Python's logging module has no TRACE level; map it to DEBUG
_LEVEL_ALIASES = {"TRACE": "DEBUG"}


def configure_logger(
    name: str,
    profile: str = "cli",
    level: str | None = None,
) -> logging.Logger:
    """Configure a logger according to a named profile.

    Parameters
    ----------
    name : str
        Logger name, usually ``__name__``
    profile : str
        ``"cli"`` for a colored stderr handler, ``"test"`` for no handlers so
        records propagate to pytest
    level : str, optional
        Level name, defaults to ``NOTION_LOG_LEVEL``

    Returns
    -------
    logging.Logger
        The configured logger

    Raises
    ------
    ValueError
        If the profile is not recognised
    """
    if profile not in PROFILES:
        msg = f"Unknown profile: {profile}"
        raise ValueError(msg)

    logger = logging.getLogger(name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.filters.clear()

    level_name = (level or get_log_level()).upper()
    logger.setLevel(_LEVEL_ALIASES.get(level_name, level_name))

    if profile == "cli":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    else:
        logger.propagate = True

    return logger


def get_cli_logger(name: str) -> logging.Logger:
    """Get a logger for CLI-side modules.

    Falls back to the test profile under pytest so ``caplog`` sees records.

    Parameters
    ----------
    name : str
        Logger name

    Returns
    -------
    logging.Logger
        Configured logger
    """
    if is_test_environment():
        return configure_logger(name, profile="test")
    return configure_logger(name, profile="cli")


def get_test_logger(name: str) -> logging.Logger:
    """Get a logger configured with the test profile."""
    return configure_logger(name, profile="test")
