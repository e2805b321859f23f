"""Logging setup shared by Notion packages."""

from notion_logging.config import configure_logger, get_cli_logger, get_test_logger
from notion_logging.formatters import ColoredFormatter
from notion_logging.utils import get_log_level, is_test_environment

__all__ = [
    "ColoredFormatter",
    "configure_logger",
    "get_cli_logger",
    "get_log_level",
    "get_test_logger",
    "is_test_environment",
]
