"""Terminal output for the Notion command-line tool."""

from notion_core.config import ReporterConfig
from notion_core.exceptions import NotionError

__all__ = [
    "NotionError",
    "ReporterConfig",
]
