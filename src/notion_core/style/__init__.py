"""The view layer of Notion: styled errors and progress indicators.

Usage
-----
>>> from notion_core.style import ErrorContext, display_error
>>> display_error(ErrorContext.NOTION, "could not find version 99.0.0")
>>>
>>> from notion_core.style import Action, progress_bar
>>> bar = progress_bar(Action.FETCHING, "v1.23.4", 100)
>>> bar.inc(50)
>>> bar.finish()
"""

from notion_core.style.errors import (
    ErrorContext,
    ErrorReporter,
    display_error,
    display_error_prefix,
    display_unknown_error,
    get_backtrace,
)
from notion_core.style.progress import (
    Action,
    ProgressBar,
    ProgressFactory,
    ProgressHandle,
    ProgressState,
    Spinner,
    compute_bar_width,
    progress_bar,
    progress_spinner,
)
from notion_core.style.terminal import display_width, terminal_width

__all__ = [
    "Action",
    "ErrorContext",
    "ErrorReporter",
    "ProgressBar",
    "ProgressFactory",
    "ProgressHandle",
    "ProgressState",
    "Spinner",
    "compute_bar_width",
    "display_error",
    "display_error_prefix",
    "display_unknown_error",
    "display_width",
    "get_backtrace",
    "progress_bar",
    "progress_spinner",
    "terminal_width",
]
