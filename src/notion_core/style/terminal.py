"""Terminal width detection and text styling helpers."""

import shutil

import click

from notion_core.constants import Layout
from notion_logging import get_cli_logger

logger = get_cli_logger(__name__)


def terminal_width() -> int | None:
    """Query the current terminal column count.

    Returns
    -------
    int | None
        Number of columns, or None if it cannot be determined
    """
    try:
        columns = shutil.get_terminal_size(fallback=(0, 0)).columns
    except (OSError, ValueError) as e:
        logger.debug("Terminal size unavailable: %s", e)
        return None
    return columns if columns > 0 else None


def display_width() -> int:
    """Get the display width, falling back to 80 columns."""
    width = terminal_width()
    if width is None:
        return Layout.DEFAULT_TERMINAL_WIDTH
    return width


def style_error_prefix(text: str) -> str:
    """Red, bold."""
    return click.style(text, fg="red", bold=True)


def style_details_label(text: str) -> str:
    """Yellow, bold."""
    return click.style(text, fg="yellow", bold=True)


def style_handle(text: str) -> str:
    """Cyan, bold."""
    return click.style(text, fg="cyan", bold=True)


def style_bold(text: str) -> str:
    return click.style(text, bold=True)


def style_action(text: str) -> str:
    """Green, bold."""
    return click.style(text, fg="green", bold=True)


def style_bar(filled: str, empty: str) -> str:
    """Style a progress bar body: filled part cyan, remainder blue.

    Parameters
    ----------
    filled : str
        Filled cells including the head character
    empty : str
        Unfilled cells

    Returns
    -------
    str
        Styled bar body
    """
    parts = []
    if filled:
        parts.append(click.style(filled, fg="cyan"))
    if empty:
        parts.append(click.style(empty, fg="blue"))
    return "".join(parts)
