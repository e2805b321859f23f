"""Error reporting to stderr.

Two prefixes are used depending on where the error surfaced:

=======  ================  ==================================================
Context  Prefix            Why
=======  ================  ==================================================
NOTION   ``error:``        The user ran ``notion`` so the source is implicit
SHIM     ``Notion error:`` A failure inside a shim is surprising, so name it
=======  ================  ==================================================

Unknown (internal) errors get a generic line followed either by developer
details or by a fixed message asking the user to report the bug, depending on
``NOTION_DEV``.
"""

import traceback
from enum import Enum
from typing import Any

import click

from notion_core.config import ReporterConfig
from notion_core.constants import EnvVars, ToolInfo
from notion_core.style.terminal import (
    style_bold,
    style_details_label,
    style_error_prefix,
    style_handle,
)
from notion_logging import get_cli_logger

logger = get_cli_logger(__name__)


class ErrorContext(Enum):
    """The entry point from which an error is being reported."""

    NOTION = "notion"
    SHIM = "shim"


def get_backtrace(err: Any) -> str | None:
    """Extract a printable backtrace from an error, if it has one.

    An explicit ``backtrace`` attribute (string or zero-argument callable)
    wins; otherwise the traceback of a raised exception is formatted.

    Parameters
    ----------
    err : Any
        The failure being reported

    Returns
    -------
    str | None
        Backtrace text without a trailing newline, or None
        (also when capturing it fails)
    """
    try:
        backtrace = getattr(err, "backtrace", None)
        if callable(backtrace):
            backtrace = backtrace()
        if backtrace is not None:
            return str(backtrace).rstrip("\n")
    except Exception as e:  # noqa: BLE001
        logger.debug("Could not capture backtrace: %s", e)
        return None

    if isinstance(err, BaseException) and err.__traceback__ is not None:
        lines = traceback.format_exception(type(err), err, err.__traceback__)
        return "".join(lines).rstrip("\n")

    return None


def safe_repr(err: Any) -> str:
    """Return ``repr(err)``, falling back to the default object repr."""
    try:
        return repr(err)
    except Exception as e:  # noqa: BLE001
        logger.debug("repr() of reported error failed: %s", e)
        return object.__repr__(err)


class ErrorReporter:
    """Writes styled error reports to stderr.

    Parameters
    ----------
    config : ReporterConfig, optional
        Fixed reporting flags. When omitted, ``NOTION_DEV`` and
        ``NOTION_BACKTRACE`` are re-read from the environment on every call.
    """

    def __init__(self, config: ReporterConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> ReporterConfig:
        """Flags in effect for the next report."""
        if self._config is not None:
            return self._config
        return ReporterConfig.from_env()

    @staticmethod
    def _echo(message: str = "", nl: bool = True) -> None:
        click.echo(message, nl=nl, err=True)

    def report_prefix(self, cx: ErrorContext) -> None:
        """Write the styled prefix for a context, without a newline.

        Parameters
        ----------
        cx : ErrorContext
            Where the error surfaced
        """
        if cx is ErrorContext.SHIM:
            prefix = f"{ToolInfo.NAME} error:"
        else:
            prefix = "error:"
        self._echo(f"{style_error_prefix(prefix)} ", nl=False)

    def report_error(self, cx: ErrorContext, err: Any) -> None:
        """Write an expected, user-facing error.

        Parameters
        ----------
        cx : ErrorContext
            Where the error surfaced
        err : Any
            Anything renderable with ``str()``
        """
        self.report_prefix(cx)
        self._echo(str(err))

    def report_unknown_error(self, cx: ErrorContext, err: Any) -> None:
        """Write a generic report for an internal, unexpected failure.

        Parameters
        ----------
        cx : ErrorContext
            Where the error surfaced
        err : Any
            The failure; its ``repr()`` and backtrace are shown in dev mode
        """
        config = self.config

        self.report_prefix(cx)
        self._echo("an internal error occurred")
        self._echo()

        if config.dev_mode:
            self._report_details(err, config)
        else:
            self._report_bug_request()

    def _report_details(self, err: Any, config: ReporterConfig) -> None:
        self._echo(f"{style_details_label('details:')} {safe_repr(err)}")
        self._echo()

        backtrace = get_backtrace(err)
        if backtrace is not None and config.backtrace_enabled:
            self._echo(backtrace)
        else:
            self._echo(
                f"Run with {EnvVars.DEV}=1 and {EnvVars.BACKTRACE}=1 for a backtrace.",
            )

    def _report_bug_request(self) -> None:
        self._echo(
            f"{ToolInfo.NAME} is still a pre-alpha project, "
            "so we expect to run into some bugs,",
        )
        self._echo("but we'd love to hear about them so we can fix them!")
        self._echo()
        self._echo(
            "Please feel free to reach out to us at "
            f"{style_handle(ToolInfo.TWITTER_HANDLE)} on Twitter or file an issue at:",
        )
        self._echo()
        self._echo(f"    {style_bold(ToolInfo.ISSUES_URL)}")
        self._echo()


def display_error_prefix(cx: ErrorContext) -> None:
    """Write the styled error prefix for ``cx`` to stderr."""
    ErrorReporter().report_prefix(cx)


def display_error(cx: ErrorContext, err: Any) -> None:
    """Write an error to stderr with a styled prefix."""
    ErrorReporter().report_error(cx, err)


def display_unknown_error(cx: ErrorContext, err: Any) -> None:
    """Write a generic internal-error report to stderr.

    The environment is consulted on each call, so toggling ``NOTION_DEV`` or
    ``NOTION_BACKTRACE`` takes effect without restarting.
    """
    ErrorReporter().report_unknown_error(cx, err)
