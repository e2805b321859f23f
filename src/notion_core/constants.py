"""Constants for the Notion output subsystem."""


class ToolInfo:
    """Identity strings shown to users in error output."""

    NAME = "Notion"
    TWITTER_HANDLE = "@notionjs"
    ISSUES_URL = "https://github.com/notion-cli/notion/issues"


class EnvVars:
    """Environment variable names.

    The dev-mode and backtrace flags have presence-only semantics: the value
    is ignored, only whether the variable is set matters.
    """

    DEV = "NOTION_DEV"
    BACKTRACE = "NOTION_BACKTRACE"
    LOG_LEVEL = "NOTION_LOG_LEVEL"


class Layout:
    """Column arithmetic for the progress bar template.

    ``  Fetching v1.23.4  [====================>                   ]  50%``
    """

    DEFAULT_TERMINAL_WIDTH = 80
    MAX_BAR_WIDTH = 40
    MIN_ACTION_WIDTH = 10

    LEADING_PAD = 2
    GAP = 2
    BRACKETS = 2
    EXTRA = 1
    PERCENT_DIGITS = 3
    PERCENT_SIGN = 1

    PROGRESS_CHARS = "=> "


class SpinnerTiming:
    """Spinner tick cadence and thread shutdown bounds (seconds)."""

    TICK_INTERVAL_S = 0.02
    THREAD_JOIN_TIMEOUT_S = 0.5


# Braille spinner frames; the last glyph is shown once finished
SPINNER_TICK_CHARS = "⠁⠁⠉⠙⠚⠒⠂⠂⠒⠲⠴⠤⠄⠄⠤⠠⠠⠤⠦⠖⠒⠐⠐⠒⠓⠋⠉⠈⠈ "
