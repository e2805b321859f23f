"""Progress bars and spinners for long-running operations.

Bars are laid out to fit the terminal::

      Fetching v1.23.4  [====================>                   ]  50%
    |----------| |-----|   |--------------------------------------|  |-|
       action    details                      bar                 percentage

Spinners tick themselves on a background thread::

    ⠋ Fetching public registry: https://nodejs.org/dist/index.json

Handles follow ``CREATED -> ACTIVE -> FINISHED``. Once finished, further
updates are ignored.
"""

from __future__ import annotations

import functools
import sys
import threading
import weakref
from collections.abc import Callable
from enum import Enum
from typing import IO, ClassVar

import click

from notion_core.constants import SPINNER_TICK_CHARS, Layout, SpinnerTiming
from notion_core.style.terminal import display_width, style_action, style_bar
from notion_logging import get_cli_logger

logger = get_cli_logger(__name__)

_CLEAR_LINE = "\r\033[2K"


@functools.total_ordering
class Action(Enum):
    """Labelled actions shown on the left of a progress bar.

    Members sort in declaration order. ``Action.MAX_WIDTH`` is the column
    width reserved for labels, computed once from all members.
    """

    FETCHING = "Fetching"

    MAX_WIDTH: ClassVar[int]

    @property
    def label(self) -> str:
        """Display string for this action."""
        return self.value

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        members = list(Action)
        return members.index(self) < members.index(other)


Action.MAX_WIDTH = max(
    Layout.MIN_ACTION_WIDTH,
    *(len(action.label) for action in Action),
)


class ProgressState(Enum):
    """Lifecycle of a progress handle."""

    CREATED = "created"
    ACTIVE = "active"
    FINISHED = "finished"


def compute_bar_width(details: str, width: int | None = None) -> int:
    """Compute how many columns the bar body may use.

    The subtraction saturates at zero, so a narrow terminal or long
    ``details`` yields an empty bar rather than a negative width.

    Parameters
    ----------
    details : str
        Text shown after the action label
    width : int, optional
        Terminal width; queried (with an 80 column fallback) when omitted

    Returns
    -------
    int
        Bar width between 0 and 40 inclusive
    """
    if width is None:
        width = display_width()

    msg_width = Action.MAX_WIDTH + 1 + len(details)
    reserved = (
        Layout.LEADING_PAD
        + msg_width
        + Layout.GAP
        + Layout.BRACKETS
        + Layout.EXTRA
        + Layout.PERCENT_DIGITS
        + Layout.PERCENT_SIGN
    )
    available = width - reserved
    if available < 0:
        logger.debug(
            "Terminal too narrow for progress bar (width=%d, needed=%d)",
            width,
            reserved,
        )
        available = 0
    return min(available, Layout.MAX_BAR_WIDTH)


def format_action_message(action: Action, details: str) -> str:
    """Right-align the styled action label and append details."""
    padding = " " * max(Action.MAX_WIDTH - len(action.label), 0)
    return f"{padding}{style_action(action.label)} {details}"


class ProgressHandle:
    """Shared state and drawing for bars and spinners.

    Parameters
    ----------
    message : str
        Text rendered next to the indicator
    file : IO[str], optional
        Output stream, defaults to stdout at draw time
    draw : bool, optional
        Force drawing on or off; by default only terminals are drawn to
    """

    def __init__(
        self,
        message: str = "",
        file: IO[str] | None = None,
        draw: bool | None = None,
    ) -> None:
        self._message = message
        self._file = file
        self._draw = draw
        self._state = ProgressState.CREATED
        self._lock = threading.Lock()
        self._has_drawn = False

    @property
    def state(self) -> ProgressState:
        return self._state

    @property
    def is_finished(self) -> bool:
        return self._state is ProgressState.FINISHED

    @property
    def message(self) -> str:
        return self._message

    def set_message(self, message: str) -> None:
        """Replace the message and redraw."""
        with self._lock:
            if self.is_finished:
                return
            self._message = message
            self._draw_locked()

    def render(self) -> str:
        """Render the current line, including style codes."""
        with self._lock:
            return self._render_locked()

    def _render_locked(self) -> str:
        raise NotImplementedError

    def _stream(self) -> IO[str]:
        return self._file if self._file is not None else sys.stdout

    def _should_draw(self) -> bool:
        if self._draw is not None:
            return self._draw
        stream = self._stream()
        return hasattr(stream, "isatty") and stream.isatty()

    def _activate_locked(self) -> None:
        if self._state is ProgressState.CREATED:
            self._state = ProgressState.ACTIVE

    def _draw_locked(self) -> None:
        if not self._should_draw():
            return
        line = self._render_locked()
        click.echo(f"{_CLEAR_LINE}{line}", nl=False, file=self._stream())
        self._has_drawn = True

    def _stop_ticking(self) -> None:
        """Stop any background activity. Bars have none."""

    def finish(self) -> None:
        """Mark complete, draw the final state and move to a new line."""
        self._stop_ticking()
        with self._lock:
            if self.is_finished:
                return
            self._complete_locked()
            self._state = ProgressState.FINISHED
            self._draw_locked()
            if self._has_drawn:
                click.echo("", file=self._stream())

    def finish_with_message(self, message: str) -> None:
        """Replace the message, then finish."""
        self._stop_ticking()
        with self._lock:
            if self.is_finished:
                return
            self._message = message
        self.finish()

    def finish_and_clear(self) -> None:
        """Finish and erase the line."""
        self._stop_ticking()
        with self._lock:
            if self.is_finished:
                return
            self._complete_locked()
            self._state = ProgressState.FINISHED
            if self._has_drawn:
                click.echo(_CLEAR_LINE, nl=False, file=self._stream())

    def close(self) -> None:
        """Dispose of the handle, leaving the last drawn state in place.

        Safe to call in any state and more than once.
        """
        self._stop_ticking()
        with self._lock:
            if self.is_finished:
                return
            self._state = ProgressState.FINISHED
            if self._has_drawn:
                click.echo("", file=self._stream())

    def _complete_locked(self) -> None:
        """Move internal state to its completed form before the final draw."""

    def __enter__(self) -> ProgressHandle:
        return self

    def __exit__(self, exc_type, exc_value, tb) -> None:
        if exc_type is None:
            self.finish()
        else:
            self.close()


class ProgressBar(ProgressHandle):
    """Determinate progress bar.

    Parameters
    ----------
    length : int
        Total number of logical steps; 0 is an already complete bar
    message : str
        Text shown before the bar
    bar_width : int
        Columns used by the bar body, between the brackets
    file : IO[str], optional
        Output stream, defaults to stdout
    draw : bool, optional
        Force drawing on or off

    Raises
    ------
    ValueError
        If ``length`` or ``bar_width`` is negative
    """

    def __init__(
        self,
        length: int,
        message: str = "",
        bar_width: int = Layout.MAX_BAR_WIDTH,
        file: IO[str] | None = None,
        draw: bool | None = None,
    ) -> None:
        if length < 0:
            msg = f"Progress bar length must be non-negative, got {length}"
            raise ValueError(msg)
        if bar_width < 0:
            msg = f"Progress bar width must be non-negative, got {bar_width}"
            raise ValueError(msg)
        super().__init__(message=message, file=file, draw=draw)
        self._length = length
        self._position = 0
        self._bar_width = bar_width

    @property
    def length(self) -> int:
        return self._length

    @property
    def position(self) -> int:
        return self._position

    @property
    def bar_width(self) -> int:
        return self._bar_width

    @property
    def fraction(self) -> float:
        """Completed fraction, clamped to 1.0."""
        if self._length == 0:
            return 1.0
        return min(self._position / self._length, 1.0)

    @property
    def percent(self) -> int:
        return int(self.fraction * 100)

    def inc(self, delta: int = 1) -> None:
        """Advance by ``delta`` steps.

        Raises
        ------
        ValueError
            If ``delta`` is negative
        """
        if delta < 0:
            msg = f"Cannot advance a progress bar by a negative amount: {delta}"
            raise ValueError(msg)
        with self._lock:
            if self.is_finished:
                return
            self._position += delta
            self._activate_locked()
            self._draw_locked()

    def set_position(self, position: int) -> None:
        """Jump to an absolute step.

        Raises
        ------
        ValueError
            If ``position`` is negative
        """
        if position < 0:
            msg = f"Progress bar position must be non-negative, got {position}"
            raise ValueError(msg)
        with self._lock:
            if self.is_finished:
                return
            self._position = position
            self._activate_locked()
            self._draw_locked()

    def tick(self) -> None:
        """Redraw without advancing."""
        with self._lock:
            if self.is_finished:
                return
            self._activate_locked()
            self._draw_locked()

    def _complete_locked(self) -> None:
        self._position = max(self._position, self._length)

    def _render_locked(self) -> str:
        fill, head, empty = Layout.PROGRESS_CHARS
        width = self._bar_width
        fraction = self.fraction

        filled = int(fraction * width)
        has_head = 0 < fraction and filled < width
        filled_part = fill * filled + (head if has_head else "")
        empty_part = empty * (width - len(filled_part))

        bar = style_bar(filled_part, empty_part)
        return f"{self._message}  [{bar}] {self.percent:>3}%"


def _steady_tick(
    spinner_ref: Callable[[], Spinner | None],
    stop_event: threading.Event,
    interval: float,
) -> None:
    """Tick a spinner until stopped or garbage collected.

    Only a weak reference is held, so dropping the spinner ends the loop.
    """
    while not stop_event.wait(interval):
        spinner = spinner_ref()
        if spinner is None:
            break
        try:
            spinner.tick()
        except (OSError, ValueError) as e:
            logger.debug("Spinner tick stopped: %s", e)
            break
        spinner = None


class Spinner(ProgressHandle):
    """Indeterminate progress spinner.

    Parameters
    ----------
    message : str
        Text shown after the spinner glyph
    tick_chars : str
        Animation frames; the last one is shown once finished
    file : IO[str], optional
        Output stream, defaults to stdout
    draw : bool, optional
        Force drawing on or off
    """

    def __init__(
        self,
        message: str = "",
        tick_chars: str = SPINNER_TICK_CHARS,
        file: IO[str] | None = None,
        draw: bool | None = None,
    ) -> None:
        if len(tick_chars) < 2:
            msg = "Spinner needs at least one animation frame and a finished glyph"
            raise ValueError(msg)
        super().__init__(message=message, file=file, draw=draw)
        self._tick_chars = tick_chars
        self._ticks = 0
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def ticks(self) -> int:
        """Number of frames advanced so far."""
        return self._ticks

    @property
    def frame(self) -> str:
        """Glyph currently displayed."""
        if self.is_finished:
            return self._tick_chars[-1]
        frames = self._tick_chars[:-1]
        return frames[self._ticks % len(frames)]

    @property
    def is_ticking(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def enable_steady_tick(
        self,
        interval: float = SpinnerTiming.TICK_INTERVAL_S,
    ) -> None:
        """Advance the spinner on a background thread every ``interval`` seconds.

        Raises
        ------
        ValueError
            If ``interval`` is not positive
        """
        if interval <= 0:
            msg = f"Tick interval must be positive, got {interval}"
            raise ValueError(msg)
        if self._thread is not None or self.is_finished:
            return

        self._thread = threading.Thread(
            target=_steady_tick,
            args=(weakref.ref(self), self._stop_event, interval),
            name="notion-spinner",
            daemon=True,
        )
        weakref.finalize(self, self._stop_event.set)
        self._thread.start()

    def _stop_ticking(self) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=SpinnerTiming.THREAD_JOIN_TIMEOUT_S)

    def tick(self) -> None:
        """Advance one frame and redraw."""
        with self._lock:
            if self.is_finished:
                return
            self._ticks += 1
            self._activate_locked()
            self._draw_locked()

    def inc(self, delta: int = 1) -> None:
        """Advance ``delta`` frames."""
        if delta < 0:
            msg = f"Cannot advance a spinner by a negative amount: {delta}"
            raise ValueError(msg)
        with self._lock:
            if self.is_finished:
                return
            self._ticks += delta
            self._activate_locked()
            self._draw_locked()

    def _render_locked(self) -> str:
        return f"{self.frame} {self._message}"


class ProgressFactory:
    """Builds bars and spinners pre-configured for the current terminal.

    Parameters
    ----------
    width_provider : Callable[[], int], optional
        Returns the terminal width; defaults to querying the terminal with an
        80 column fallback
    file : IO[str], optional
        Output stream for created handles, defaults to stdout
    draw : bool, optional
        Force drawing on or off for created handles
    tick_interval : float
        Spinner tick period in seconds
    """

    def __init__(
        self,
        width_provider: Callable[[], int] | None = None,
        file: IO[str] | None = None,
        draw: bool | None = None,
        tick_interval: float = SpinnerTiming.TICK_INTERVAL_S,
    ) -> None:
        self._width_provider = width_provider or display_width
        self._file = file
        self._draw = draw
        self._tick_interval = tick_interval

    def bar(self, action: Action, details: str, length: int) -> ProgressBar:
        """Create a determinate bar.

        Parameters
        ----------
        action : Action
            Label shown right-aligned on the left, e.g. ``Action.FETCHING``
        details : str
            Text after the label, e.g. ``"v1.23.4"``
        length : int
            Number of logical steps

        Returns
        -------
        ProgressBar
            A bar in the ``CREATED`` state

        Raises
        ------
        ValueError
            If ``length`` is negative
        """
        bar_width = compute_bar_width(details, self._width_provider())
        return ProgressBar(
            length,
            message=format_action_message(action, details),
            bar_width=bar_width,
            file=self._file,
            draw=self._draw,
        )

    def spinner(self, message: str) -> Spinner:
        """Create a spinner that is already ticking on its own.

        Parameters
        ----------
        message : str
            Text shown after the glyph

        Returns
        -------
        Spinner
            The caller must finish or close it to stop the ticking
        """
        spinner = Spinner(message, file=self._file, draw=self._draw)
        spinner.enable_steady_tick(self._tick_interval)
        return spinner


def progress_bar(action: Action, details: str, length: int) -> ProgressBar:
    """Create a progress bar sized for the current terminal.

    Parameters
    ----------
    action : Action
        Action label, e.g. ``Action.FETCHING``
    details : str
        Details string, e.g. ``"v1.23.4"``
    length : int
        Number of logical progress steps

    Returns
    -------
    ProgressBar
        The new bar
    """
    return ProgressFactory().bar(action, details, length)


def progress_spinner(message: str) -> Spinner:
    """Create a spinner that ticks every 20ms until finished."""
    return ProgressFactory().spinner(message)
