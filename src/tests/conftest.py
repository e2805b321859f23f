"""Root pytest configuration and shared fixtures for the Notion test suite."""

import io
import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from notion_core.constants import EnvVars  # noqa: E402


@pytest.fixture(autouse=True)
def clean_reporter_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test with the dev-mode and backtrace flags unset."""
    monkeypatch.delenv(EnvVars.DEV, raising=False)
    monkeypatch.delenv(EnvVars.BACKTRACE, raising=False)


@pytest.fixture
def dev_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable developer mode through the environment."""
    monkeypatch.setenv(EnvVars.DEV, "1")


@pytest.fixture
def backtrace_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable backtraces through the environment."""
    monkeypatch.setenv(EnvVars.BACKTRACE, "1")


@pytest.fixture
def fixed_width(monkeypatch: pytest.MonkeyPatch):
    """Pin the terminal width seen by the progress layout.

    Returns a setter; call it with a column count, or None to simulate an
    unavailable terminal.
    """

    def _set(columns: int | None) -> None:
        monkeypatch.setattr(
            "notion_core.style.terminal.terminal_width",
            lambda: columns,
        )

    return _set


@pytest.fixture
def spinners() -> Generator[list, None, None]:
    """Collect spinners created by a test and stop them afterwards."""
    created: list = []
    yield created
    for spinner in created:
        spinner.close()


class _BrokenPipeWriter(io.RawIOBase):
    """Raw writer that fails like a closed pipe until repaired."""

    def __init__(self) -> None:
        super().__init__()
        self.broken = True

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        if self.broken:
            raise BrokenPipeError(32, "Broken pipe")
        return len(b)


@pytest.fixture
def broken_pipe() -> Generator[io.TextIOWrapper, None, None]:
    """A text stream whose writes fail with BrokenPipeError on flush."""
    raw = _BrokenPipeWriter()
    stream = io.TextIOWrapper(io.BufferedWriter(raw), encoding="utf-8")
    yield stream
    raw.broken = False
    stream.close()
