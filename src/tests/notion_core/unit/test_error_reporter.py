"""Tests for error reporting to stderr."""

import sys

import pytest

from notion_core.config import ReporterConfig
from notion_core.exceptions import NotionError
from notion_core.style.errors import (
    ErrorContext,
    ErrorReporter,
    display_error,
    display_error_prefix,
    display_unknown_error,
    get_backtrace,
)

BUG_REQUEST = (
    "Notion is still a pre-alpha project, so we expect to run into some bugs,\n"
    "but we'd love to hear about them so we can fix them!\n"
    "\n"
    "Please feel free to reach out to us at @notionjs on Twitter or file an issue at:\n"
    "\n"
    "    https://github.com/notion-cli/notion/issues\n"
    "\n"
)

BACKTRACE_HINT = "Run with NOTION_DEV=1 and NOTION_BACKTRACE=1 for a backtrace.\n"


def _raised(exc: Exception) -> Exception:
    try:
        raise exc
    except Exception as e:  # noqa: BLE001
        return e


class TestErrorPrefix:
    """Tests for the context-dependent prefix."""

    def test_notion_prefix(self, capsys):
        """Test the terse prefix for the main tool."""
        display_error_prefix(ErrorContext.NOTION)
        captured = capsys.readouterr()
        assert captured.err == "error: "
        assert captured.out == ""

    def test_shim_prefix(self, capsys):
        """Test the explicit prefix for shims."""
        display_error_prefix(ErrorContext.SHIM)
        captured = capsys.readouterr()
        assert captured.err == "Notion error: "


class TestDisplayError:
    """Tests for expected, user-facing errors."""

    def test_notion_error_line(self, capsys):
        """Test the exact output for the main tool."""
        display_error(ErrorContext.NOTION, "x")
        assert capsys.readouterr().err == "error: x\n"

    def test_shim_prefix_is_longer_and_named(self, capsys):
        """Test the shim prefix names the tool and is longer."""
        display_error(ErrorContext.NOTION, "x")
        notion_out = capsys.readouterr().err
        display_error(ErrorContext.SHIM, "x")
        shim_out = capsys.readouterr().err

        assert shim_out == "Notion error: x\n"
        assert len(shim_out) > len(notion_out)
        assert "Notion" in shim_out

    def test_renders_any_object_with_str(self, capsys):
        """Test non-string errors are rendered with str()."""
        display_error(ErrorContext.NOTION, NotionError("no such version"))
        assert capsys.readouterr().err == "error: no such version\n"


class TestUnknownErrorUserMode:
    """Tests for internal errors without developer mode."""

    def test_emits_bug_request_verbatim(self, capsys):
        """Test the three-paragraph message is written exactly."""
        display_unknown_error(ErrorContext.NOTION, NotionError("boom"))
        assert capsys.readouterr().err == (
            "error: an internal error occurred\n\n" + BUG_REQUEST
        )

    @pytest.mark.parametrize(
        "err",
        [NotionError("boom", backtrace="frame 0"), ValueError("other"), "text"],
    )
    def test_ignores_error_content(self, capsys, err):
        """Test the message does not depend on the failure."""
        display_unknown_error(ErrorContext.SHIM, err)
        output = capsys.readouterr().err
        assert output == "Notion error: an internal error occurred\n\n" + BUG_REQUEST

    def test_backtrace_flag_alone_changes_nothing(
        self,
        capsys,
        backtrace_enabled,
    ):
        """Test NOTION_BACKTRACE without NOTION_DEV is ignored."""
        display_unknown_error(ErrorContext.NOTION, NotionError("boom", "frame 0"))
        output = capsys.readouterr().err
        assert "frame 0" not in output
        assert output.endswith(BUG_REQUEST)


class TestUnknownErrorDevMode:
    """Tests for internal errors in developer mode."""

    def test_details_and_backtrace(self, capsys, dev_mode, backtrace_enabled):
        """Test the backtrace is printed when both flags are set."""
        err = NotionError("boom", backtrace="frame 0\nframe 1")
        display_unknown_error(ErrorContext.NOTION, err)
        assert capsys.readouterr().err == (
            "error: an internal error occurred\n"
            "\n"
            "details: NotionError('boom')\n"
            "\n"
            "frame 0\n"
            "frame 1\n"
        )

    def test_hint_without_backtrace_flag(self, capsys, dev_mode):
        """Test the instructional line replaces the backtrace."""
        err = NotionError("boom", backtrace="frame 0")
        display_unknown_error(ErrorContext.NOTION, err)
        output = capsys.readouterr().err
        assert "frame 0" not in output
        assert output.endswith("details: NotionError('boom')\n\n" + BACKTRACE_HINT)

    def test_hint_when_error_has_no_backtrace(
        self,
        capsys,
        dev_mode,
        backtrace_enabled,
    ):
        """Test the hint is shown if there is nothing to print."""
        display_unknown_error(ErrorContext.NOTION, ValueError("never raised"))
        output = capsys.readouterr().err
        assert "details: ValueError('never raised')" in output
        assert output.endswith(BACKTRACE_HINT)

    def test_traceback_of_raised_exception(
        self,
        capsys,
        dev_mode,
        backtrace_enabled,
    ):
        """Test a raised exception's traceback is used as its backtrace."""
        display_unknown_error(ErrorContext.SHIM, _raised(KeyError("node")))
        output = capsys.readouterr().err
        assert output.startswith("Notion error: an internal error occurred\n")
        assert "Traceback (most recent call last)" in output
        assert "KeyError: 'node'" in output

    def test_flags_reread_on_each_call(self, capsys, monkeypatch):
        """Test environment changes are observed without restart."""
        display_unknown_error(ErrorContext.NOTION, NotionError("boom"))
        assert "pre-alpha" in capsys.readouterr().err

        monkeypatch.setenv("NOTION_DEV", "1")
        display_unknown_error(ErrorContext.NOTION, NotionError("boom"))
        output = capsys.readouterr().err
        assert "pre-alpha" not in output
        assert "details:" in output

    def test_backtrace_capture_failure_shows_hint(
        self,
        capsys,
        dev_mode,
        backtrace_enabled,
    ):
        """Test a backtrace callable that raises does not abort the report."""

        class Failure:
            def backtrace(self) -> str:
                raise RuntimeError("no frames")

            def __repr__(self) -> str:
                return "Failure()"

        display_unknown_error(ErrorContext.NOTION, Failure())
        output = capsys.readouterr().err
        assert "details: Failure()\n" in output
        assert output.endswith(BACKTRACE_HINT)

    def test_broken_repr_falls_back(self, capsys, dev_mode):
        """Test an error whose repr raises is still reported."""

        class BadRepr:
            def __repr__(self) -> str:
                raise TypeError("unrepresentable")

        display_unknown_error(ErrorContext.NOTION, BadRepr())
        output = capsys.readouterr().err
        assert "details: <" in output
        assert "BadRepr object at" in output
        assert output.endswith(BACKTRACE_HINT)


class TestErrorReporterInjection:
    """Tests for ErrorReporter with an injected config."""

    def test_injected_config_overrides_environment(self, capsys, dev_mode):
        """Test an explicit config wins over NOTION_DEV."""
        reporter = ErrorReporter(ReporterConfig(dev_mode=False))
        reporter.report_unknown_error(ErrorContext.NOTION, NotionError("boom"))
        assert capsys.readouterr().err.endswith(BUG_REQUEST)

    def test_injected_dev_config(self, capsys):
        """Test dev details without touching the environment."""
        reporter = ErrorReporter(ReporterConfig(dev_mode=True, backtrace_enabled=True))
        reporter.report_unknown_error(
            ErrorContext.NOTION,
            NotionError("boom", backtrace="frame 0"),
        )
        assert capsys.readouterr().err.endswith("frame 0\n")

    def test_config_property_reads_environment(self, dev_mode):
        """Test the config property falls back to the environment."""
        assert ErrorReporter().config.dev_mode is True

    def test_report_error(self, capsys):
        """Test report_error on an instance."""
        ErrorReporter().report_error(ErrorContext.SHIM, "bad shim")
        assert capsys.readouterr().err == "Notion error: bad shim\n"

    def test_write_failure_propagates(self, broken_pipe, monkeypatch):
        """Test an unwritable stderr raises instead of being swallowed."""
        monkeypatch.setattr(sys, "stderr", broken_pipe)
        with pytest.raises(OSError):
            display_error(ErrorContext.NOTION, "cannot write this")


class TestGetBacktrace:
    """Tests for backtrace extraction."""

    def test_explicit_attribute(self):
        """Test an explicit backtrace attribute is used."""
        assert get_backtrace(NotionError("x", backtrace="frame\n")) == "frame"

    def test_callable_attribute(self):
        """Test a callable backtrace attribute is invoked."""

        class Failure:
            def backtrace(self) -> str:
                return "from callable"

        assert get_backtrace(Failure()) == "from callable"

    def test_unraised_exception(self):
        """Test an exception that was never raised has no backtrace."""
        assert get_backtrace(RuntimeError("x")) is None

    def test_plain_object(self):
        """Test arbitrary objects have no backtrace."""
        assert get_backtrace("just text") is None

    def test_raised_exception(self):
        """Test the traceback of a raised exception is formatted."""
        backtrace = get_backtrace(_raised(RuntimeError("x")))
        assert backtrace is not None
        assert backtrace.endswith("RuntimeError: x")

    def test_raising_callable(self):
        """Test a backtrace callable that raises yields no backtrace."""

        class Failure:
            def backtrace(self) -> str:
                raise RuntimeError("no frames")

        assert get_backtrace(Failure()) is None
