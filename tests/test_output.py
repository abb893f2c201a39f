"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output and log routing
- print_json and print_table in all modes
- Global instance management
- Convenience functions
"""

from __future__ import annotations

import json
import logging

import pytest
from rich.logging import RichHandler

from opscatalog import output as output_module
from opscatalog.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("opscatalog.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("opscatalog.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    """Test that AUTO format resolves correctly based on environment."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty):
        mgr = OutputManager(format=OutputFormat.AUTO, no_color=True)
        assert mgr.format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        assert mgr.format == OutputFormat.JSON

    def test_explicit_plain_stays_plain(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        mgr = OutputManager(format=OutputFormat.PLAIN)
        assert mgr.format == OutputFormat.PLAIN


# ------------------------------------------------------------------ #
# NO_COLOR / TERM=dumb detection
# ------------------------------------------------------------------ #


class TestColorDisabling:
    """Test that NO_COLOR and TERM=dumb are respected."""

    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Test that data goes to stdout and diagnostics go to stderr."""

    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_data("hello world")
        captured = capfd.readouterr()
        assert captured.out == "hello world\n"
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        getattr(mgr, method)("a message")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "a message" in captured.err

    def test_error_prefix(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.error("something broke")
        assert capfd.readouterr().err == "Error: something broke\n"

    def test_warning_prefix(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.warning("be careful")
        assert capfd.readouterr().err == "Warning: be careful\n"


# ------------------------------------------------------------------ #
# Quiet mode
# ------------------------------------------------------------------ #


class TestQuietMode:
    """Test that --quiet suppresses info/success but not warning/error."""

    @pytest.mark.parametrize("method", ["info", "success"])
    def test_quiet_suppresses(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        getattr(mgr, method)("should not appear")
        assert capfd.readouterr().err == ""

    @pytest.mark.parametrize("method", ["warning", "error"])
    def test_quiet_does_not_suppress(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        getattr(mgr, method)("important")
        assert "important" in capfd.readouterr().err

    def test_quiet_does_not_suppress_stdout_data(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.print_data("important data")
        assert "important data" in capfd.readouterr().out

    def test_quiet_property(self, non_tty):
        assert OutputManager(quiet=True).is_quiet is True
        assert OutputManager().is_quiet is False


# ------------------------------------------------------------------ #
# Verbose mode and logging
# ------------------------------------------------------------------ #


class TestVerboseMode:
    """Test that --verbose enables debug output and library log records."""

    def test_debug_hidden_by_default(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.debug("should not appear")
        assert capfd.readouterr().err == ""

    def test_debug_prefix_in_no_color(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        mgr.debug("trace info")
        assert capfd.readouterr().err == "[debug] trace info\n"

    def test_configure_logging_verbose_level(self, non_tty):
        OutputManager(verbose=True).configure_logging()
        assert logging.getLogger("opscatalog").level == logging.DEBUG

    def test_configure_logging_default_level(self, non_tty):
        OutputManager().configure_logging()
        assert logging.getLogger("opscatalog").level == logging.WARNING

    def test_configure_logging_replaces_handler(self, non_tty):
        OutputManager().configure_logging()
        OutputManager(verbose=True).configure_logging()
        handlers = logging.getLogger("opscatalog").handlers
        assert sum(isinstance(h, RichHandler) for h in handlers) == 1

    def test_library_records_reach_stderr(self, capfd, non_tty):
        OutputManager(no_color=True, verbose=True).configure_logging()
        logging.getLogger("opscatalog.catalog.extractor").debug("resolved %s", "PageSize")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "resolved PageSize" in captured.err


# ------------------------------------------------------------------ #
# print_json
# ------------------------------------------------------------------ #


class TestPrintJson:
    def test_plain_is_indented_json(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_json({"name": "", "tags": [0]})
        out = capfd.readouterr().out
        assert out == '{\n  "name": "",\n  "tags": [\n    0\n  ]\n}\n'

    def test_json_mode_round_trips(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        mgr.print_json({"enabled": False, "when": None})
        assert json.loads(capfd.readouterr().out) == {"enabled": False, "when": None}

    def test_rich_mode_still_contains_keys(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_json({"loginAttempts": 0})
        assert "loginAttempts" in capfd.readouterr().out


# ------------------------------------------------------------------ #
# print_table
# ------------------------------------------------------------------ #


class TestPrintTable:
    HEADERS = ["Key", "Label"]
    ROWS = [["admins", "Admins"], ["kycjobcontroller", "Kyc Job"]]

    def test_plain_is_tab_separated(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_table(self.HEADERS, self.ROWS)
        lines = capfd.readouterr().out.splitlines()
        assert lines == ["Key\tLabel", "admins\tAdmins", "kycjobcontroller\tKyc Job"]

    def test_json_is_list_of_records(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        mgr.print_table(self.HEADERS, self.ROWS)
        assert json.loads(capfd.readouterr().out) == [
            {"Key": "admins", "Label": "Admins"},
            {"Key": "kycjobcontroller", "Label": "Kyc Job"},
        ]

    def test_rich_includes_title_and_cells(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_table(self.HEADERS, self.ROWS, title="Domains (2)")
        out = capfd.readouterr().out
        assert "Domains (2)" in out
        assert "Kyc Job" in out


# ------------------------------------------------------------------ #
# Global instance management
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self, non_tty):
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output_replaces_global(self, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        set_output(mgr)
        assert get_output() is mgr

    def test_reset_output(self, non_tty):
        set_output(OutputManager())
        reset_output()
        assert output_module._output is None

    def test_convenience_functions_use_global(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True))
        output_module.print_data("data")
        output_module.info("info")
        output_module.debug("dbg")
        captured = capfd.readouterr()
        assert captured.out == "data\n"
        assert "info" in captured.err
        assert "[debug] dbg" in captured.err
