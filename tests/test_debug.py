"""Tests for the debug manager and command-line log level wiring."""

import argparse
import logging

import pytest

from cube4.debug import debug, DebugLevel
from run import configure_debug


def debug_args(level, debug_flag=False):
    return argparse.Namespace(debug=debug_flag, debug_level=level, log_file=None)


class TestSetFromString:
    def test_enables_debug_messages(self, caplog):
        debug.set_from_string("debug")
        debug.debug("column scan", "board")
        assert ("cube4", logging.DEBUG, "[board] column scan") in caplog.record_tuples

    def test_case_insensitive(self, caplog):
        debug.set_from_string("INFO")
        assert "Debug level set to INFO" in caplog.text
        debug.debug("hidden", "board")
        assert "hidden" not in caplog.text

    def test_unknown_level_keeps_current(self, caplog):
        debug.set_from_string("loud")
        assert "Unknown debug level: loud" in caplog.text
        debug.info("still quiet")
        assert "still quiet" not in caplog.text

    def test_none_silences_errors(self, caplog):
        debug.set_from_string("none")
        debug.error("suppressed")
        assert "suppressed" not in caplog.text


class TestConfigureDebug:
    @pytest.mark.parametrize("level,shown,hidden", [
        ("error", DebugLevel.ERROR, DebugLevel.WARNING),
        ("info", DebugLevel.INFO, DebugLevel.DEBUG),
    ])
    def test_debug_level_argument(self, caplog, level, shown, hidden):
        configure_debug(debug_args(level))
        debug.log(shown, "visible line")
        debug.log(hidden, "filtered line")
        assert "visible line" in caplog.text
        assert "filtered line" not in caplog.text

    def test_debug_flag_wins(self, caplog):
        configure_debug(debug_args("error", debug_flag=True))
        debug.debug("verbose line")
        assert "verbose line" in caplog.text


class TestTimers:
    def test_end_without_start(self, caplog):
        assert debug.end_timer("never_started") is None
        assert "Timer 'never_started' not started" in caplog.text

    def test_elapsed(self):
        debug.start_timer("measured")
        elapsed = debug.end_timer("measured")
        assert elapsed is not None and elapsed >= 0
