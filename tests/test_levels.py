"""Tests for the level filter."""

import logging

import pytest

from logbatch.levels import LEVELS, LevelFilter, level_value


class TestLevelValue:
    @pytest.mark.parametrize("level,expected", [
        ("debug", 10),
        ("info", 20),
        ("warn", 30),
        ("error", 40),
    ])
    def test_known_levels(self, level, expected):
        assert level_value(level) == expected

    def test_case_and_whitespace_insensitive(self):
        assert level_value("  WARN ") == 30

    def test_unknown_level(self):
        assert level_value("trace") == -1

    def test_none(self):
        assert level_value(None) == -1

    def test_levels_order(self):
        assert list(LEVELS) == ["debug", "info", "warn", "error"]


class TestLevelFilter:
    def test_default_threshold_allows_everything(self):
        f = LevelFilter()
        assert f.threshold == 0
        for level in LEVELS:
            assert f.allows(level) is True

    def test_configure_sets_threshold(self):
        f = LevelFilter()
        assert f.configure("warn") is True
        assert f.threshold == 30
        assert f.allows("debug") is False
        assert f.allows("info") is False
        assert f.allows("warn") is True
        assert f.allows("error") is True

    def test_invalid_level_keeps_previous_threshold(self, caplog):
        f = LevelFilter()
        f.configure("error")
        with caplog.at_level(logging.WARNING, logger="logbatch.levels"):
            assert f.configure("verbose") is False
        assert f.threshold == 40
        assert "invalid log level" in caplog.text

    def test_absent_level_warns_and_keeps_threshold(self, caplog):
        f = LevelFilter()
        f.configure("info")
        with caplog.at_level(logging.WARNING, logger="logbatch.levels"):
            assert f.configure(None) is False
        assert f.threshold == 20
        assert "invalid log level" in caplog.text
