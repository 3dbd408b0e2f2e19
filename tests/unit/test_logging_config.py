# tests/unit/test_logging_config.py
"""Tests for JSON log formatting and -l level mapping."""

import json
import logging
import sys

import pytest

from faktory_cli.logging_config import JsonFormatter, configure_logging, parse_level


def _record(level=logging.INFO, msg="hello %s", args=("world",), exc_info=None):
    return logging.LogRecord("faktory_cli.test", level, __file__, 1, msg, args, exc_info)


@pytest.fixture
def root_level():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    yield root
    root.setLevel(saved_level)
    root.handlers[:] = saved_handlers


class TestParseLevel:
    @pytest.mark.parametrize("name,level", [
        ("error", logging.ERROR),
        ("warn", logging.WARNING),
        ("INFO", logging.INFO),
        ("debug", logging.DEBUG),
        ("verbose", logging.INFO),
    ])
    def test_levels(self, name, level):
        assert parse_level(name) == level


class TestJsonFormatter:
    def test_fields(self):
        line = json.loads(JsonFormatter().format(_record(level=logging.WARNING)))

        assert line["level"] == "warn"
        assert line["msg"] == "hello world"
        assert line["logger"] == "faktory_cli.test"
        assert isinstance(line["pid"], int)
        assert "error" not in line

    def test_exception_summary_without_traceback(self, root_level):
        root_level.setLevel(logging.INFO)
        try:
            raise ValueError("bad toml")
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        line = json.loads(JsonFormatter().format(record))

        assert line["error"] == "ValueError: bad toml"
        assert "exc" not in line

    def test_traceback_at_debug(self, root_level):
        root_level.setLevel(logging.DEBUG)
        try:
            raise ValueError("bad toml")
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        line = json.loads(JsonFormatter().format(record))

        assert "Traceback" in line["exc"]


class TestConfigureLogging:
    def test_single_stderr_handler(self, root_level):
        configure_logging("debug")
        configure_logging("warn")

        assert len(root_level.handlers) == 1
        assert isinstance(root_level.handlers[0].formatter, JsonFormatter)
        assert root_level.level == logging.WARNING
