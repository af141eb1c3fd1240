"""Tests for logging formatters, setup and context enrichment."""

import json
import logging
import sys

import pytest

from app.utils.logger import (
    ContextLoggerAdapter,
    JSONFormatter,
    StandardFormatter,
    add_log_context,
    get_log_level_from_string,
    setup_logging,
)


def make_record(msg: str = "hello %s", args: tuple = ("world",), exc_info=None) -> logging.LogRecord:
    return logging.LogRecord("app.test", logging.INFO, __file__, 10, msg, args, exc_info)


class TestJSONFormatter:
    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(make_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "app.test"
        assert entry["message"] == "hello world"
        assert "timestamp" in entry
        assert "extra" not in entry
        assert "source" not in entry

    def test_extra_fields(self):
        record = make_record()
        record.url = "https://x.com/dev/status/1"
        record.platform = "twitter"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["extra"] == {"url": "https://x.com/dev/status/1", "platform": "twitter"}

    def test_exception(self):
        try:
            raise ValueError("bad caption")
        except ValueError:
            record = make_record("failed", (), sys.exc_info())

        entry = json.loads(JSONFormatter().format(record))

        assert entry["exception"]["type"] == "ValueError"
        assert entry["exception"]["message"] == "bad caption"
        assert "Traceback" in entry["exception"]["traceback"]

    def test_source_location(self):
        entry = json.loads(JSONFormatter(include_source_location=True).format(make_record()))

        assert entry["source"]["lineno"] == 10

    def test_unserializable_extra(self):
        record = make_record()
        record.payload = object()

        entry = json.loads(JSONFormatter().format(record))

        assert entry["extra"]["payload"].startswith("<object")


class TestLevels:
    @pytest.mark.parametrize(
        "name, level",
        [("debug", logging.DEBUG), ("INFO", logging.INFO), ("warn", logging.WARNING), ("critical", logging.CRITICAL)],
    )
    def test_known(self, name: str, level: int):
        assert get_log_level_from_string(name) == level

    def test_unknown_defaults_to_info(self):
        assert get_log_level_from_string("verbose") == logging.INFO


class TestSetupLogging:
    @pytest.fixture
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        urllib3_level = logging.getLogger("urllib3").level
        yield root
        root.handlers = handlers
        root.setLevel(level)
        logging.getLogger("urllib3").setLevel(urllib3_level)

    def test_json(self, restore_root):
        setup_logging(log_level="debug", json_logs=True)

        assert len(restore_root.handlers) == 1
        assert isinstance(restore_root.handlers[0].formatter, JSONFormatter)
        assert restore_root.handlers[0].formatter.include_source_location is True
        assert restore_root.level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_text(self, restore_root):
        setup_logging(log_level="error", json_logs=False, third_party_level="critical")

        assert isinstance(restore_root.handlers[0].formatter, StandardFormatter)
        assert restore_root.level == logging.ERROR
        assert logging.getLogger("urllib3").level == logging.CRITICAL


class TestContext:
    def test_adapter_type(self):
        assert isinstance(add_log_context(logging.getLogger("app.test"), url="u"), ContextLoggerAdapter)

    def test_merges_with_call_extra(self):
        adapter = add_log_context(logging.getLogger("app.test"), url="https://example.com", platform="article")

        _, kwargs = adapter.process("msg", {"extra": {"platform": "twitter", "step": "scrape"}})

        assert kwargs["extra"] == {"platform": "twitter", "step": "scrape", "url": "https://example.com"}

    def test_without_call_extra(self):
        adapter = add_log_context(logging.getLogger("app.test"), url="https://example.com")

        _, kwargs = adapter.process("msg", {})

        assert kwargs["extra"] == {"url": "https://example.com"}
