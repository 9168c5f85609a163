"""Tests for ContextualLogger and the log formatters."""

import json
import logging

from kepixel.core.logging import ContextualLogger, _JsonFormatter, _TextFormatter, logger


def _record(dimensions=None) -> logging.LogRecord:
    record = logging.LogRecord("kepixel", logging.WARNING, __file__, 1, "hello", None, None)
    record.dimensions = dimensions or {}
    return record


class TestContextualLogger:
    def test_with_context_does_not_leak_into_parent(self):
        child = logger.with_context(app_id="app-1")
        grandchild = child.with_context(component="heartbeat")

        assert logger.dimensions == {}
        assert child.dimensions == {"app_id": "app-1"}
        assert grandchild.dimensions == {"app_id": "app-1", "component": "heartbeat"}

    def test_with_prefix(self):
        prefixed = logger.with_prefix("[dispatch] ")

        msg, _ = prefixed.process("sent", {})

        assert msg == "[dispatch] sent"

    def test_dimensions_reach_the_record(self, caplog):
        with caplog.at_level(logging.INFO, logger="kepixel"):
            logger.with_context(app_id="app-1").info("tracked")

        assert caplog.records[-1].dimensions == {"app_id": "app-1"}

    def test_is_logger_adapter(self):
        assert isinstance(logger, ContextualLogger)
        assert isinstance(logger, logging.LoggerAdapter)


class TestFormatters:
    def test_text_appends_dimensions(self):
        text = _TextFormatter("%(message)s").format(_record({"app_id": "a"}))

        assert text == "hello [app_id=a]"

    def test_json_line(self):
        payload = json.loads(_JsonFormatter().format(_record({"app_id": "a"})))

        assert payload["message"] == "hello"
        assert payload["level"] == "WARNING"
        assert payload["app_id"] == "a"
