"""Unit tests for log formatting."""

import json
import logging

from bundleresolver.logging import JSONFormatter, get_context_logger


class TestJSONFormatter:
    """Test structured log output."""

    def test_includes_extra_fields(self):
        record = logging.LogRecord(
            "bundleresolver.test", logging.INFO, __file__, 10, "Fetched %s", ("x",), None
        )
        record.bundle = "com.example.app"

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Fetched x"
        assert data["level"] == "INFO"
        assert data["bundle"] == "com.example.app"
        assert "args" not in data

    def test_context_logger_adds_context(self, caplog):
        logger = get_context_logger("bundleresolver.test", platform="ios")

        with caplog.at_level(logging.INFO, logger="bundleresolver.test"):
            logger.info("hello")

        assert caplog.records[0].platform == "ios"
