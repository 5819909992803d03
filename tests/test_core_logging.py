"""Tests for logging setup."""

import json
import logging

import pytest

from mention_engine.core.config import Settings
from mention_engine.core.logging import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    def test_fields(self):
        record = logging.LogRecord(
            "mention_engine.analysis.pipeline", logging.INFO, __file__, 1, "Analyzing %s", ("Acme",), None
        )
        record.brand = "Acme"
        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "mention_engine.analysis.pipeline"
        assert data["message"] == "Analyzing Acme"
        assert data["brand"] == "Acme"
        assert "timestamp" in data


class TestSetupLogging:
    def test_json_handler(self, restore_root_logger):
        setup_logging(Settings(log_level="debug", log_json=True))
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_plain_handler(self, restore_root_logger):
        setup_logging(Settings(log_level="WARNING", log_json=False))
        root = restore_root_logger
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)
