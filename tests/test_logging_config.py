"""Tests for fbgraph logging setup."""

import json
import logging

from fbgraph.config import Settings
from fbgraph.logging_config import LIBRARY_LOGGER, JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="fbgraph.services.graph_request",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=10,
        msg="GET %s",
        args=("/me",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "fbgraph.services.graph_request"
        assert entry["message"] == "GET /me"

    def test_request_extras(self):
        entry = json.loads(JSONFormatter().format(_record(method="GET", path="/me", status_code=200)))
        assert entry["method"] == "GET"
        assert entry["path"] == "/me"
        assert entry["status_code"] == 200


class TestSetupLogging:
    def test_production_uses_json(self):
        setup_logging(app_env="production", log_level="INFO")
        logger = logging.getLogger(LIBRARY_LOGGER)
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_development_replaces_handlers(self):
        setup_logging(app_env="development", log_level="DEBUG")
        setup_logging(app_env="development", log_level="DEBUG")
        logger = logging.getLogger(LIBRARY_LOGGER)
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_defaults_from_settings(self, monkeypatch):
        monkeypatch.setattr("fbgraph.logging_config.settings", Settings(app_env="production", _env_file=None))
        logger = setup_logging()
        assert logger.level == logging.INFO
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
