"""Tests for logging setup."""

import json
import logging
import sys

import pytest

from depgather.config import Settings, load_settings
from depgather.logging_config import HANDLER_NAME, LOGGER_NAME, JsonLineFormatter, setup_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers, saved_level = logger.handlers[:], logger.level
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def _own_handlers(logger):
    return [h for h in logger.handlers if h.get_name() == HANDLER_NAME]


class TestSetupLogging:
    def test_level_comes_from_settings(self, clean_logger):
        logger = setup_logging(Settings(log_level="warning"))

        assert logger is clean_logger
        assert logger.level == logging.WARNING
        assert _own_handlers(logger)[0].stream is sys.stderr

    def test_env_level_reaches_logger(self, clean_logger, monkeypatch):
        monkeypatch.setenv("DEPGATHER_LOG_LEVEL", "DEBUG")

        assert setup_logging(load_settings()).level == logging.DEBUG

    def test_defaults_to_loaded_settings(self, clean_logger, monkeypatch):
        monkeypatch.setenv("DEPGATHER_LOG_LEVEL", "ERROR")

        assert setup_logging().level == logging.ERROR

    def test_exported_from_package_root(self):
        import depgather

        assert depgather.setup_logging is setup_logging
        assert depgather.load_settings is load_settings

    def test_repeat_call_replaces_own_handler(self, clean_logger):
        setup_logging(Settings())
        logger = setup_logging(Settings(log_level="DEBUG"), structured=True)

        handlers = _own_handlers(logger)
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JsonLineFormatter)
        assert logger.level == logging.DEBUG

    def test_keeps_host_handlers(self, clean_logger):
        host = logging.NullHandler()
        clean_logger.addHandler(host)

        logger = setup_logging(Settings())

        assert host in logger.handlers
        assert len(logger.handlers) == 2


class TestJsonLineFormatter:
    def test_formats_json(self):
        record = logging.LogRecord("depgather.core", logging.WARNING, __file__, 1, "Failed %s", ("x",), None)

        entry = json.loads(JsonLineFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "depgather.core"
        assert entry["message"] == "Failed x"
        assert entry["time"].endswith("+00:00")
        assert "exc_info" not in entry

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("depgather", logging.ERROR, __file__, 1, "oops", (), sys.exc_info())

        entry = json.loads(JsonLineFormatter().format(record))

        assert "ValueError: boom" in entry["exc_info"]
