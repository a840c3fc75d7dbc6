"""Tests for impactiq.logging_config."""

import logging

import pytest

from impactiq import config, logging_config
from impactiq.logging_config import setup_logging


@pytest.fixture
def fresh_logger(monkeypatch):
    """Run setup_logging against a clean 'impactiq' logger and restore it afterwards."""
    app_logger = logging.getLogger("impactiq")
    handlers = list(app_logger.handlers)
    level = app_logger.level
    propagate = app_logger.propagate
    monkeypatch.setattr(logging_config, "_logging_configured", False)

    yield app_logger

    app_logger.handlers = handlers
    app_logger.setLevel(level)
    app_logger.propagate = propagate


class TestSetupLogging:
    def test_attaches_one_handler(self, fresh_logger):
        before = len(fresh_logger.handlers)
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(fresh_logger.handlers) == before + 1
        assert fresh_logger.propagate is False

    def test_later_calls_change_level(self, fresh_logger):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert fresh_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, fresh_logger):
        setup_logging("LOUD")
        assert fresh_logger.level == logging.INFO

    def test_format(self, fresh_logger):
        setup_logging("INFO")
        formatter = fresh_logger.handlers[-1].formatter
        assert formatter._fmt == "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

    def test_default_level_from_settings(self, fresh_logger, monkeypatch):
        monkeypatch.setattr(config.settings, "log_level", "DEBUG")
        setup_logging()
        assert fresh_logger.level == logging.DEBUG

    def test_explicit_level_wins_over_settings(self, fresh_logger, monkeypatch):
        monkeypatch.setattr(config.settings, "log_level", "DEBUG")
        setup_logging("WARNING")
        assert fresh_logger.level == logging.WARNING
