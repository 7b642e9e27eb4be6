"""Tests for logging setup."""

import logging

import pytest

from module_insight.logging_config import get_logger, log_level, setup_logging


class TestLogLevel:
    @pytest.mark.parametrize(
        "verbose,quiet,expected",
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.ERROR),
        ],
    )
    def test_flags(self, verbose, quiet, expected):
        assert log_level(verbose, quiet) == expected


class TestSetupLogging:
    def test_sets_package_logger_level(self):
        logger = logging.getLogger("module_insight")
        previous = logger.level
        try:
            assert setup_logging(verbose=True) is logger
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)


class TestGetLogger:
    def test_namespaced(self):
        assert get_logger("resolution.resolver").name == "module_insight.resolution.resolver"
        assert get_logger("module_insight.graph").name == "module_insight.graph"
        assert get_logger().name == "module_insight"
