"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from slumbering_ancients.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


def _console_handler() -> logging.Handler:
    root_logger = logging.getLogger()
    return next(h for h in root_logger.handlers if type(h) is logging.StreamHandler)


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("debug", logging.DEBUG),  # Test lowercase
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)
        assert _console_handler().level == expected_level

    def test_root_logger_level_is_debug(self):
        setup_logging(log_level="ERROR", enable_file=False)
        assert logging.getLogger().level == logging.DEBUG


class TestSetupLoggingFormats:
    """Test setup_logging with different log formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
            ("unknown", DETAILED_FORMAT),
        ],
    )
    def test_setup_logging_with_different_formats(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)
        assert _console_handler().formatter._fmt == expected_format


class TestSetupLoggingFileHandling:
    """Test file logging switches."""

    def test_file_handler_added_when_enabled(self, tmp_path: Path):
        with (
            patch("slumbering_ancients.core.logging_config.ENABLE_FILE_LOGGING", True),
            patch("slumbering_ancients.core.logging_config.LOG_FILE_DIR", str(tmp_path / "logs")),
        ):
            setup_logging(enable_file=True)

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG
        assert (tmp_path / "logs").is_dir()
        setup_logging(enable_file=False)

    def test_no_file_handler_when_disabled_in_settings(self):
        with patch("slumbering_ancients.core.logging_config.ENABLE_FILE_LOGGING", False):
            setup_logging(enable_file=True)
        assert not [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]

    def test_existing_handlers_replaced(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)
        assert len(logging.getLogger().handlers) == 1


class TestModuleLevels:
    """Test per-module log levels."""

    @pytest.mark.parametrize(
        "module_name,expected_level",
        [
            ("slumbering_ancients.ingestion", "DEBUG"),
            ("slumbering_ancients.server", "INFO"),
            ("sqlalchemy.engine", "WARNING"),
            ("httpx", "WARNING"),
        ],
    )
    def test_module_specific_log_levels(self, module_name, expected_level):
        setup_logging(enable_file=False)
        assert MODULE_LOG_LEVELS[module_name] == expected_level
        assert logging.getLogger(module_name).level == logging.getLevelName(expected_level)


class TestGetLogger:
    def test_get_logger_returns_named_logger(self):
        logger = get_logger("slumbering_ancients.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "slumbering_ancients.test"

    def test_same_name_returns_same_instance(self):
        assert get_logger("a.b") is get_logger("a.b")
