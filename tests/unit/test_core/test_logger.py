"""Tests for logging setup."""

import logging

import pytest

from statement_parser.core.logger import setup_logging


@pytest.fixture
def root_logger():
    """Restore root logger handlers and levels after each test."""
    root = logging.getLogger()
    library_loggers = [logging.getLogger(name) for name in ("pypdf", "pdfminer")]
    handlers, level = list(root.handlers), root.level
    library_levels = [logger.level for logger in library_loggers]
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    for logger, library_level in zip(library_loggers, library_levels):
        logger.setLevel(library_level)


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_level(self, root_logger):
        setup_logging("debug")

        assert root_logger.level == logging.DEBUG
        assert logging.getLogger("pypdf").level == logging.WARNING
        assert logging.getLogger("pdfminer").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, root_logger):
        setup_logging("chatty")

        assert root_logger.level == logging.INFO

    def test_log_file(self, root_logger, tmp_path):
        log_file = tmp_path / "logs" / "parser.log"

        setup_logging("INFO", str(log_file))
        logging.getLogger("statement_parser.test").info("hello")
        for handler in root_logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "hello" in log_file.read_text()
