"""
Shared logging utilities.
"""

import logging
import sys
from pathlib import Path

from statement_parser.core.config import settings

# Configure logging format
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure root logger.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR').
            Defaults to ``settings.LOG_LEVEL``.
        log_file: Optional log file path. Defaults to ``settings.LOG_FILE``.
    """
    level = level or settings.LOG_LEVEL
    log_file = log_file or settings.LOG_FILE
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console_handler.setFormatter(console_formatter)

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(log_level)
        file_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    # PDF libraries are chatty about malformed fonts on real bank statements
    for library in ("pypdf", "pdfminer"):
        logging.getLogger(library).setLevel(max(log_level, logging.WARNING))
