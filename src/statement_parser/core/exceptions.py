"""Custom exception classes for statement parsing.

This module defines a hierarchy of exceptions used throughout the
parsing pipeline. Each exception maps to a specific error code
defined in errors.py.
"""

from typing import Any

from statement_parser.core.errors import get_error


class StatementParserError(Exception):
    """Base exception for all statement parsing errors.

    All custom exceptions inherit from this base class and include
    an error_code that maps to the error catalog.

    Attributes:
        error_code: Code from the error catalog (e.g., "PARSE_001")
        details: Additional context about the error (for logging)
    """

    default_error_code = "UNKNOWN"

    def __init__(
        self,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py (default: class default)
            details: Additional error context
        """
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.error_code)

    def __str__(self) -> str:
        message = get_error(self.error_code)["message"]
        if self.details:
            context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
            return f"[{self.error_code}] {message} ({context})"
        return f"[{self.error_code}] {message}"


class SourceUnavailableError(StatementParserError):
    """Raised when the statement document cannot be opened or read.

    Common causes:
    - Missing file (PARSE_001)
    - Corrupted or non-PDF content (PARSE_001)
    - Encrypted document (PARSE_002)
    """

    default_error_code = "PARSE_001"


class PluginLogicError(StatementParserError):
    """Raised when a format parser's action or transition function fails.

    The original exception is kept as ``__cause__``. ``details`` carries the
    document name, line index, current state and line text.
    """

    default_error_code = "PARSE_003"


class ParserOptionsError(StatementParserError):
    """Raised when caller-supplied parser options fail validation."""

    default_error_code = "CONFIG_001"


class UnknownParserTypeError(StatementParserError):
    """Raised when a parser type is not in the registry."""

    default_error_code = "CONFIG_002"
