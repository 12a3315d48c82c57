"""Error codes and user-friendly messages.

This module defines the error catalog for statement parsing.
Each error has:
- error_code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

from dataclasses import dataclass


@dataclass
class ErrorDefinition:
    """Definition of a single error type."""

    code: str
    message: str
    user_message: str
    suggestion: str
    retry_allowed: bool


# Error catalog for statement parsing
ERROR_CATALOG: dict[str, dict] = {
    "PARSE_001": {
        "code": "PARSE_001",
        "message": "Statement document could not be opened or read",
        "user_message": "We couldn't open this statement.",
        "suggestion": "Check that the file exists and is a readable PDF.",
        "retry_allowed": False,
    },
    "PARSE_002": {
        "code": "PARSE_002",
        "message": "Statement document is encrypted",
        "user_message": "Password-protected statements are not supported.",
        "suggestion": "Save an unprotected copy of the statement and try again.",
        "retry_allowed": False,
    },
    "PARSE_003": {
        "code": "PARSE_003",
        "message": "Statement format parser failed while processing a line",
        "user_message": "This statement doesn't match the selected format.",
        "suggestion": "Check that the right parser type was chosen for this statement.",
        "retry_allowed": False,
    },
    "CONFIG_001": {
        "code": "CONFIG_001",
        "message": "Invalid parser options",
        "user_message": "The parser options are invalid.",
        "suggestion": "Check option names and values (year_prefix must be 0-99).",
        "retry_allowed": False,
    },
    "CONFIG_002": {
        "code": "CONFIG_002",
        "message": "Unknown parser type",
        "user_message": "This statement format is not supported.",
        "suggestion": "Use one of the registered parser types.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        # Return a generic error if code not found
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Report the statement layout if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_definition(error_code: str) -> ErrorDefinition:
    """Get error definition as a typed object."""
    return ErrorDefinition(**get_error(error_code))


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable.

    Args:
        error_code: Error code from the catalog

    Returns:
        True if the operation can be retried, False otherwise
    """
    return get_error(error_code)["retry_allowed"]
