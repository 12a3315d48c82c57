"""Tests for the error catalog and exception hierarchy."""

import pytest

from statement_parser.core.errors import (
    ERROR_CATALOG,
    ErrorDefinition,
    get_definition,
    get_error,
    get_suggestion,
    get_user_message,
    is_retryable,
)
from statement_parser.core.exceptions import (
    ParserOptionsError,
    PluginLogicError,
    SourceUnavailableError,
    StatementParserError,
    UnknownParserTypeError,
)


class TestErrorCatalog:
    """Test suite for the error catalog."""

    def test_codes_match_keys(self):
        for code, definition in ERROR_CATALOG.items():
            assert definition["code"] == code

    def test_get_definition(self):
        definition = get_definition("PARSE_002")

        assert isinstance(definition, ErrorDefinition)
        assert definition.code == "PARSE_002"
        assert definition.retry_allowed is False

    def test_unknown_code(self):
        error = get_error("NOPE_999")

        assert error["code"] == "UNKNOWN"
        assert "NOPE_999" in error["message"]
        assert is_retryable("NOPE_999")

    def test_messages(self):
        assert get_user_message("CONFIG_002") == "This statement format is not supported."
        assert get_suggestion("PARSE_001").startswith("Check that the file exists")
        assert not is_retryable("PARSE_003")


class TestExceptions:
    """Test suite for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exception_class,code",
        [
            (SourceUnavailableError, "PARSE_001"),
            (PluginLogicError, "PARSE_003"),
            (ParserOptionsError, "CONFIG_001"),
            (UnknownParserTypeError, "CONFIG_002"),
        ],
    )
    def test_default_codes(self, exception_class, code):
        error = exception_class()

        assert isinstance(error, StatementParserError)
        assert error.error_code == code
        assert error.details == {}

    def test_code_override(self):
        assert SourceUnavailableError("PARSE_002").error_code == "PARSE_002"

    def test_str_without_details(self):
        assert str(UnknownParserTypeError()) == "[CONFIG_002] Unknown parser type"

    def test_str_with_details(self):
        error = PluginLogicError(details={"line_index": 3, "state": "header"})

        assert str(error) == (
            "[PARSE_003] Statement format parser failed while processing a line "
            "(line_index=3, state='header')"
        )
