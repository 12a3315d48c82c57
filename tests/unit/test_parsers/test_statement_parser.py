"""Tests for StatementParser."""

import logging
from enum import Enum

import pytest

from statement_parser.core.exceptions import ParserOptionsError, SourceUnavailableError
from statement_parser.parsers.options import BaseParserOptions
from statement_parser.parsers.statement_parser import StatementParser, create_statement_parser
from statement_parser.schemas.internal import ParsedOutput


class State(Enum):
    HEADER = "header"
    END = "end"


def next_state(state, line, options):
    return State.END if line == "stop" else state


def remember_prefix(state, line, output, options):
    output.year_prefix = options.year_prefix
    return output


@pytest.fixture
def parser() -> StatementParser:
    return create_statement_parser(
        initial_state=State.HEADER,
        end_state=State.END,
        next=next_state,
        action=remember_prefix,
        parser_keywords=["Opening balance", "Closing balance"],
    )


class TestStatementParser:
    """Test suite for StatementParser."""

    def test_states_exposed(self, parser):
        assert parser.initial_state is State.HEADER
        assert parser.end_state is State.END

    def test_default_output_factory(self, parser):
        output = parser.parse_text(["line"])

        assert isinstance(output, ParsedOutput)
        assert output.year_prefix == 20

    def test_empty_text_returns_fresh_output(self, parser):
        output = parser.parse_text([])

        assert output == ParsedOutput()
        assert output.incomes == []
        assert output.name is None

    def test_each_run_gets_a_new_output(self, parser):
        first = parser.parse_text(["a"])
        second = parser.parse_text(["a"])

        assert first == second
        assert first is not second

    def test_parser_options_override(self, parser):
        output = parser.parse_text(["line"], parser_options={"year_prefix": 19})

        assert output.year_prefix == 19

    def test_default_options(self):
        parser = StatementParser(
            initial_state=State.HEADER,
            end_state=State.END,
            next=next_state,
            action=remember_prefix,
            default_options=BaseParserOptions(year_prefix=18),
        )

        assert parser.parse_text(["line"]).year_prefix == 18

    def test_invalid_options(self, parser):
        with pytest.raises(ParserOptionsError):
            parser.parse_text(["line"], parser_options={"year_prefix": "soon"})

    def test_find_keywords(self, parser):
        assert parser.find_keywords(["Opening balance 10.00", "row"]) == ["Opening balance"]
        assert parser.find_keywords([]) == []

    def test_debug_traces_keywords(self, parser, caplog):
        with caplog.at_level(logging.INFO):
            parser.parse_text(["Opening balance 1.00"], debug=True, name="doc")

        assert any(
            "keywords found: ['Opening balance'], missing: ['Closing balance']" in record.getMessage()
            for record in caplog.records
        )

    def test_parse_pdf_missing_file(self, parser, tmp_path):
        with pytest.raises(SourceUnavailableError):
            parser.parse_pdf(tmp_path / "missing.pdf")

    def test_parse_pdf_checks_file_before_options(self, parser, tmp_path):
        """A missing file is reported before anything else is looked at."""
        with pytest.raises(SourceUnavailableError):
            parser.parse_pdf(tmp_path / "missing.pdf", parser_options={"year_prefix": 1000})

    def test_parse_pdf(self, parser, make_pdf):
        path = make_pdf([[(40, 700, "Opening balance 1.00")]])

        output = parser.parse_pdf(path, parser_options={"year_prefix": 19})

        assert output.year_prefix == 19
