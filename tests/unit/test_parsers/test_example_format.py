"""Tests for the example statement parser."""

from datetime import date
from decimal import Decimal

from statement_parser.parsers.formats.example import (
    ExampleParserOptions,
    State,
    example_statement_parser,
    next_state,
    read_payment,
)

LINES = [
    "Example Statement",
    "01/15 Coffee Shop $-4.50",
    "02/01 Paycheck $1,200.00",
    "not a payment",
    "end inner state",
    "03/01 After the end $99.00",
]


class TestExampleParser:
    """Test suite for the example parser."""

    def test_parse_text(self):
        result = example_statement_parser.parse_text(LINES)

        assert [(t.date, t.amount, t.description) for t in result.incomes] == [
            (date(2000, 2, 1), Decimal("1200.00"), "Paycheck"),
        ]
        assert [(t.date, t.amount, t.description) for t in result.expenses] == [
            (date(2000, 1, 15), Decimal("-4.50"), "Coffee Shop"),
        ]

    def test_year_from_options(self):
        result = example_statement_parser.parse_text(
            LINES, parser_options={"year_prefix": 19, "year_suffix": 99}
        )

        assert result.incomes[0].date == date(1999, 2, 1)

    def test_first_line_is_header(self):
        result = example_statement_parser.parse_text(["01/15 Header Row $5.00", "01/16 Row $6.00"])

        assert [t.description for t in result.incomes] == ["Row"]

    def test_transitions(self):
        assert next_state(State.HEADER, "anything", ExampleParserOptions()) is State.INNER_STATE
        assert next_state(State.INNER_STATE, "END INNER STATE", ExampleParserOptions()) is State.END
        assert next_state(State.END, "01/01 x $1.00", ExampleParserOptions()) is State.END

    def test_read_payment_rejects_bad_rows(self):
        options = ExampleParserOptions()

        assert read_payment("13/45 Bad Date $1.00", options) is None
        assert read_payment("01/01 Free $0.00", options) is None
        assert read_payment("01/01 Broken $.", options) is None
