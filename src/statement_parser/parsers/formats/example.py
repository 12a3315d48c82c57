"""Minimal example parser.

Shows the smallest useful format: one header line, then payment rows
shaped ``mm/dd DESCRIPTION $AMOUNT`` until the literal line
``end inner state``.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum

from pydantic import Field

from statement_parser.parsers.options import BaseParserOptions
from statement_parser.parsers.statement_parser import create_statement_parser
from statement_parser.schemas.internal import ParsedOutput, ParsedTransaction


class State(Enum):
    HEADER = "header"
    INNER_STATE = "inner-state"
    END = "end"


class ExampleParserOptions(BaseParserOptions):
    year_suffix: int = Field(default=0, ge=0, le=99, description="Last two digits of the statement year")


VALID_PAYMENT_RE = re.compile(r"(\d{2})/(\d{2})\s+(.+)\$([-,.\d]+)")


def read_payment(line: str, parser_options: ExampleParserOptions) -> ParsedTransaction | None:
    match = VALID_PAYMENT_RE.search(line)
    if not match:
        return None
    month, day, description, amount_text = match.groups()
    try:
        amount = Decimal(amount_text.replace(",", ""))
        transaction_date = date(parser_options.year_prefix * 100 + parser_options.year_suffix, int(month), int(day))
    except (InvalidOperation, ValueError):
        return None
    if amount == 0 or not description.strip():
        return None
    return ParsedTransaction(
        date=transaction_date,
        amount=amount,
        description=description,
        original_text=[line],
    )


def perform_state_action(
    current_state: State,
    line: str,
    output: ParsedOutput,
    parser_options: ExampleParserOptions,
) -> ParsedOutput:
    if current_state is State.INNER_STATE:
        transaction = read_payment(line, parser_options)
        if transaction:
            output.add_transaction(transaction)

    return output


def next_state(current_state: State, line: str, parser_options: ExampleParserOptions) -> State:
    line = line.lower()

    if current_state is State.HEADER:
        return State.INNER_STATE
    if current_state is State.INNER_STATE and line == "end inner state":
        return State.END

    return current_state


example_statement_parser = create_statement_parser(
    initial_state=State.HEADER,
    end_state=State.END,
    next=next_state,
    action=perform_state_action,
    parser_keywords=[],
    default_options=ExampleParserOptions(),
)
