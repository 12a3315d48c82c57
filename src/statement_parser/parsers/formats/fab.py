"""First Abu Dhabi Bank (FAB) account statement parser.

FAB statements are a header block (holder name, account number, statement
period) followed by a transaction table:

    DATE VALUE DATE DESCRIPTION DEBIT CREDIT BALANCE
    01 JAN 2024 01 JAN 2024 POS Settlement GROCERY STORE DUBAI AED 150 150.00 9,850.00

The table has a single amount column in the extracted text (debit and
credit collapse into one number), so income vs. expense is decided from the
description using ``FabParserOptions.income_keywords``.

Long descriptions can wrap onto following lines; the row is then kept as a
pending transaction on the output until the line carrying its amount and
balance shows up. A row that already ends in two whole numbers
(``Fee 5 100``) is recorded with those numbers if no continuation follows.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum

from pydantic import Field

from statement_parser.parsers.matchers import LineMatcher, first_match
from statement_parser.parsers.options import BaseParserOptions
from statement_parser.parsers.statement_parser import create_statement_parser
from statement_parser.pdf.lines import normalize_whitespace
from statement_parser.schemas.internal import ParsedOutput, ParsedTransaction, PendingTransaction

logger = logging.getLogger(__name__)


class State(Enum):
    HEADER = "header"
    TRANSACTION_LINES = "transaction-lines"
    END = "end"


DEFAULT_INCOME_KEYWORDS: tuple[str, ...] = (
    "transfer",
    "inward",
    "deposit",
    "reverse charges",
    "atm cash deposit",
    "cash deposit",
    "credit",
)

PARSER_KEYWORDS = [
    "POS Settlement",
    "Transfer",
    "Inward IPP Payment",
    "Switch Transaction",
    "SW WDL Chgs",
    "Reverse Charges",
    "VAT",
    "Balance carried forward",
    "Balance brought forward",
    "Opening balance",
    "Closing Book Balance",
    "ATM Cash Deposit",
    "Cash Deposit",
]


class FabParserOptions(BaseParserOptions):
    """FAB options: the description keywords that mark a row as income."""

    income_keywords: tuple[str, ...] = Field(
        default=DEFAULT_INCOME_KEYWORDS,
        description="Lower-case substrings that classify a description as income",
    )


class FabPendingRow(PendingTransaction):
    """A wrapped row waiting for its amount.

    When the row itself already ended in two whole numbers (``Fee 5 100``),
    they are kept as ``bare_amount`` and used if no continuation line follows.
    """

    bare_amount: Decimal | None = None
    bare_description: str | None = None


class FabParsedOutput(ParsedOutput):
    """FAB output with the wrapped-row carry of the current parse."""

    pending: FabPendingRow | None = Field(None, exclude=True)


MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

DATE_PATTERN = r"\d{1,2} [A-Za-z]{3} \d{4}"
AMOUNT_PATTERN = r"[\d,]+\.?\d*"
BALANCE_PATTERN = r"[\d,]+\.\d{2}"
CENTS_AMOUNT_PATTERN = r"\d[\d,]*\.\d{2}"

STATEMENT_PERIOD_RE = re.compile(rf"Account Statement FROM ({DATE_PATTERN}) TO ({DATE_PATTERN})")
ACCOUNT_NUMBER_RE = re.compile(r"AC-NUM (\d{3}-\d{3}-\d{7}-\d{2}-\d)")
CUSTOMER_NAME_RE = re.compile(r"^([A-Z ]+?)\s+AC-NUM")

FULL_ROW_RE = re.compile(
    rf"^({DATE_PATTERN})\s+({DATE_PATTERN})\s+(.+?)\s+({AMOUNT_PATTERN})\s+({BALANCE_PATTERN})$"
)
LEADING_DATES_RE = re.compile(rf"^({DATE_PATTERN})\s*(?:{DATE_PATTERN}\s*)?")
ROW_START_RE = re.compile(rf"^({DATE_PATTERN})(?:\s+{DATE_PATTERN})?\s+(.+)$")
CONTINUATION_END_RE = re.compile(rf"^(.*?)\s*({AMOUNT_PATTERN})\s+({BALANCE_PATTERN})$")
BARE_AMOUNTS_RE = re.compile(r"^(.+?)\s+(\d[\d,]*)\s+(\d[\d,]*)$")
CENTS_AMOUNT_RE = re.compile(CENTS_AMOUNT_PATTERN)
TRANSACTION_KEYWORD_RE = re.compile(
    r"POS Settlement|Transfer|Payment|ATM|Deposit|Withdrawal|Charges|VAT|Switch|Reverse|Inward|Outward",
    re.IGNORECASE,
)
ARABIC_ONLY_RE = re.compile(r"^[\u0600-\u06FF\s]+$")

BOILERPLATE_FRAGMENTS = (
    "Balance carried forward",
    "Balance brought forward",
    "Important:",
    "T&Cs Apply",
    "First Abu Dhabi Bank",
    "Contact Centre",
    "endeavor to get back",
    "DATE VALUE DATE DESCRIPTION",
    "Closing Book Balance",
    "Closing Statement Balance",
    "Total Debit Txns",
    "Tot. Debit Amnt",
    "Total Credit Txns",
    "Tot. Credit Amnt",
    "Debit Interest",
    "Opening balance",
    "PO Box",
    "Dubai Creek",
    "Dubai,ARE",
)
BOILERPLATE_LINE_RE = re.compile(r"^(?:\d+|ACCOUNT STATEMENT|Currency AED)$", re.IGNORECASE)


@dataclass(frozen=True)
class RowFields:
    """Fields read from one transaction row (amount is None for a wrapped row)."""

    date: date
    description: str
    amount: Decimal | None = None
    balance: Decimal | None = None


def parse_date(text: str) -> date | None:
    """Parse ``dd MON yyyy`` (e.g. ``01 JAN 2024``); None when invalid."""
    parts = text.split(" ")
    if len(parts) != 3:
        return None
    day, month_name, year = parts
    month = MONTHS.get(month_name.upper())
    if not month or not day.isdigit() or not year.isdigit():
        return None
    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None


def parse_amount(text: str) -> Decimal | None:
    """Parse a statement amount such as ``9,850.00``; None when invalid."""
    try:
        return Decimal(text.replace(",", ""))
    except InvalidOperation:
        return None


def is_income_description(description: str, income_keywords: tuple[str, ...]) -> bool:
    lowered = description.lower()
    return any(keyword in lowered for keyword in income_keywords)


def is_boilerplate(line: str) -> bool:
    """Page banners, table headers and summary rows inside the table."""
    if not line:
        return True
    if any(fragment in line for fragment in BOILERPLATE_FRAGMENTS):
        return True
    if line.startswith("Sheet no."):
        return True
    return bool(BOILERPLATE_LINE_RE.match(line) or ARABIC_ONLY_RE.match(line))


def _is_table_start(lowered: str) -> bool:
    if "date value date description debit credit balance" in lowered:
        return True
    return "balance" in lowered and ("opening" in lowered or "brought forward" in lowered)


def _is_table_end(lowered: str) -> bool:
    return (
        "closing book balance" in lowered
        or "closing statement balance" in lowered
        or "end of statement" in lowered
        or ("total" in lowered and "txns" in lowered)
    )


# Row matchers, tried in order.


def match_full_row(line: str) -> RowFields | None:
    """``DATE VALUE_DATE DESCRIPTION AMOUNT BALANCE``"""
    match = FULL_ROW_RE.match(line)
    if not match:
        return None
    transaction_date = parse_date(match.group(1))
    description = match.group(3).strip()
    amount = parse_amount(match.group(4))
    balance = parse_amount(match.group(5))
    if transaction_date is None or not description or amount is None or balance is None:
        return None
    return RowFields(transaction_date, description, amount, balance)


def match_loose_row(line: str) -> RowFields | None:
    """A dated row with a transaction keyword and two amounts somewhere after the dates.

    The second-to-last amount is the transaction amount, the last one the
    balance; the description is everything before the amount.
    """
    dates = LEADING_DATES_RE.match(line)
    if not dates or not TRANSACTION_KEYWORD_RE.search(line):
        return None
    transaction_date = parse_date(dates.group(1))
    if transaction_date is None:
        return None

    remainder = line[dates.end():]
    amounts = list(CENTS_AMOUNT_RE.finditer(remainder))
    if len(amounts) < 2:
        return None
    amount_match, balance_match = amounts[-2], amounts[-1]
    description = remainder[: amount_match.start()].strip()
    amount = parse_amount(amount_match.group(0))
    balance = parse_amount(balance_match.group(0))
    if not description or amount is None or balance is None:
        return None
    return RowFields(transaction_date, description, amount, balance)


def match_row_start(line: str) -> RowFields | None:
    """A dated row whose amount and balance wrap onto a later line."""
    match = ROW_START_RE.match(line)
    if not match:
        return None
    transaction_date = parse_date(match.group(1))
    if transaction_date is None:
        return None
    return RowFields(transaction_date, match.group(2).strip())


ROW_MATCHERS: list[LineMatcher[RowFields]] = [
    LineMatcher("full_row", match_full_row),
    LineMatcher("loose_row", match_loose_row),
    LineMatcher("row_start", match_row_start),
]


def build_transaction(
    transaction_date: date,
    description: str,
    amount: Decimal,
    original_text: list[str],
    income_keywords: tuple[str, ...],
) -> ParsedTransaction | None:
    """Sign the amount by description keywords; None for zero amounts."""
    if amount == 0:
        return None
    signed = abs(amount) if is_income_description(description, income_keywords) else -abs(amount)
    return ParsedTransaction(
        date=transaction_date,
        amount=signed,
        description=description,
        original_text=original_text,
    )


def extract_account_info(line: str, output: ParsedOutput) -> None:
    """Read holder name, account suffix and statement period from any line."""
    account_match = ACCOUNT_NUMBER_RE.search(line)
    if account_match:
        output.account_suffix = account_match.group(1).split("-")[-1]

        name_match = CUSTOMER_NAME_RE.match(line)
        if name_match:
            output.name = name_match.group(1).strip()

    period_match = STATEMENT_PERIOD_RE.search(line)
    if period_match:
        start_date = parse_date(period_match.group(1))
        end_date = parse_date(period_match.group(2))

        if start_date:
            output.start_date = start_date
            output.year_prefix = start_date.year // 100

        if end_date:
            output.end_date = end_date


def _record(output: FabParsedOutput, transaction: ParsedTransaction | None) -> None:
    if transaction is not None:
        output.add_transaction(transaction)


def _start_pending(fields: RowFields, line: str) -> FabPendingRow:
    pending = FabPendingRow(date=fields.date, description_parts=[fields.description], original_text=[line])
    bare = BARE_AMOUNTS_RE.match(fields.description)
    if bare:
        pending.bare_amount = parse_amount(bare.group(2))
        pending.bare_description = bare.group(1).strip()
    return pending


def _close_pending(output: FabParsedOutput, options: FabParserOptions, reason: str) -> None:
    """Settle the pending row once no continuation can follow it.

    A row that ended in two whole numbers is recorded with the first one as
    its amount; any other unresolved row is dropped.
    """
    pending = output.pending
    if pending is None:
        return
    output.pending = None

    if pending.bare_amount is not None and pending.bare_description:
        _record(
            output,
            build_transaction(
                pending.date,
                pending.bare_description,
                pending.bare_amount,
                pending.original_text,
                options.income_keywords,
            ),
        )
        return
    logger.debug("Dropping unresolved row %r (%s)", pending.original_text, reason)


def _read_transaction_line(line: str, output: FabParsedOutput, options: FabParserOptions) -> None:
    if _is_table_end(line.lower()):
        _close_pending(output, options, "end of table")
        return
    if is_boilerplate(line):
        return

    hit = first_match(ROW_MATCHERS, line)
    if hit is not None:
        matcher_name, fields = hit
        _close_pending(output, options, "new row started")
        if fields.amount is None:
            output.pending = _start_pending(fields, line)
            return
        logger.debug("Row matched by %s: %r", matcher_name, line)
        _record(
            output,
            build_transaction(
                fields.date, fields.description, fields.amount, [line], options.income_keywords
            ),
        )
        return

    pending = output.pending
    if pending is None:
        return

    # Trailing whole numbers followed by more text were part of the description
    pending.bare_amount = None

    end_match = CONTINUATION_END_RE.match(line)
    if end_match:
        pending.extend(line, end_match.group(1).strip())
        amount = parse_amount(end_match.group(2))
        output.pending = None
        if amount is not None and pending.description:
            _record(
                output,
                build_transaction(
                    pending.date,
                    pending.description,
                    amount,
                    pending.original_text,
                    options.income_keywords,
                ),
            )
        return

    pending.extend(line, line)


def perform_state_action(
    current_state: State,
    line: str,
    output: FabParsedOutput,
    parser_options: FabParserOptions,
) -> FabParsedOutput:
    clean_line = normalize_whitespace(line)

    extract_account_info(clean_line, output)

    if output.year_prefix is None:
        output.year_prefix = parser_options.year_prefix

    if current_state is State.TRANSACTION_LINES:
        _read_transaction_line(clean_line, output, parser_options)
    elif current_state is State.END:
        _close_pending(output, parser_options, "statement ended")

    return output


def next_state(current_state: State, line: str, parser_options: FabParserOptions) -> State:
    clean_line = normalize_whitespace(line).lower()

    if current_state is State.HEADER:
        if _is_table_start(clean_line):
            return State.TRANSACTION_LINES
    elif current_state is State.TRANSACTION_LINES:
        if _is_table_end(clean_line):
            return State.END

    return current_state


fab_bank_account_parser = create_statement_parser(
    initial_state=State.HEADER,
    end_state=State.END,
    next=next_state,
    action=perform_state_action,
    parser_keywords=PARSER_KEYWORDS,
    default_options=FabParserOptions(),
    output_factory=FabParsedOutput,
)
