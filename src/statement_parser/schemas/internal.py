"""Internal data schemas for parsed statement data.

These models are the accumulators format parsers fill in line by line,
plus the envelope returned by batch parsing.
"""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, field_serializer, field_validator
from pydantic.alias_generators import to_camel


def to_utc_instant(value: dt.date) -> str:
    """Render a calendar date as an ISO-8601 UTC instant (midnight)."""
    return f"{value.isoformat()}T00:00:00.000Z"


class _CamelModel(BaseModel):
    """Base for models exported with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParsedTransaction(_CamelModel):
    """Represents a single transaction extracted from a statement.

    The sign of ``amount`` is the income/expense signal: incomes are
    positive, expenses negative. Zero amounts are rejected.
    """

    date: dt.date = Field(..., description="Transaction date")
    amount: Decimal = Field(..., description="Signed amount (positive for income)")
    description: str = Field(..., description="Transaction description")
    original_text: list[str] = Field(
        default_factory=list,
        description="Raw statement line(s) the transaction was read from",
    )

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        """Ensure description is not empty."""
        if not v or not v.strip():
            raise ValueError("Description cannot be empty")
        return v.strip()

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, v: Decimal) -> Decimal:
        if v == 0:
            raise ValueError("Transaction amount cannot be zero")
        return v

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @field_serializer("date", when_used="json")
    def _serialize_date(self, value: dt.date) -> str:
        return to_utc_instant(value)

    @field_serializer("amount", when_used="json")
    def _serialize_amount(self, value: Decimal) -> float:
        return float(value)


class PendingTransaction(BaseModel):
    """A transaction row whose amount has not been seen yet.

    Lives on the accumulator of a single parse, so concurrent parses of the
    same format never share it.
    """

    date: dt.date
    description_parts: list[str] = Field(default_factory=list)
    original_text: list[str] = Field(default_factory=list)

    @property
    def description(self) -> str:
        return " ".join(part for part in self.description_parts if part).strip()

    def extend(self, line: str, description_part: str | None = None) -> None:
        """Record a continuation line."""
        self.original_text.append(line)
        if description_part:
            self.description_parts.append(description_part)


class ParsedOutput(_CamelModel):
    """Accumulated result of parsing one bank or credit card statement.

    Every optional field stays ``None`` until a line provides it.
    """

    name: str | None = Field(None, description="Account holder name")
    account_suffix: str | None = Field(None, description="Trailing account number digits")
    year_prefix: int | None = Field(None, description="Century prefix for two-digit years")
    start_date: dt.date | None = Field(None, description="Statement period start")
    end_date: dt.date | None = Field(None, description="Statement period end")
    incomes: list[ParsedTransaction] = Field(default_factory=list)
    expenses: list[ParsedTransaction] = Field(default_factory=list)

    @field_serializer("start_date", "end_date", when_used="json")
    def _serialize_period(self, value: dt.date | None) -> str | None:
        return to_utc_instant(value) if value is not None else None

    def add_transaction(self, transaction: ParsedTransaction) -> None:
        """Append a transaction to incomes or expenses according to its sign."""
        if transaction.is_income:
            self.incomes.append(transaction)
        else:
            self.expenses.append(transaction)

    @property
    def transaction_count(self) -> int:
        return len(self.incomes) + len(self.expenses)

    def to_json_dict(self) -> dict[str, Any]:
        """Export as JSON-ready data (camelCase keys, ISO instants, numbers)."""
        return self.model_dump(mode="json", by_alias=True)


class ParsePdfResult(BaseModel):
    """Outcome of parsing one document inside a batch.

    Exactly one of ``data`` and ``error_code`` is set.
    """

    type: str = Field(..., description="Parser type used")
    file_path: str = Field(..., description="Path of the parsed document")
    name: str | None = Field(None, description="Caller-supplied document name")
    data: SerializeAsAny[ParsedOutput] | None = Field(None, description="Parsed output")
    error_code: str | None = Field(None, description="Error catalog code on failure")
    error: str | None = Field(None, description="Error message on failure")

    @property
    def ok(self) -> bool:
        return self.error_code is None
