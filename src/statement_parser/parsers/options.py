"""Parser options shared by every statement format."""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from statement_parser.core.config import settings
from statement_parser.core.exceptions import ParserOptionsError


class BaseParserOptions(BaseModel):
    """Options every format parser understands.

    Format parsers subclass this to add their own fields; the defaults of a
    parser are always merged with caller overrides before a run.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    year_prefix: int = Field(
        default_factory=lambda: settings.YEAR_PREFIX,
        ge=0,
        le=99,
        description="Century prefix used to expand two-digit years (20 -> 20xx)",
    )


OptionsT = TypeVar("OptionsT", bound=BaseParserOptions)


def merge_parser_options(
    defaults: OptionsT,
    overrides: BaseParserOptions | dict[str, Any] | None = None,
) -> OptionsT:
    """Merge caller overrides over a parser's default options.

    Args:
        defaults: The parser's default options
        overrides: Partial options as a mapping, an options instance, or None

    Returns:
        A validated options instance of the same type as ``defaults``

    Raises:
        ParserOptionsError: If an override is unknown or invalid
    """
    if overrides is None:
        return defaults

    if isinstance(overrides, BaseParserOptions):
        overrides = overrides.model_dump(exclude_unset=True)

    merged = {**defaults.model_dump(), **overrides}
    try:
        return type(defaults).model_validate(merged)
    except ValidationError as e:
        raise ParserOptionsError(
            details={"overrides": dict(overrides), "errors": e.errors(include_url=False)}
        ) from e
