"""Parser registry and batch parsing.

This module orchestrates the parsing workflow for callers that hold file
paths rather than parsers:
1. Resolve the parser (explicit type, or detection from the text)
2. Reconstruct the document's lines
3. Run the parser and package the result

Batch parsing isolates documents: one failing statement is reported in its
own result and never aborts the others.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any, Sequence

from pydantic import BaseModel, Field

from statement_parser.core.config import settings
from statement_parser.core.exceptions import StatementParserError, UnknownParserTypeError
from statement_parser.parsers.detector import ParserDetector
from statement_parser.parsers.formats import example_statement_parser, fab_bank_account_parser
from statement_parser.parsers.statement_parser import StatementParser
from statement_parser.pdf.reader import check_that_pdf_exists, read_pdf_lines
from statement_parser.schemas.internal import ParsedOutput, ParsePdfResult

logger = logging.getLogger(__name__)


class ParserType(str, Enum):
    FAB_BANK = "fab-bank"
    EXAMPLE = "example"


parsers: dict[ParserType, StatementParser] = {
    ParserType.FAB_BANK: fab_bank_account_parser,
    ParserType.EXAMPLE: example_statement_parser,
}


def is_parser_type(value: Any) -> bool:
    """Check whether a value names a registered parser type."""
    if isinstance(value, ParserType):
        return True
    return isinstance(value, str) and value in {parser_type.value for parser_type in ParserType}


def get_parser(parser_type: ParserType | str) -> StatementParser:
    """Look up a registered parser.

    Raises:
        UnknownParserTypeError: If the type is not registered
    """
    if not is_parser_type(parser_type):
        raise UnknownParserTypeError(details={"type": parser_type})
    return parsers[ParserType(parser_type)]


class ParserInput(BaseModel):
    """One document to parse and how to parse it."""

    file_path: str = Field(..., description="Path to the statement PDF")
    parser_options: dict[str, Any] | None = Field(None, description="Overrides of the parser defaults")
    debug: bool | None = Field(None, description="Trace state steps (default: settings.DEBUG)")
    name: str | None = Field(None, description="Name used in logs and errors")


class ParsePdfRequest(BaseModel):
    """A document paired with its parser type (None means detect it)."""

    type: ParserType | None = None
    parser_input: ParserInput


def parse_pdf(request: ParsePdfRequest, detector: ParserDetector | None = None) -> tuple[ParserType, ParsedOutput]:
    """Parse one document.

    Args:
        request: Document and parser type
        detector: Detector used when ``request.type`` is None

    Returns:
        The parser type used and the parsed output

    Raises:
        SourceUnavailableError: If the file is missing or unreadable
        UnknownParserTypeError: If no parser type is given or detected
        PluginLogicError: If the parser fails on a line
    """
    parser_input = request.parser_input
    check_that_pdf_exists(parser_input.file_path)
    lines = read_pdf_lines(parser_input.file_path)

    parser_type = request.type
    if parser_type is None:
        parser_type = (detector or ParserDetector(parsers)).detect(lines)
        if parser_type is None:
            raise UnknownParserTypeError(
                details={"file_path": parser_input.file_path, "reason": "format not detected"}
            )

    parser = get_parser(parser_type)
    output = parser.parse_text(
        lines,
        parser_input.parser_options,
        debug=parser_input.debug,
        name=parser_input.name or parser_input.file_path,
    )
    return parser_type, output


def _parse_isolated(request: ParsePdfRequest, detector: ParserDetector) -> ParsePdfResult:
    parser_input = request.parser_input
    try:
        parser_type, output = parse_pdf(request, detector)
    except StatementParserError as e:
        logger.warning("Failed to parse %s: %s", parser_input.file_path, e)
        return ParsePdfResult(
            type=request.type.value if request.type else "unknown",
            file_path=parser_input.file_path,
            name=parser_input.name,
            error_code=e.error_code,
            error=str(e),
        )
    except Exception as e:
        logger.exception("Unexpected error parsing %s", parser_input.file_path)
        return ParsePdfResult(
            type=request.type.value if request.type else "unknown",
            file_path=parser_input.file_path,
            name=parser_input.name,
            error_code="UNKNOWN",
            error=f"{type(e).__name__}: {e}",
        )

    return ParsePdfResult(
        type=parser_type.value,
        file_path=parser_input.file_path,
        name=parser_input.name,
        data=output,
    )


def parse_pdfs(
    requests: Sequence[ParsePdfRequest],
    max_workers: int | None = None,
) -> list[ParsePdfResult]:
    """Parse several documents concurrently.

    Every document gets its own parser run and accumulator, so documents
    share no mutable state.

    Args:
        requests: Documents to parse
        max_workers: Thread count (default: ``settings.MAX_WORKERS``)

    Returns:
        One result per request, in request order
    """
    if not requests:
        return []

    detector = ParserDetector(parsers)
    workers = max(1, min(max_workers or settings.MAX_WORKERS, len(requests)))
    logger.info("Parsing %d statements with %d workers", len(requests), workers)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(executor.map(lambda request: _parse_isolated(request, detector), requests))

    failed = sum(1 for result in results if not result.ok)
    if failed:
        logger.warning("%d of %d statements failed to parse", failed, len(results))
    return results
