"""Parse bank and credit card statement PDFs into structured transactions."""

from statement_parser.parsers import (
    BaseParserOptions,
    ParserType,
    StatementParser,
    create_statement_parser,
    parse_pdf,
    parse_pdfs,
    run_state_machine,
)
from statement_parser.parsers.factory import ParsePdfRequest, ParserInput
from statement_parser.pdf.reader import read_pdf, read_pdf_lines
from statement_parser.schemas.internal import ParsedOutput, ParsedTransaction, ParsePdfResult

__version__ = "0.1.0"

__all__ = [
    "BaseParserOptions",
    "ParsePdfRequest",
    "ParsePdfResult",
    "ParsedOutput",
    "ParsedTransaction",
    "ParserInput",
    "ParserType",
    "StatementParser",
    "create_statement_parser",
    "parse_pdf",
    "parse_pdfs",
    "read_pdf",
    "read_pdf_lines",
    "run_state_machine",
]
