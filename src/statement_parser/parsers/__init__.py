"""Statement parsing module.

This module turns reconstructed statement lines into structured output
with a generic line-driven state machine:
- run_state_machine walks the lines and delegates to a format definition
- StatementParser bundles a format with its keywords and default options
- Formats live in ``statement_parser.parsers.formats``
"""

from statement_parser.parsers.detector import ParserDetector
from statement_parser.parsers.factory import ParserType, get_parser, parse_pdf, parse_pdfs, parsers
from statement_parser.parsers.options import BaseParserOptions, merge_parser_options
from statement_parser.parsers.state_machine import StateMachineDefinition, run_state_machine
from statement_parser.parsers.statement_parser import StatementParser, create_statement_parser

__all__ = [
    "BaseParserOptions",
    "ParserDetector",
    "ParserType",
    "StateMachineDefinition",
    "StatementParser",
    "create_statement_parser",
    "get_parser",
    "merge_parser_options",
    "parse_pdf",
    "parse_pdfs",
    "parsers",
    "run_state_machine",
]
