"""Implemented statement formats.

Each module defines a state enum, a transition function, an action
function and the resulting ``StatementParser``.
"""

from .example import example_statement_parser
from .fab import fab_bank_account_parser

__all__ = ["example_statement_parser", "fab_bank_account_parser"]
