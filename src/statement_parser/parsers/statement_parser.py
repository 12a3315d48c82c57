"""Statement parser: a format definition bundled with its defaults.

A ``StatementParser`` is what callers hold on to. It knows the format's
states and functions, the keywords the format expects to see, the default
options, and how to build a fresh output for each run.
"""

import logging
import os
from enum import Enum
from typing import Any, Callable, Generic, Iterable, TypeVar

from statement_parser.core.config import settings
from statement_parser.parsers.options import BaseParserOptions, merge_parser_options
from statement_parser.parsers.state_machine import (
    ActionFunction,
    NextStateFunction,
    StateMachineDefinition,
    run_state_machine,
)
from statement_parser.pdf.reader import check_that_pdf_exists, read_pdf_lines
from statement_parser.schemas.internal import ParsedOutput

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=Enum)
OutputT = TypeVar("OutputT")


class StatementParser(Generic[StateT, OutputT]):
    """Parser for one statement layout.

    Example:
        >>> output = fab_bank_account_parser.parse_text(lines)
        >>> output.incomes[0].amount
        Decimal('5000.00')
    """

    def __init__(
        self,
        *,
        initial_state: StateT,
        end_state: StateT,
        next: NextStateFunction,
        action: ActionFunction,
        parser_keywords: Iterable[str] = (),
        default_options: BaseParserOptions | None = None,
        output_factory: Callable[[], OutputT] = ParsedOutput,
    ):
        """Initialize the parser.

        Args:
            initial_state: State the machine starts in
            end_state: Absorbing terminal state
            next: Transition function
            action: Per-line action function
            parser_keywords: Substrings this layout is expected to contain
                (tracing and detection only)
            default_options: Options used when the caller passes none
            output_factory: Builds a fresh accumulator for each run
        """
        self.definition: StateMachineDefinition[StateT, OutputT] = StateMachineDefinition(
            initial_state=initial_state,
            end_state=end_state,
            next=next,
            action=action,
        )
        self.parser_keywords: tuple[str, ...] = tuple(parser_keywords)
        self.default_options = default_options or BaseParserOptions()
        self.output_factory = output_factory

    @property
    def initial_state(self) -> StateT:
        return self.definition.initial_state

    @property
    def end_state(self) -> StateT:
        return self.definition.end_state

    def resolve_options(
        self, parser_options: BaseParserOptions | dict[str, Any] | None = None
    ) -> BaseParserOptions:
        """Merge caller overrides over this parser's defaults."""
        return merge_parser_options(self.default_options, parser_options)

    def find_keywords(self, lines: Iterable[str]) -> list[str]:
        """Return this parser's keywords that appear in the given lines."""
        text = "\n".join(lines)
        return [keyword for keyword in self.parser_keywords if keyword in text]

    def parse_text(
        self,
        text_lines: Iterable[str],
        parser_options: BaseParserOptions | dict[str, Any] | None = None,
        debug: bool | None = None,
        name: str | None = None,
    ) -> OutputT:
        """Parse already extracted statement lines.

        Args:
            text_lines: Lines in reading order
            parser_options: Partial overrides of the default options
            debug: Trace every state step (default: ``settings.DEBUG``)
            name: Document name for logs and errors

        Returns:
            The parsed output. Empty input yields a fresh, empty output.

        Raises:
            ParserOptionsError: If the options are invalid
            PluginLogicError: If the format's functions fail on a line
        """
        options = self.resolve_options(parser_options)
        debug = settings.DEBUG if debug is None else debug
        lines = list(text_lines)

        if not lines:
            logger.warning("No lines to parse in %s", name or "<statement>")

        if debug:
            found = self.find_keywords(lines)
            missing = [keyword for keyword in self.parser_keywords if keyword not in found]
            logger.info(
                "[%s] %d lines, keywords found: %s, missing: %s",
                name or "<statement>",
                len(lines),
                found,
                missing,
            )

        return run_state_machine(
            lines,
            self.definition,
            options,
            self.output_factory(),
            debug=debug,
            name=name,
        )

    def parse_pdf(
        self,
        file_path: str | os.PathLike,
        parser_options: BaseParserOptions | dict[str, Any] | None = None,
        debug: bool | None = None,
        name: str | None = None,
    ) -> OutputT:
        """Parse a statement PDF.

        Raises:
            SourceUnavailableError: If the file is missing or unreadable
            ParserOptionsError: If the options are invalid
            PluginLogicError: If the format's functions fail on a line
        """
        check_that_pdf_exists(file_path)
        options = self.resolve_options(parser_options)
        lines = read_pdf_lines(file_path)
        logger.info("Reconstructed %d lines from %s", len(lines), file_path)
        return self.parse_text(lines, options, debug=debug, name=name or str(file_path))


def create_statement_parser(
    *,
    initial_state: StateT,
    end_state: StateT,
    next: NextStateFunction,
    action: ActionFunction,
    parser_keywords: Iterable[str] = (),
    default_options: BaseParserOptions | None = None,
    output_factory: Callable[[], OutputT] = ParsedOutput,
) -> StatementParser[StateT, OutputT]:
    """Build a ``StatementParser`` from a format's parts."""
    return StatementParser(
        initial_state=initial_state,
        end_state=end_state,
        next=next,
        action=action,
        parser_keywords=parser_keywords,
        default_options=default_options,
        output_factory=output_factory,
    )
