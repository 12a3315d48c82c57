"""Line-driven state machine shared by every statement format.

The driver walks reconstructed lines once, in order. For each line it first
lets the format's action update the output for the *current* state, then
asks the format for the next state. It never looks ahead or behind, and it
keeps consuming lines after the end state is reached so trailing summary
lines can still be read.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterable, TypeVar

from statement_parser.core.exceptions import PluginLogicError, StatementParserError
from statement_parser.parsers.options import BaseParserOptions

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=Enum)
OutputT = TypeVar("OutputT")

NextStateFunction = Callable[[StateT, str, BaseParserOptions], StateT]
ActionFunction = Callable[[StateT, str, OutputT, BaseParserOptions], "OutputT | None"]


@dataclass(frozen=True)
class StateMachineDefinition(Generic[StateT, OutputT]):
    """The format-specific half of a statement parser.

    Attributes:
        initial_state: State the machine starts in
        end_state: Absorbing terminal state
        next: Transition function ``(state, line, options) -> state``
        action: Line handler ``(state, line, output, options) -> output``.
            May mutate ``output`` in place and return ``None``.
    """

    initial_state: StateT
    end_state: StateT
    next: NextStateFunction
    action: ActionFunction

    def __post_init__(self):
        if type(self.initial_state) is not type(self.end_state):
            raise TypeError(
                f"initial_state and end_state must belong to the same enum, got "
                f"{type(self.initial_state).__name__} and {type(self.end_state).__name__}"
            )


def run_state_machine(
    lines: Iterable[str],
    definition: StateMachineDefinition[StateT, OutputT],
    parser_options: BaseParserOptions,
    initial_output: OutputT,
    *,
    debug: bool = False,
    name: str | None = None,
) -> OutputT:
    """Run a format definition over a document's lines.

    Args:
        lines: Reconstructed lines in reading order
        definition: Format states, transition and action functions
        parser_options: Fully merged options passed to every call
        initial_output: Fresh accumulator owned by this run
        debug: Log every ``(state, line, next_state)`` step
        name: Document name used in logs and errors

    Returns:
        The accumulator after the last line, whatever state was reached

    Raises:
        StatementParserError: Raised by the action or transition function,
            passed through unchanged
        PluginLogicError: If the action or transition function raises any
            other exception
    """
    state = definition.initial_state
    output = initial_output
    label = name or "<statement>"

    for index, line in enumerate(lines):
        try:
            result = definition.action(state, line, output, parser_options)
            if result is not None:
                output = result
            next_state = definition.next(state, line, parser_options)
            if not isinstance(next_state, type(definition.initial_state)):
                raise TypeError(f"next state must be a {type(state).__name__}, got {next_state!r}")
        except StatementParserError as e:
            logger.error("Parser failed on %s line %d in state %s: %s", label, index, state.value, e)
            raise
        except Exception as e:
            logger.error(
                "Parser failed on %s line %d in state %s: %s", label, index, state.value, e
            )
            raise PluginLogicError(
                details={
                    "name": label,
                    "line_index": index,
                    "state": state.value,
                    "line": line,
                }
            ) from e

        if debug:
            logger.info("[%s] %s | %r -> %s", label, state.value, line, next_state.value)
        elif next_state is not state:
            logger.debug("[%s] line %d: %s -> %s", label, index, state.value, next_state.value)

        state = next_state

    if state is not definition.end_state:
        logger.debug("[%s] finished in state %s", label, state.value)

    return output
