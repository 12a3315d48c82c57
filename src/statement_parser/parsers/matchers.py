"""Ordered, named line matchers.

Statement rows often fit several overlapping shapes. Instead of a chain of
fallback regular expressions inline in a parser, each shape is a named
matcher tried in priority order; the first one that returns a result wins.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class LineMatcher(Generic[T]):
    """A named pure function ``line -> result | None``."""

    name: str
    match: Callable[[str], T | None]

    def __call__(self, line: str) -> T | None:
        return self.match(line)


def first_match(matchers: Sequence[LineMatcher[T]], line: str) -> tuple[str, T] | None:
    """Try matchers in order and return ``(name, result)`` of the first hit."""
    for matcher in matchers:
        result = matcher(line)
        if result is not None:
            return matcher.name, result
    return None
