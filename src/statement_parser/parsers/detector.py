"""Statement format detection from reconstructed text.

This module guesses which registered format produced a statement by
counting how many of each parser's keywords appear in its lines.
"""

import logging
from typing import Hashable, Iterable, Mapping, TypeVar

from statement_parser.parsers.statement_parser import StatementParser

logger = logging.getLogger(__name__)

KeyT = TypeVar("KeyT", bound=Hashable)


class ParserDetector:
    """Detects the statement format from its text.

    Parsers without keywords can never be detected and must be chosen
    explicitly.

    Example:
        >>> detector = ParserDetector(parsers)
        >>> parser_type = detector.detect(lines)
        >>> if parser_type is None:
        ...     print("Unknown format - pass a parser type explicitly")
    """

    # Fewer hits than this is treated as noise
    MIN_KEYWORD_HITS = 2

    def __init__(self, parsers: Mapping[KeyT, StatementParser], min_keyword_hits: int | None = None):
        """Initialize the detector.

        Args:
            parsers: Registered parsers keyed by parser type
            min_keyword_hits: Minimum keywords a format needs to be picked
        """
        self._parsers = dict(parsers)
        self.min_keyword_hits = self.MIN_KEYWORD_HITS if min_keyword_hits is None else min_keyword_hits

    def score(self, lines: Iterable[str]) -> dict[KeyT, int]:
        """Count keyword hits per parser type."""
        lines = list(lines)
        return {
            parser_type: len(parser.find_keywords(lines))
            for parser_type, parser in self._parsers.items()
            if parser.parser_keywords
        }

    def detect(self, lines: Iterable[str]) -> KeyT | None:
        """Detect the format of a statement.

        Args:
            lines: Reconstructed statement lines

        Returns:
            Parser type with the most keyword hits, or None if no format
            reaches ``min_keyword_hits``. Ties go to registration order.
        """
        scores = self.score(lines)
        best_type = None
        best_score = 0
        for parser_type, hits in scores.items():
            if hits > best_score:
                best_type, best_score = parser_type, hits

        if best_score < self.min_keyword_hits:
            logger.info("No statement format detected (scores: %s)", scores)
            return None

        logger.info("Detected statement format %s with %d keyword hits", best_type, best_score)
        return best_type

    def get_supported_types(self) -> list[KeyT]:
        """Get parser types that can be detected."""
        return [parser_type for parser_type, parser in self._parsers.items() if parser.parser_keywords]
