"""Positional line reconstruction.

PDF text extraction yields glyph runs in content-stream order, which is not
reading order. This module regroups them into the rows a reader sees:
fragments sharing a (rounded) baseline form one row, rows run top to bottom,
and fragments within a row run left to right.
"""

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class GlyphFragment:
    """One positioned run of text on a page (PDF user-space coordinates)."""

    text: str
    x: float | None
    y: float | None

    @property
    def is_positioned(self) -> bool:
        return self.x is not None and self.y is not None


def _row_key(y: float) -> int:
    # Half-up: 10.5 -> 11, 11.5 -> 12.
    return math.floor(y + 0.5)


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def reconstruct_page_lines(fragments: Iterable[GlyphFragment]) -> list[str]:
    """Rebuild the text lines of a single page.

    Fragments without a position are dropped. Rows are ordered by descending
    vertical coordinate (PDF space grows upward), fragments by ascending
    horizontal coordinate with the text as tie-breaker.
    """
    rows: dict[int, list[GlyphFragment]] = defaultdict(list)
    for fragment in fragments:
        if not fragment.is_positioned:
            continue
        rows[_row_key(fragment.y)].append(fragment)

    lines: list[str] = []
    for y_key in sorted(rows, reverse=True):
        row = sorted(rows[y_key], key=lambda f: (f.x, f.text))
        line = normalize_whitespace(" ".join(f.text for f in row))
        if line:
            lines.append(line)
    return lines


def reconstruct_lines(pages: Iterable[Iterable[GlyphFragment]]) -> list[str]:
    """Rebuild the ordered lines of a whole document.

    Args:
        pages: Pages in document order, each an unordered collection of
            glyph fragments

    Returns:
        One flat list of lines, page by page. Empty for an empty document.
    """
    lines: list[str] = []
    for page in pages:
        lines.extend(reconstruct_page_lines(page))
    return lines
