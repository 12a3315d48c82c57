"""Glyph run source backed by pypdf and pdfplumber.

This module is the only place that touches PDF libraries. pypdf opens and
validates the document (missing, corrupt or encrypted input fails here);
pdfplumber supplies the words of each page with their own positions, so
columns written out of order in the content stream can still be put back
in reading order by line reconstruction.
"""

import io
import logging
import os
from typing import Any, Union

import pdfplumber
from pypdf import PdfReader

from statement_parser.core.exceptions import SourceUnavailableError
from statement_parser.pdf.lines import GlyphFragment, reconstruct_lines, reconstruct_page_lines

logger = logging.getLogger(__name__)

PdfSource = Union[str, os.PathLike, bytes]


def check_that_pdf_exists(file_path: str | os.PathLike) -> None:
    """Fail fast when a statement file is missing.

    Raises:
        SourceUnavailableError: If the path does not point to a file
    """
    if not os.path.isfile(file_path):
        raise SourceUnavailableError(details={"file_path": str(file_path), "reason": "does not exist"})


def _describe(source: PdfSource) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return str(source)


def _as_stream(source: PdfSource) -> Any:
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return str(source)


def open_pdf(source: PdfSource) -> PdfReader:
    """Open a PDF document and check it can be read.

    Args:
        source: Filesystem path or raw PDF bytes

    Returns:
        pypdf reader

    Raises:
        SourceUnavailableError: Missing file, unreadable or encrypted content
    """
    if isinstance(source, (bytes, bytearray)):
        if not source:
            raise SourceUnavailableError(details={"source": "<0 bytes>", "reason": "empty buffer"})
    else:
        check_that_pdf_exists(source)

    try:
        reader = PdfReader(_as_stream(source))
    except Exception as e:
        raise SourceUnavailableError(details={"source": _describe(source), "reason": str(e)}) from e

    if reader.is_encrypted:
        raise SourceUnavailableError(
            "PARSE_002",
            details={"source": _describe(source), "reason": "encrypted"},
        )
    return reader


def read_page_fragments(page: Any) -> list[GlyphFragment]:
    """Collect the positioned words of one pdfplumber page.

    pdfplumber measures ``bottom`` from the top of the page; it is flipped
    back to PDF user space so rows still sort by descending ``y``.
    """
    fragments: list[GlyphFragment] = []
    for word in page.extract_words():
        text = word["text"]
        if not text or not text.strip():
            continue
        fragments.append(
            GlyphFragment(text=text, x=float(word["x0"]), y=float(page.height - word["bottom"]))
        )
    return fragments


def read_glyph_fragments(source: PdfSource) -> list[list[GlyphFragment]]:
    """Read every page of a document as a list of glyph fragments.

    Raises:
        SourceUnavailableError: If the document cannot be opened or its
            content streams cannot be decoded
    """
    open_pdf(source)

    try:
        with pdfplumber.open(_as_stream(source)) as pdf:
            pages = [read_page_fragments(page) for page in pdf.pages]
    except Exception as e:
        logger.error("Failed to extract text from %s: %s", _describe(source), e)
        raise SourceUnavailableError(details={"source": _describe(source), "reason": str(e)}) from e

    logger.debug("Read %d pages from %s", len(pages), _describe(source))
    return pages


def read_pdf(source: PdfSource) -> list[list[str]]:
    """Read a document as reconstructed lines grouped per page."""
    return [reconstruct_page_lines(page) for page in read_glyph_fragments(source)]


def read_pdf_lines(source: PdfSource) -> list[str]:
    """Read a document as one flat, ordered list of reconstructed lines."""
    lines = reconstruct_lines(read_glyph_fragments(source))
    if not lines:
        logger.warning("No text lines reconstructed from %s", _describe(source))
    return lines
