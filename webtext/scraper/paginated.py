"""Paginated text extraction: print-rendered PDF bytes → plain text."""

from __future__ import annotations

import io

import pypdf
import structlog

from webtext.errors import DecodeFailure
from webtext.scraper.models import CandidateSource, TextCandidate

logger = structlog.get_logger(__name__)


def _decode_pages(data: bytes) -> list[str]:
    """Return the text of every page of the PDF in *data*, in page order.

    Raises:
        DecodeFailure: If the document or any single page cannot be decoded.
            No partial result is returned.
    """
    try:
        reader = pypdf.PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            # Printed pages carry an empty user password at most.
            reader.decrypt("")
        return [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:
        raise DecodeFailure(
            f"cannot decode paginated document: {exc}",
            source=CandidateSource.PAGINATED,
        ) from exc


def extract_paginated_text(data: bytes) -> TextCandidate:
    """Decode *data* and join all page texts with a single space."""
    pages = _decode_pages(data)
    candidate = TextCandidate(
        source=CandidateSource.PAGINATED,
        text=" ".join(pages),
    )
    logger.debug(
        "extract.paginated.done",
        pages=len(pages),
        word_count=candidate.word_count,
    )
    return candidate
