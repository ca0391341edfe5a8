"""Tests for paginated (PDF) text extraction.

Documents are built byte-by-byte by ``conftest.make_pdf`` so the real
``pypdf`` decoder is exercised.  Per-page decode failures are simulated by
patching ``pypdf.PdfReader``.
"""

from __future__ import annotations

import io
from unittest.mock import MagicMock, patch

import pypdf
import pytest

from webtext.errors import DecodeFailure, ExtractionFailure
from webtext.scraper.models import CandidateSource
from webtext.scraper.paginated import extract_paginated_text

from conftest import make_pdf, words


def _blank_pdf(pages: int) -> bytes:
    writer = pypdf.PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


class TestExtractPaginatedText:
    def test_single_page(self) -> None:
        candidate = extract_paginated_text(make_pdf(["alpha beta gamma"]))
        assert candidate.source is CandidateSource.PAGINATED
        assert candidate.text.split() == ["alpha", "beta", "gamma"]
        assert candidate.word_count == 3

    def test_pages_joined_in_order(self) -> None:
        candidate = extract_paginated_text(
            make_pdf(["first page words", "second page words", "third"])
        )
        assert candidate.text.split() == [
            "first", "page", "words", "second", "page", "words", "third",
        ]
        assert candidate.word_count == 7

    def test_large_word_count(self) -> None:
        candidate = extract_paginated_text(make_pdf([words("lorem", 800), words("ipsum", 700)]))
        assert candidate.word_count == 1500

    def test_blank_pages_give_present_empty_candidate(self) -> None:
        candidate = extract_paginated_text(_blank_pdf(2))
        assert candidate.word_count == 0
        assert candidate.text.strip() == ""

    def test_garbage_bytes_raise_decode_failure(self) -> None:
        with pytest.raises(DecodeFailure) as info:
            extract_paginated_text(b"this is certainly not a pdf document")
        assert info.value.source is CandidateSource.PAGINATED

    def test_empty_bytes_raise_decode_failure(self) -> None:
        with pytest.raises(DecodeFailure):
            extract_paginated_text(b"")

    def test_decode_failure_is_an_extraction_failure(self) -> None:
        with pytest.raises(ExtractionFailure):
            extract_paginated_text(b"%PDF-1.4 truncated")

    def test_one_bad_page_fails_whole_document(self) -> None:
        good = MagicMock()
        good.extract_text.return_value = "fine text"
        bad = MagicMock()
        bad.extract_text.side_effect = KeyError("/Font")
        reader = MagicMock(is_encrypted=False, pages=[good, bad])

        with patch("webtext.scraper.paginated.pypdf.PdfReader", return_value=reader):
            with pytest.raises(DecodeFailure):
                extract_paginated_text(b"%PDF-1.4")

    def test_encrypted_document_is_decrypted_with_empty_password(self) -> None:
        page = MagicMock()
        page.extract_text.return_value = "secret words"
        reader = MagicMock(is_encrypted=True, pages=[page])

        with patch("webtext.scraper.paginated.pypdf.PdfReader", return_value=reader):
            candidate = extract_paginated_text(b"%PDF-1.4")

        reader.decrypt.assert_called_once_with("")
        assert candidate.word_count == 2

    def test_none_page_text_counts_as_empty(self) -> None:
        page = MagicMock()
        page.extract_text.return_value = None
        reader = MagicMock(is_encrypted=False, pages=[page, page])

        with patch("webtext.scraper.paginated.pypdf.PdfReader", return_value=reader):
            candidate = extract_paginated_text(b"%PDF-1.4")

        assert candidate.text == " "
        assert candidate.word_count == 0
