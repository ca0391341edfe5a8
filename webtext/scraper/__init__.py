"""Scraper package: page rendering, text extraction and candidate selection."""

from webtext.scraper.models import (
    CandidateSource,
    RenderedPage,
    SelectionResult,
    TextCandidate,
)
from webtext.scraper.paginated import extract_paginated_text
from webtext.scraper.readability_text import extract_readability_text
from webtext.scraper.renderer import PlaywrightPageProvider, RenderedPageProvider
from webtext.scraper.selector import select_candidate

__all__ = [
    "CandidateSource",
    "RenderedPage",
    "SelectionResult",
    "TextCandidate",
    "extract_paginated_text",
    "extract_readability_text",
    "PlaywrightPageProvider",
    "RenderedPageProvider",
    "select_candidate",
]
