"""Error taxonomy for the extraction pipeline.

Only :class:`InvalidURL` and :class:`RenderFailure` are meant to reach
callers.  :class:`ExtractionFailure` subclasses are absorbed by the pipeline,
which downgrades the failing candidate to absent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from webtext.scraper.models import CandidateSource


class WebTextError(Exception):
    """Base class for all webtext errors."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class InvalidURL(WebTextError):
    """The input is not a well-formed absolute URL."""


class RenderFailure(WebTextError):
    """The browser could not produce a rendered page (navigation, crash, timeout)."""


class ExtractionFailure(WebTextError):
    """One extractor could not produce a text candidate."""

    def __init__(
        self,
        message: str,
        *,
        source: "CandidateSource",
        url: str | None = None,
    ) -> None:
        super().__init__(message, url=url)
        self.source = source


class DecodeFailure(ExtractionFailure):
    """The paginated document or one of its pages could not be decoded."""


class ParseFailure(ExtractionFailure):
    """The markup could not be parsed or held no readable content."""


class NoCandidates(WebTextError):
    """Both extractors failed.  Only raised by a strict pipeline."""


__all__ = [
    "WebTextError",
    "InvalidURL",
    "RenderFailure",
    "ExtractionFailure",
    "DecodeFailure",
    "ParseFailure",
    "NoCandidates",
]
