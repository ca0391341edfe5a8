"""Data models for the render → extract → select pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens in *text*."""
    return len(text.split())


class CandidateSource(str, Enum):
    PAGINATED = "paginated"
    READABILITY = "readability"
    NONE = "none"


@dataclass(frozen=True)
class RenderedPage:
    """Both derived forms of one loaded page, captured from the same state."""

    url: str
    paginated_bytes: bytes = field(repr=False)
    raw_markup: str = field(repr=False)


@dataclass(frozen=True)
class TextCandidate:
    """Text produced by one extractor.

    ``word_count`` is derived from ``text`` at construction and never
    recomputed.  A failed extraction is represented by ``None`` in place of a
    candidate, never by a candidate with empty text.
    """

    source: CandidateSource
    text: str
    word_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "word_count", count_words(self.text))


@dataclass(frozen=True)
class SelectionResult:
    """Final text and which candidate it came from."""

    text: str
    chosen_source: CandidateSource

    @classmethod
    def empty(cls) -> "SelectionResult":
        return cls(text="", chosen_source=CandidateSource.NONE)
