"""Readability extraction: raw markup → main-content plain text.

``readability-lxml`` isolates the article container and makes its links
absolute against the page origin; ``html2text`` turns that fragment into
wrapped plain text.
"""

from __future__ import annotations

import textwrap
from urllib.parse import urlsplit

import html2text
import structlog
from readability import Document

from webtext.config import settings
from webtext.errors import ParseFailure
from webtext.scraper.models import CandidateSource, TextCandidate

logger = structlog.get_logger(__name__)


def _fail(message: str, url: str) -> ParseFailure:
    return ParseFailure(message, source=CandidateSource.READABILITY, url=url)


def base_url(url: str) -> str:
    """Return ``scheme://host`` for *url*; path, query and fragment are dropped.

    Raises:
        ParseFailure: If *url* has no scheme or no host.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError as exc:
        raise _fail(f"cannot derive base url: {exc}", url) from exc
    if not parts.scheme or not host:
        raise _fail("cannot derive base url: scheme and host are required", url)
    return f"{parts.scheme}://{host}"


def _wrap(text: str, width: int) -> str:
    """Wrap each line of *text* at *width* without ever splitting a token."""
    if width <= 0:
        return text
    lines: list[str] = []
    for line in text.splitlines():
        if len(line) <= width:
            lines.append(line)
            continue
        lines.extend(
            textwrap.wrap(
                line,
                width,
                break_long_words=False,
                break_on_hyphens=False,
            )
        )
    return "\n".join(lines)


def _to_plain_text(fragment: str, base: str, width: int) -> str:
    # Wrapped here rather than by html2text so hyphenated tokens stay whole.
    converter = html2text.HTML2Text(baseurl=base, bodywidth=0)
    converter.ignore_images = True
    converter.ignore_emphasis = True
    converter.unicode_snob = True
    return _wrap(converter.handle(fragment).strip(), width)


def extract_readability_text(
    url: str,
    raw_markup: str,
    width: int | None = None,
) -> TextCandidate:
    """Extract the main content of *raw_markup* as plain text.

    Args:
        url: The page URL; only its origin is used, to resolve relative links.
        raw_markup: The rendered page's HTML snapshot.
        width: Wrap column for the plain text.  Defaults to
            ``settings.text_wrap_width``; ``0`` disables wrapping.

    Raises:
        ParseFailure: If the markup is empty or unparseable, the base URL
            cannot be derived, or no readable content is found.
    """
    base = base_url(url)
    if not raw_markup or not raw_markup.strip():
        raise _fail("empty markup", url)

    try:
        summary = Document(raw_markup, url=base).summary(html_partial=True)
    except Exception as exc:
        raise _fail(f"cannot parse markup: {exc}", url) from exc

    if width is None:
        width = settings.text_wrap_width
    text = _to_plain_text(summary, base, width)
    if not text:
        raise _fail("no readable content found", url)

    candidate = TextCandidate(source=CandidateSource.READABILITY, text=text)
    logger.debug("extract.readability.done", word_count=candidate.word_count)
    return candidate
