"""Shared fixtures: hand-built PDFs, article markup and a fake renderer.

No test launches a browser.  :class:`FakeProvider` stands in for
:class:`~webtext.scraper.renderer.PlaywrightPageProvider` and returns a
prepared :class:`~webtext.scraper.models.RenderedPage`.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import pytest

from webtext.errors import RenderFailure
from webtext.scraper.models import RenderedPage


# ---------------------------------------------------------------------------
# PDF builder
# ---------------------------------------------------------------------------

def make_pdf(pages: list[str]) -> bytes:
    """Return a valid PDF with one Helvetica text line per entry in *pages*.

    Text must be plain ASCII letters, digits and spaces (no escaping).
    """
    n_pages = len(pages)
    # 1 catalog, 2 page tree, 3 font, then (page, content) pairs.
    page_ids = [4 + 2 * i for i in range(n_pages)]
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        (
            "<< /Type /Pages /Kids ["
            + " ".join(f"{pid} 0 R" for pid in page_ids)
            + f"] /Count {n_pages} >>"
        ).encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for pid, text in zip(page_ids, pages):
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>"
            ).encode()
        )
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_at}\n%%EOF\n"
    ).encode()
    return bytes(out)


def words(word: str, count: int) -> str:
    return " ".join([word] * count)


# ---------------------------------------------------------------------------
# Markup builder
# ---------------------------------------------------------------------------

_BOILERPLATE = """\
<header><nav><a href="/">Home</a> <a href="/news">News</a> <a href="/contact">Contact</a></nav></header>
<aside class="sidebar"><p>Subscribe to our newsletter for updates.</p></aside>
<footer><p>Copyright 2024 Example Media. All rights reserved.</p></footer>
"""


def make_article(paragraphs: list[str], title: str = "Test Article") -> str:
    """Return a full HTML page with *paragraphs* inside an ``<article>``."""
    body = "\n".join(f"<p>{p}</p>" for p in paragraphs)
    return (
        "<!DOCTYPE html>\n<html>\n"
        f"<head><title>{title}</title></head>\n<body>\n"
        f"{_BOILERPLATE}"
        f'<article class="post-content">\n<h1>{title}</h1>\n{body}\n</article>\n'
        "</body>\n</html>\n"
    )


ARTICLE_PARAGRAPHS = [
    (
        "Solid-state batteries replace the liquid electrolyte of a conventional "
        "lithium-ion cell with a solid one, which promises higher energy density, "
        "faster charging, and a much lower risk of fire."
    ),
    (
        "Researchers have spent more than a decade searching for solid electrolytes "
        "that conduct ions as well as liquids do, and several ceramic and sulfide "
        "materials now come close to that goal in the laboratory."
    ),
    (
        "Manufacturing remains the hard part, because thin ceramic layers crack "
        "easily, and keeping the electrodes in contact as they expand and shrink "
        "during every charge cycle is still an open engineering problem."
    ),
    (
        "Several carmakers have announced pilot production lines, but most analysts "
        "expect the first vehicles with solid-state packs to reach customers only "
        "towards the end of the decade, and in small numbers at first."
    ),
]


@pytest.fixture()
def article_html() -> str:
    return make_article(ARTICLE_PARAGRAPHS)


# ---------------------------------------------------------------------------
# Fake renderer
# ---------------------------------------------------------------------------

class FakeProvider:
    """In-memory :class:`RenderedPageProvider`.

    Returns a page built from ``pdf`` and ``markup``, or raises ``error``.
    When ``block`` is set, ``render`` waits forever so cancellation can be
    exercised.
    """

    def __init__(
        self,
        pdf: bytes = b"",
        markup: str = "",
        error: Optional[Exception] = None,
        block: bool = False,
    ) -> None:
        self.pdf = pdf
        self.markup = markup
        self.error = error
        self.block = block
        self.calls: list[tuple[str, Optional[float]]] = []
        self.released = 0

    async def render(self, url: str, timeout: Optional[float] = None) -> RenderedPage:
        self.calls.append((url, timeout))
        try:
            if self.block:
                await asyncio.Event().wait()
            if self.error is not None:
                raise self.error
            return RenderedPage(url=url, paginated_bytes=self.pdf, raw_markup=self.markup)
        finally:
            self.released += 1


@pytest.fixture()
def render_failure() -> RenderFailure:
    return RenderFailure("net::ERR_NAME_NOT_RESOLVED", url="https://example.com/article")
