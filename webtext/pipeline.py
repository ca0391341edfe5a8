"""Extraction pipeline: one URL in, one text out.

``ExtractionPipeline.run`` orchestrates the full request:

    render → (paginated extract ‖ readability extract) → select

Rendering failures end the request.  Extractor failures only remove that
extractor's candidate; the selector then works with whatever is left.
"""

from __future__ import annotations

import asyncio
import time
from enum import Enum
from typing import Callable, Optional

import structlog
from pydantic import BaseModel, HttpUrl, ValidationError

from webtext.errors import ExtractionFailure, InvalidURL, NoCandidates
from webtext.scraper.models import (
    CandidateSource,
    RenderedPage,
    SelectionResult,
    TextCandidate,
)
from webtext.scraper.paginated import extract_paginated_text
from webtext.scraper.readability_text import extract_readability_text
from webtext.scraper.renderer import RenderedPageProvider
from webtext.scraper.selector import select_candidate

logger = structlog.get_logger(__name__)


class ExtractionRequest(BaseModel):
    url: HttpUrl

    @classmethod
    def parse(cls, url: Optional[str]) -> "ExtractionRequest":
        """Validate *url* and wrap it.

        Raises:
            InvalidURL: If *url* is empty or not an absolute http(s) URL.
        """
        if not url or not url.strip():
            raise InvalidURL("url is required", url=url)
        try:
            return cls(url=url.strip())
        except ValidationError as exc:
            raise InvalidURL(f"invalid url: {url!r}", url=url) from exc


class PipelineStage(str, Enum):
    RENDERING = "rendering"
    EXTRACTING = "extracting"
    SELECTING = "selecting"
    DONE = "done"
    FAILED = "failed"


def _attempt(
    extractor: Callable[..., TextCandidate], *args: object
) -> Optional[TextCandidate]:
    """Run one extractor; an :class:`ExtractionFailure` yields an absent candidate."""
    try:
        return extractor(*args)
    except ExtractionFailure as exc:
        logger.warning(
            f"extract.{exc.source.value}.failed",
            source=exc.source.value,
            error=str(exc),
        )
        return None


class ExtractionPipeline:
    """Render a page once and pick the better of two text extractions.

    Args:
        provider: Rendering collaborator.  Its lifecycle is owned by the
            caller; the pipeline only calls :meth:`render`.
        render_timeout: Per-request navigation budget in seconds.  ``None``
            defers to the provider's configured default.
        strict: Raise :class:`NoCandidates` instead of returning an empty
            result when both extractors fail.
    """

    def __init__(
        self,
        provider: RenderedPageProvider,
        *,
        render_timeout: Optional[float] = None,
        strict: bool = False,
    ) -> None:
        self.provider = provider
        self.render_timeout = render_timeout
        self.strict = strict

    async def run(self, request: ExtractionRequest) -> SelectionResult:
        """Render ``request.url`` and return the selected text.

        Raises:
            RenderFailure: The page could not be rendered.  No extraction is
                attempted.
            NoCandidates: Only in strict mode, when both extractors failed.
        """
        url = str(request.url)
        started = time.monotonic()
        with structlog.contextvars.bound_contextvars(url=url):
            logger.info("pipeline.stage", stage=PipelineStage.RENDERING.value)
            try:
                page = await self.provider.render(url, self.render_timeout)
                result = await self.run_on_page(page)
            except Exception:
                logger.info("pipeline.stage", stage=PipelineStage.FAILED.value)
                raise
            logger.info(
                "pipeline.stage",
                stage=PipelineStage.DONE.value,
                source=result.chosen_source.value,
                elapsed_ms=int((time.monotonic() - started) * 1000),
            )
            return result

    async def run_on_page(self, page: RenderedPage) -> SelectionResult:
        """Extract and select from an already rendered *page*.

        The two extractors read disjoint inputs and run in worker threads
        concurrently; selection starts once both have finished.
        """
        logger.info("pipeline.stage", stage=PipelineStage.EXTRACTING.value)
        paginated, readability = await asyncio.gather(
            asyncio.to_thread(_attempt, extract_paginated_text, page.paginated_bytes),
            asyncio.to_thread(
                _attempt, extract_readability_text, page.url, page.raw_markup
            ),
        )

        logger.info("pipeline.stage", stage=PipelineStage.SELECTING.value)
        result = select_candidate(paginated, readability)
        logger.info(
            "selection.done",
            source=result.chosen_source.value,
            paginated_words=paginated.word_count if paginated is not None else None,
            readability_words=readability.word_count if readability is not None else None,
        )

        if result.chosen_source is CandidateSource.NONE and self.strict:
            raise NoCandidates("both extractors failed", url=page.url)
        return result


async def extract_text(url: str, provider: RenderedPageProvider) -> str:
    """Return the main text of the page at *url*.

    Raises:
        InvalidURL: Before anything is rendered, if *url* is malformed.
        RenderFailure: If the page could not be rendered.
    """
    request = ExtractionRequest.parse(url)
    result = await ExtractionPipeline(provider).run(request)
    return result.text
