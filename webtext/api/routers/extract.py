"""Extraction endpoint.

Routes
------
GET /?url=https://...    → {"text": "...", "source": "paginated"}

Failures get their own status codes instead of a 200 with an error sentence:
422 for a missing or malformed ``url``, 502 when the page cannot be rendered.
A page where both extractors failed is still a 200 with ``source="none"``
and empty text.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException, Query, Request, Response
from pydantic import BaseModel

from webtext.errors import InvalidURL, RenderFailure
from webtext.pipeline import ExtractionPipeline, ExtractionRequest
from webtext.scraper.models import CandidateSource, SelectionResult

router = APIRouter()

logger = structlog.get_logger(__name__)

# How often a running extraction checks whether its client went away.
_DISCONNECT_POLL_SECONDS = 0.5

# nginx's "client closed request"; never actually seen by the client.
_CLIENT_CLOSED_REQUEST = 499


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class TextResponse(BaseModel):
    text: str
    source: CandidateSource


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _run_until_disconnect(
    request: Request,
    pipeline: ExtractionPipeline,
    body: ExtractionRequest,
) -> Optional[SelectionResult]:
    """Run the pipeline, cancelling it if the client disconnects.

    Returns ``None`` when the run was abandoned.
    """
    task = asyncio.create_task(pipeline.run(body))
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=_DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("request.abandoned", url=str(body.url))
                task.cancel()
                await asyncio.wait({task})
                return None
    finally:
        if not task.done():
            task.cancel()


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/", response_model=TextResponse)
async def extract(
    request: Request,
    url: Optional[str] = Query(default=None, description="Absolute URL of the page."),
):
    """Render *url* and return its main text."""
    if not url:
        raise HTTPException(status_code=422, detail="probably ill-formed request")

    try:
        body = ExtractionRequest.parse(url)
    except InvalidURL as exc:
        raise HTTPException(status_code=422, detail="parse target url failure") from exc

    pipeline: ExtractionPipeline = request.app.state.pipeline
    try:
        result = await _run_until_disconnect(request, pipeline, body)
    except RenderFailure as exc:
        raise HTTPException(
            status_code=502, detail="failed to get text from webpage"
        ) from exc

    if result is None:
        return Response(status_code=_CLIENT_CLOSED_REQUEST)
    return TextResponse(text=result.text, source=result.chosen_source)
