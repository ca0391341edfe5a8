"""FastAPI application factory.

Lifespan
--------
On startup the app launches one headless browser (unless a provider was
injected, as the tests do) and builds the shared
:class:`~webtext.pipeline.ExtractionPipeline` on ``app.state.pipeline``.  On
shutdown it closes the browser it launched.

Routers
-------

    /          text extraction (``GET /?url=...``)
    /health    liveness probe
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from webtext import __version__
from webtext.api.routers import extract as extract_router
from webtext.logging_config import setup_logging
from webtext.pipeline import ExtractionPipeline
from webtext.scraper.renderer import PlaywrightPageProvider, RenderedPageProvider


def create_app(provider: Optional[RenderedPageProvider] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Args:
        provider: Rendering collaborator to use.  When ``None`` a
            :class:`PlaywrightPageProvider` is started with the app and closed
            with it; an injected provider's lifecycle stays with the caller.
    """
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned: Optional[PlaywrightPageProvider] = None
        active = provider
        if active is None:
            owned = PlaywrightPageProvider()
            await owned.start()
            active = owned
        app.state.pipeline = ExtractionPipeline(active)
        try:
            yield
        finally:
            if owned is not None:
                await owned.close()

    app = FastAPI(
        title="webtext",
        description=(
            "Renders a web page in a headless browser and returns its main "
            "text, chosen between a print-rendered and a readability extraction."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(extract_router.router, tags=["extract"])

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
