"""Headless-browser rendering of a URL into a :class:`RenderedPage`.

A :class:`PlaywrightPageProvider` owns one Chromium process for its whole
lifetime and opens a fresh, isolated browser context per request.  Every
context is closed when its render ends, whether it succeeded, failed or was
cancelled, so nothing rendered is ever shared between requests.  A browser
that has crashed is relaunched by the next request.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Optional, Protocol

import structlog
from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from webtext.config import Settings, settings as default_settings
from webtext.errors import RenderFailure
from webtext.scraper.models import RenderedPage

logger = structlog.get_logger(__name__)


class RenderedPageProvider(Protocol):
    """Anything that can turn a URL into both derived forms of one page."""

    async def render(self, url: str, timeout: Optional[float] = None) -> RenderedPage:
        ...


def pdf_options(config: Settings) -> dict[str, Any]:
    """Keyword arguments for ``Page.pdf`` built from *config*."""
    margin = f"{config.pdf_margin}in"
    return {
        "width": f"{config.pdf_paper_width}in",
        "height": f"{config.pdf_paper_height}in",
        "scale": config.pdf_scale,
        "landscape": False,
        "display_header_footer": False,
        "print_background": False,
        "prefer_css_page_size": False,
        "page_ranges": config.pdf_page_ranges,
        "margin": {"top": margin, "bottom": margin, "left": margin, "right": margin},
    }


class PlaywrightPageProvider:
    """Bounded pool of browser contexts on top of a single headless Chromium.

    Use as an async context manager, or call :meth:`start` / :meth:`close`
    explicitly (the FastAPI lifespan does the latter).
    """

    def __init__(self, config: Settings | None = None) -> None:
        self._settings = config or default_settings
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._slots = asyncio.Semaphore(max(1, self._settings.max_concurrent_renders))
        self._launch_lock = asyncio.Lock()

    @property
    def started(self) -> bool:
        return self._browser is not None

    async def _launch(self) -> Browser:
        assert self._playwright is not None
        browser = await self._playwright.chromium.launch(
            headless=True,
            executable_path=self._settings.browser_executable_path,
        )
        logger.info("renderer.launched", browser_version=browser.version)
        return browser

    async def start(self) -> None:
        if self._browser is not None:
            return
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._launch()
        except PlaywrightError:
            await self._playwright.stop()
            self._playwright = None
            raise

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        logger.info("renderer.closed")

    async def __aenter__(self) -> "PlaywrightPageProvider":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _connected_browser(self, url: str) -> Browser:
        """Return a live browser, relaunching it if Chromium has gone away."""
        async with self._launch_lock:
            if self._browser is None:
                raise RenderFailure("renderer is not started", url=url)
            if not self._browser.is_connected():
                logger.warning("renderer.disconnected")
                try:
                    self._browser = await self._launch()
                except PlaywrightError as exc:
                    raise RenderFailure(f"cannot relaunch browser: {exc}", url=url) from exc
            return self._browser

    async def render(self, url: str, timeout: Optional[float] = None) -> RenderedPage:
        """Load *url* and capture its PDF print-out and its HTML snapshot.

        Raises:
            RenderFailure: On navigation errors, browser crashes and timeouts,
                or when the provider has not been started.
        """
        browser = await self._connected_browser(url)

        if timeout is None:
            timeout = self._settings.render_timeout
        started = time.monotonic()

        async with self._slots:
            try:
                context = await browser.new_context(
                    viewport={
                        "width": self._settings.viewport_width,
                        "height": self._settings.viewport_height,
                    },
                )
            except PlaywrightError as exc:
                raise RenderFailure(f"cannot open browser context: {exc}", url=url) from exc

            try:
                page = await context.new_page()
                await page.goto(url, timeout=timeout * 1000, wait_until="domcontentloaded")
                await self._wait_for_content(page, url)
                markup = await page.content()
                pdf = await page.pdf(**pdf_options(self._settings))
            except PlaywrightError as exc:
                logger.warning("render.failed", url=url, error=str(exc))
                raise RenderFailure(f"cannot render page: {exc}", url=url) from exc
            finally:
                await self._close_context(context, url)

        logger.info(
            "render.done",
            url=url,
            pdf_bytes=len(pdf),
            markup_chars=len(markup),
            elapsed_ms=int((time.monotonic() - started) * 1000),
        )
        return RenderedPage(url=url, paginated_bytes=pdf, raw_markup=markup)

    async def _wait_for_content(self, page: Any, url: str) -> None:
        """Give slow pages a bounded chance to finish loading, then move on."""
        try:
            await page.wait_for_load_state(
                "load",
                timeout=self._settings.content_wait_timeout * 1000,
            )
        except PlaywrightTimeoutError:
            logger.warning("render.content_wait_expired", url=url)

    async def _close_context(self, context: Any, url: str) -> None:
        try:
            await context.close()
        except PlaywrightError as exc:
            # A crashed browser takes its contexts with it.
            logger.warning("render.context_close_failed", url=url, error=str(exc))
