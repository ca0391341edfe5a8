"""webtext CLI: entry-point for one-off extractions and the HTTP server.

Usage:
    python cli/main.py --help

Commands:
    extract   → render one URL and print its main text
    serve     → run the HTTP API under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from webtext.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import Optional

import typer

from webtext.config import settings
from webtext.errors import InvalidURL, RenderFailure
from webtext.logging_config import setup_logging
from webtext.pipeline import ExtractionPipeline, ExtractionRequest
from webtext.scraper.models import SelectionResult

app = typer.Typer(
    name="webtext",
    help="Extract the main readable text of a web page.",
    no_args_is_help=True,
)


async def _extract(request: ExtractionRequest, timeout: Optional[float]) -> SelectionResult:
    from webtext.scraper.renderer import PlaywrightPageProvider

    async with PlaywrightPageProvider() as provider:
        return await ExtractionPipeline(provider, render_timeout=timeout).run(request)


@app.command("extract")
def extract(
    url: str = typer.Option(..., help="Absolute URL of the page to extract."),
    timeout: Optional[float] = typer.Option(
        None, help="Navigation timeout in seconds (default: RENDER_TIMEOUT)."
    ),
    show_source: bool = typer.Option(
        False, "--show-source", help="Print which extractor won before the text."
    ),
) -> None:
    """Render a URL in a headless browser and print its main text to stdout."""
    setup_logging()

    try:
        request = ExtractionRequest.parse(url)
    except InvalidURL:
        typer.echo(f"[extract] Not a valid absolute URL: {url!r}", err=True)
        raise typer.Exit(2)

    try:
        result = asyncio.run(_extract(request, timeout))
    except RenderFailure as exc:
        typer.echo(f"[extract] Failed to render {url!r}: {exc}", err=True)
        raise typer.Exit(1)

    if show_source:
        typer.echo(f"[extract] Source : {result.chosen_source.value}")
        typer.echo(f"[extract] Words  : {len(result.text.split())}")
        typer.echo("")
    typer.echo(result.text)


@app.command("serve")
def serve(
    host: str = typer.Option(settings.api_host, help="Bind address."),
    port: int = typer.Option(settings.api_port, help="Bind port."),
) -> None:
    """Run the HTTP API (``GET /?url=...``)."""
    import uvicorn

    setup_logging()
    uvicorn.run("webtext.api:create_app", factory=True, host=host, port=port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
