"""Centralised settings for the webtext service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Browser / rendering
    # ------------------------------------------------------------------
    render_timeout: float = field(
        default_factory=lambda: float(os.environ.get("RENDER_TIMEOUT", "30.0"))
    )
    content_wait_timeout: float = field(
        default_factory=lambda: float(os.environ.get("CONTENT_WAIT_TIMEOUT", "5.0"))
    )
    # Portrait tablet viewport: responsive sites serve their central content
    # with less clutter at this size.
    viewport_width: int = field(
        default_factory=lambda: int(os.environ.get("VIEWPORT_WIDTH", "820"))
    )
    viewport_height: int = field(
        default_factory=lambda: int(os.environ.get("VIEWPORT_HEIGHT", "1180"))
    )
    browser_executable_path: Optional[str] = field(
        default_factory=lambda: os.environ.get("BROWSER_EXECUTABLE_PATH") or None
    )
    max_concurrent_renders: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONCURRENT_RENDERS", "4"))
    )

    # ------------------------------------------------------------------
    # Print-to-PDF
    # ------------------------------------------------------------------
    pdf_scale: float = field(
        default_factory=lambda: float(os.environ.get("PDF_SCALE", "0.5"))
    )
    pdf_paper_width: float = field(
        default_factory=lambda: float(os.environ.get("PDF_PAPER_WIDTH", "11.0"))
    )
    pdf_paper_height: float = field(
        default_factory=lambda: float(os.environ.get("PDF_PAPER_HEIGHT", "17.0"))
    )
    pdf_margin: float = field(
        default_factory=lambda: float(os.environ.get("PDF_MARGIN", "0.1"))
    )
    pdf_page_ranges: str = field(
        default_factory=lambda: os.environ.get("PDF_PAGE_RANGES", "1-2")
    )

    # ------------------------------------------------------------------
    # Readability
    # ------------------------------------------------------------------
    text_wrap_width: int = field(
        default_factory=lambda: int(os.environ.get("TEXT_WRAP_WIDTH", "80"))
    )

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    api_host: str = field(
        default_factory=lambda: os.environ.get("API_HOST", "127.0.0.1")
    )
    api_port: int = field(
        default_factory=lambda: int(os.environ.get("API_PORT", "3000"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )
    log_format: str = field(
        default_factory=lambda: os.environ.get("LOG_FORMAT", "json").strip().lower()
    )


# Module-level singleton, import this everywhere:
#   from webtext.config import settings
settings = Settings()
