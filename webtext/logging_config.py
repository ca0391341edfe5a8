"""structlog configuration shared by the API, the CLI and the pipeline."""

from __future__ import annotations

import logging
import sys

import structlog

from webtext.config import settings

_LOGGING_INITIALISED = False


def _build_pre_chain(log_format: str) -> list:
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if log_format == "plain":
        processors.append(structlog.processors.UnicodeDecoder())
    return processors


def _build_renderer(log_format: str):
    if log_format == "plain":
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def setup_logging(force: bool = False) -> None:
    """Route structlog and stdlib logging through one stream handler.

    Safe to call repeatedly; only the first call (or one with ``force=True``)
    touches the root logger.
    """
    global _LOGGING_INITIALISED
    if _LOGGING_INITIALISED and not force:
        return

    log_format = settings.log_format
    if log_format not in {"json", "plain"}:
        log_format = "json"

    pre_chain = _build_pre_chain(log_format)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_build_renderer(log_format),
        foreign_pre_chain=pre_chain,
        fmt="%(message)s",
    )

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    _LOGGING_INITIALISED = True
