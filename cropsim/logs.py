"""Structured logging setup (stdlib logging + structlog)."""

from __future__ import annotations

import logging
from typing import Any

import structlog

from cropsim.config import LogFormat, get_settings

_configured = False


def configure_logging(force: bool = False) -> None:
    """
    Configure stdlib logging and structlog once per process.

    Level and renderer come from :func:`cropsim.config.get_settings`
    (``CROPSIM_LOG_LEVEL``, ``CROPSIM_LOG_FORMAT``). Library code only calls
    ``structlog.get_logger(__name__)``; applications call this function at
    start-up. Pass ``force=True`` to reconfigure after settings changed.
    """
    global _configured
    if _configured and not force:
        return

    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if settings.log_format == LogFormat.json:
        renderer: Any = structlog.processors.JSONRenderer()
        logging.basicConfig(level=log_level, format="%(message)s")
    else:
        renderer = structlog.dev.ConsoleRenderer()
        logging.basicConfig(level=log_level)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True
