"""Logging configuration (loguru)."""

from __future__ import annotations

import sys

from loguru import logger

from .config import get_settings

_CONFIGURED = False


def setup_logging(level: str | None = None) -> None:
    """Replace loguru's default handler with a stderr sink at LOG_LEVEL."""
    global _CONFIGURED
    if _CONFIGURED and level is None:
        return
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.log_level),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=settings.app_env != "prod",
    )
    _CONFIGURED = True
    logger.debug("Logging configured with level: {}", level or settings.log_level)
