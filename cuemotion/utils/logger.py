"""Logging configuration helpers shared by the engine and the CLI."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = logging.INFO

_LOGGING_CONFIGURED = False


def _resolve_level(level: str | int | None) -> int:
    """Resolves an explicit level, then LOG_LEVEL, then the INFO default."""
    candidate: str | int | None = level
    if candidate is None:
        candidate = os.getenv("LOG_LEVEL")
    if candidate is None:
        return DEFAULT_LOG_LEVEL
    if isinstance(candidate, int):
        return candidate
    normalized = candidate.strip().upper()
    if normalized.isdigit():
        return int(normalized)
    resolved = logging.getLevelName(normalized)
    if isinstance(resolved, int):
        return resolved
    return DEFAULT_LOG_LEVEL


def configure_logging(level: str | int | None = None) -> int:
    """Configures root logging once and returns the applied level.

    Args:
        level: Explicit level name or number. Overrides ``LOG_LEVEL``.

    Returns:
        The numeric level applied to the root logger.
    """
    global _LOGGING_CONFIGURED

    resolved_level = _resolve_level(level)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT, level=resolved_level)
        for handler in root_logger.handlers:
            handler.setLevel(resolved_level)
    root_logger.setLevel(resolved_level)
    _LOGGING_CONFIGURED = True
    return resolved_level


def get_logger(name: str) -> logging.Logger:
    """Returns a named logger, configuring logging on first use only."""
    if not _LOGGING_CONFIGURED:
        configure_logging()
    return logging.getLogger(name)
