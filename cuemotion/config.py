"""Typed application settings loaded from environment variables."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path

from cuemotion.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

# Output sizes for each supported resolution, in pixels.
RESOLUTIONS: dict[str, tuple[int, int]] = {
    "1080p": (1920, 1080),
    "2K": (2560, 1440),
}
REFERENCE_RESOLUTION = "1080p"
FRAME_RATES: tuple[int, ...] = (30, 60)

DEFAULT_RESOLUTION = "1080p"
DEFAULT_FRAME_RATE = 30
DEFAULT_LINE_THRESHOLD = 41
DEFAULT_TRANSITION_SECONDS = 0.5
DEFAULT_SUBTITLE_TRANSITION_SECONDS = 0.3
DEFAULT_OUTPUT_FOLDER = "./frames"


class UnsupportedResolutionError(ValueError):
    """Raised when a resolution name has no known output size."""


class UnsupportedFrameRateError(ValueError):
    """Raised when a frame rate is not one of the supported rates."""


def validate_resolution(resolution: str) -> str:
    """Returns the resolution name or raises for unknown names."""
    if resolution not in RESOLUTIONS:
        raise UnsupportedResolutionError(
            f"Unsupported resolution {resolution!r}; "
            f"expected one of {', '.join(RESOLUTIONS)}."
        )
    return resolution


def validate_frame_rate(frame_rate: int) -> int:
    """Returns the frame rate or raises for unsupported rates."""
    if frame_rate not in FRAME_RATES:
        raise UnsupportedFrameRateError(
            f"Unsupported frame rate {frame_rate!r}; "
            f"expected one of {', '.join(str(rate) for rate in FRAME_RATES)}."
        )
    return frame_rate


@dataclass(frozen=True)
class RenderConfig:
    """Per-render output options."""

    resolution: str = DEFAULT_RESOLUTION
    frame_rate: int = DEFAULT_FRAME_RATE
    line_threshold: int | None = DEFAULT_LINE_THRESHOLD
    transition_seconds: float = DEFAULT_TRANSITION_SECONDS
    subtitle_transition_seconds: float = DEFAULT_SUBTITLE_TRANSITION_SECONDS


@dataclass(frozen=True)
class AppConfig:
    """Top-level application settings."""

    render: RenderConfig
    output_folder: Path


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid integer %s=%r; using %s.", name, raw, default)
        return default


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid number %s=%r; using %s.", name, raw, default)
        return default
    if not math.isfinite(value) or value < 0.0:
        logger.warning("Ignoring negative or non-finite %s=%r; using %s.", name, raw, default)
        return default
    return value


def _read_resolution() -> str:
    raw = os.getenv("CUEMOTION_RESOLUTION", DEFAULT_RESOLUTION).strip()
    if raw not in RESOLUTIONS:
        logger.warning(
            "Ignoring unsupported CUEMOTION_RESOLUTION=%r; using %s.",
            raw,
            DEFAULT_RESOLUTION,
        )
        return DEFAULT_RESOLUTION
    return raw


def _read_frame_rate() -> int:
    frame_rate = _read_int("CUEMOTION_FRAME_RATE", DEFAULT_FRAME_RATE)
    if frame_rate not in FRAME_RATES:
        logger.warning(
            "Ignoring unsupported CUEMOTION_FRAME_RATE=%s; using %s.",
            frame_rate,
            DEFAULT_FRAME_RATE,
        )
        return DEFAULT_FRAME_RATE
    return frame_rate


def _read_line_threshold() -> int | None:
    threshold = _read_int("CUEMOTION_LINE_THRESHOLD", DEFAULT_LINE_THRESHOLD)
    return threshold if threshold > 0 else None


def _load_settings() -> AppConfig:
    render = RenderConfig(
        resolution=_read_resolution(),
        frame_rate=_read_frame_rate(),
        line_threshold=_read_line_threshold(),
        transition_seconds=_read_float(
            "CUEMOTION_TRANSITION_SECONDS", DEFAULT_TRANSITION_SECONDS
        ),
        subtitle_transition_seconds=_read_float(
            "CUEMOTION_SUBTITLE_TRANSITION_SECONDS",
            DEFAULT_SUBTITLE_TRANSITION_SECONDS,
        ),
    )
    return AppConfig(
        render=render,
        output_folder=Path(os.getenv("CUEMOTION_OUTPUT_DIR", DEFAULT_OUTPUT_FOLDER)),
    )


_SETTINGS: AppConfig = _load_settings()


def get_settings() -> AppConfig:
    """Returns the currently loaded settings."""
    return _SETTINGS


def reload_settings() -> AppConfig:
    """Re-reads settings from the environment and returns them."""
    global _SETTINGS
    _SETTINGS = _load_settings()
    return _SETTINGS
