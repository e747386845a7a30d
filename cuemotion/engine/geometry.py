"""Resolution-scaled layout constants for the cue list and visualizer.

Every pixel constant is authored against the 1080p reference frame and scaled
once by the output resolution. The resulting ``RenderGeometry`` is immutable
and is passed explicitly to every per-frame computation.
"""

from __future__ import annotations

import math
from typing import TypeAlias
from dataclasses import dataclass

from cuemotion.config import (
    DEFAULT_TRANSITION_SECONDS,
    REFERENCE_RESOLUTION,
    RESOLUTIONS,
    validate_resolution,
)

RGB: TypeAlias = tuple[int, int, int]


@dataclass(frozen=True)
class BaseGeometry:
    """Layout constants at the 1080p reference resolution."""

    row_height: float = 98.0
    row_margin: float = 48.0
    extra_line_margin: float = 30.0
    anchor_lift: float = 45.0
    scale_distance: float = 150.0
    opacity_near_distance: float = 150.0
    opacity_far_distance: float = 350.0
    inactive_font_size: float = 54.0
    active_font_size: float = 60.0
    inactive_font_weight: float = 400.0
    active_font_weight: float = 700.0
    inactive_color: RGB = (255, 255, 255)
    active_color: RGB = (30, 215, 96)
    active_scale: float = 1.08
    inactive_scale: float = 0.92
    visualizer_height: float = 40.0
    visualizer_bar_width: float = 3.0
    visualizer_bar_margin: float = 1.0


BASE_GEOMETRY = BaseGeometry()


@dataclass(frozen=True)
class RenderGeometry:
    """Layout constants scaled to one output resolution."""

    resolution: str
    frame_width: int
    frame_height: int
    scale_factor: float
    row_height: float
    row_margin: float
    extra_line_margin: float
    anchor: float
    scale_distance: float
    opacity_near_distance: float
    opacity_far_distance: float
    inactive_font_size: float
    active_font_size: float
    inactive_font_weight: float
    active_font_weight: float
    inactive_color: RGB
    active_color: RGB
    active_scale: float
    inactive_scale: float
    visualizer_height: float
    visualizer_bar_width: float
    visualizer_bar_margin: float
    transition_duration: float

    @property
    def row_pitch(self) -> float:
        """Vertical distance between consecutive single-line rows."""
        return self.row_height + self.row_margin

    @property
    def bar_pitch(self) -> float:
        """Horizontal distance between consecutive visualizer bars."""
        return self.visualizer_bar_width + self.visualizer_bar_margin


def resolution_scale_factor(resolution: str) -> float:
    """Returns the width ratio between ``resolution`` and the 1080p reference."""
    width, _ = RESOLUTIONS[validate_resolution(resolution)]
    reference_width, _ = RESOLUTIONS[REFERENCE_RESOLUTION]
    return width / reference_width


def scale_value(base_value: float, scale_factor: float) -> float:
    """Scales a reference pixel value, rounding half up to whole pixels."""
    return float(math.floor(base_value * scale_factor + 0.5))


def build_render_geometry(
    resolution: str = REFERENCE_RESOLUTION,
    *,
    transition_duration: float = DEFAULT_TRANSITION_SECONDS,
    base: BaseGeometry = BASE_GEOMETRY,
) -> RenderGeometry:
    """Builds the immutable geometry for one output resolution.

    Args:
        resolution: Resolution name, one of ``RESOLUTIONS``.
        transition_duration: Crossfade/scroll transition length in seconds.
        base: Reference constants to scale.

    Returns:
        Geometry with all pixel constants scaled to ``resolution``.

    Raises:
        UnsupportedResolutionError: If ``resolution`` is unknown.
        ValueError: If ``transition_duration`` is negative or not finite.
    """
    if not math.isfinite(transition_duration) or transition_duration < 0.0:
        raise ValueError("transition_duration must be a non-negative finite float.")

    factor = resolution_scale_factor(resolution)
    frame_width, frame_height = RESOLUTIONS[resolution]

    def scaled(value: float) -> float:
        return scale_value(value, factor)

    return RenderGeometry(
        resolution=resolution,
        frame_width=frame_width,
        frame_height=frame_height,
        scale_factor=factor,
        row_height=scaled(base.row_height),
        row_margin=scaled(base.row_margin),
        extra_line_margin=scaled(base.extra_line_margin),
        anchor=frame_height / 2 - scaled(base.anchor_lift),
        scale_distance=scaled(base.scale_distance),
        opacity_near_distance=scaled(base.opacity_near_distance),
        opacity_far_distance=scaled(base.opacity_far_distance),
        inactive_font_size=scaled(base.inactive_font_size),
        active_font_size=scaled(base.active_font_size),
        inactive_font_weight=base.inactive_font_weight,
        active_font_weight=base.active_font_weight,
        inactive_color=base.inactive_color,
        active_color=base.active_color,
        active_scale=base.active_scale,
        inactive_scale=base.inactive_scale,
        visualizer_height=scaled(base.visualizer_height),
        visualizer_bar_width=scaled(base.visualizer_bar_width),
        visualizer_bar_margin=scaled(base.visualizer_bar_margin),
        transition_duration=float(transition_duration),
    )
