"""Per-cue, per-frame appearance derived from scroll distance and timing."""

from __future__ import annotations

import math
from dataclasses import dataclass

from cuemotion.domain import ProcessedCue
from cuemotion.engine.easing import clamp, interpolate, lerp
from cuemotion.engine.geometry import RGB, RenderGeometry


@dataclass(frozen=True)
class CueVisualState:
    """Appearance of one cue in one frame."""

    index: int
    text: str
    position: float
    distance: float
    progress: float
    opacity: float
    scale: float
    font_size: float
    font_weight: float
    color: RGB

    @property
    def css_color(self) -> str:
        r, g, b = self.color
        return f"rgb({r}, {g}, {b})"


def cue_progress(cue: ProcessedCue, t: float, transition_duration: float) -> float:
    """Highlight progress of a cue from its own time window only.

    Ramps 0 -> 1 over ``transition_duration`` before ``start``, holds 1 through
    ``[start, end]`` and ramps back to 0 after ``end``. Neighbouring cues can
    therefore be partially highlighted at the same time during a crossfade.
    """
    if cue.start <= t <= cue.end:
        return 1.0
    if transition_duration <= 0.0:
        return 0.0
    if t < cue.start:
        return clamp(1.0 - (cue.start - t) / transition_duration)
    return clamp(1.0 - (t - cue.end) / transition_duration)


def interpolate_color(progress: float, inactive: RGB, active: RGB) -> RGB:
    """Blends two colors per channel, rounding half up and clamping to 0..255."""
    return tuple(
        min(255, max(0, math.floor(lerp(low, high, progress) + 0.5)))
        for low, high in zip(inactive, active)
    )  # type: ignore[return-value]


def distance_scale(distance: float, geometry: RenderGeometry) -> float:
    """Shrinks cues away from the anchor row."""
    return lerp(
        geometry.active_scale,
        geometry.inactive_scale,
        distance / geometry.scale_distance if geometry.scale_distance > 0 else 1.0,
    )


def distance_opacity(distance: float, geometry: RenderGeometry) -> float:
    """Fades cues to 0.3 at the near threshold and to 0 at the far threshold."""
    return interpolate(
        distance,
        (0.0, geometry.opacity_near_distance, geometry.opacity_far_distance),
        (1.0, 0.3, 0.0),
    )


def build_cue_visual_state(
    index: int,
    cue: ProcessedCue,
    natural_position: float,
    offset: float,
    t: float,
    geometry: RenderGeometry,
) -> CueVisualState:
    """Computes the appearance of cue ``index`` for one frame.

    Args:
        index: Position of the cue in the timeline.
        cue: The cue.
        natural_position: Unscrolled vertical position of the cue.
        offset: Current scroll offset of the list.
        t: Playback time in seconds.
        geometry: Scaled layout constants.

    Returns:
        The cue's frame appearance.
    """
    position = natural_position - offset
    distance = abs(position - geometry.anchor)
    progress = cue_progress(cue, t, geometry.transition_duration)
    return CueVisualState(
        index=index,
        text=cue.text,
        position=position,
        distance=distance,
        progress=progress,
        opacity=distance_opacity(distance, geometry),
        scale=distance_scale(distance, geometry),
        font_size=lerp(geometry.inactive_font_size, geometry.active_font_size, progress),
        font_weight=lerp(
            geometry.inactive_font_weight, geometry.active_font_weight, progress
        ),
        color=interpolate_color(progress, geometry.inactive_color, geometry.active_color),
    )
