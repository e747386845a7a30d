"""Vertical scroll position of the cue list at a playback time.

The offset places the active cue on the anchor row and eases between rows
inside a transition window centered on the gap between two neighbouring cues.
The result is a continuous function of time: every window starts and ends
exactly on the resting offsets of its two cues, and the windows of neighbouring
pairs never overlap. Cues that can never become active get no window of their
own.
"""

from __future__ import annotations

from cuemotion.engine.easing import EASE, lerp
from cuemotion.engine.geometry import RenderGeometry
from cuemotion.engine.resolver import (
    next_starting_index,
    previous_ending_index,
    resolve_active_index,
)
from cuemotion.engine.timeline import CueTimeline


def resting_offset(timeline: CueTimeline, geometry: RenderGeometry, index: int) -> float:
    """Offset that puts cue ``index`` on the anchor row."""
    return timeline.natural_position(index) - geometry.anchor


def transition_center(timeline: CueTimeline, first: int, second: int) -> float:
    """Midpoint between the end of ``first`` and the start of ``second``."""
    return (timeline[first].end + timeline[second].start) / 2.0


def transition_half_width(
    timeline: CueTimeline,
    geometry: RenderGeometry,
    first: int,
    second: int,
) -> float:
    """Half-width of the window between ``first`` and ``second``.

    Windows between neighbouring cues shrink so they never reach past the
    midway point to the neighbouring windows' centers. Cues that never become
    active are skipped when looking for neighbours.
    """
    half_width = geometry.transition_duration / 2.0
    if second != timeline.next_valid(first):
        return half_width

    center = transition_center(timeline, first, second)
    before = timeline.previous_valid(first)
    if before is not None:
        previous_center = transition_center(timeline, before, first)
        half_width = min(half_width, max(0.0, center - previous_center) / 2.0)
    after = timeline.next_valid(second)
    if after is not None:
        next_center = transition_center(timeline, second, after)
        half_width = min(half_width, max(0.0, next_center - center) / 2.0)
    return half_width


def _windowed_offset(
    timeline: CueTimeline,
    geometry: RenderGeometry,
    first: int,
    second: int,
    t: float,
) -> float | None:
    """Eased offset when ``t`` lies inside the ``first -> second`` window."""
    half_width = transition_half_width(timeline, geometry, first, second)
    if half_width <= 0.0:
        return None
    center = transition_center(timeline, first, second)
    window_start = center - half_width
    if not window_start <= t <= center + half_width:
        return None
    progress = (t - window_start) / (2.0 * half_width)
    return lerp(
        resting_offset(timeline, geometry, first),
        resting_offset(timeline, geometry, second),
        EASE(progress),
    )


def _offset_around(
    timeline: CueTimeline,
    geometry: RenderGeometry,
    index: int,
    t: float,
) -> float:
    """Offset near cue ``index``: its windows with both neighbours, else rest."""
    after = timeline.next_valid(index)
    if after is not None:
        eased = _windowed_offset(timeline, geometry, index, after, t)
        if eased is not None:
            return eased
    before = timeline.previous_valid(index)
    if before is not None:
        eased = _windowed_offset(timeline, geometry, before, index, t)
        if eased is not None:
            return eased
    return resting_offset(timeline, geometry, index)


def scroll_offset(
    timeline: CueTimeline,
    geometry: RenderGeometry,
    t: float,
    active_index: int | None = None,
) -> float:
    """Computes how far the cue list is scrolled at time ``t``.

    Args:
        timeline: Preprocessed cues.
        geometry: Scaled layout constants.
        t: Playback time in seconds.
        active_index: Precomputed active cue, resolved from ``t`` when omitted.

    Returns:
        Scroll offset in pixels. ``0.0`` for an empty timeline. Cues with a
        non-positive duration are scrolled past without stopping on them.
    """
    if not timeline:
        return 0.0

    if active_index is None:
        active_index = resolve_active_index(timeline, t)
    if active_index is not None:
        return _offset_around(timeline, geometry, active_index, t)

    previous_index = previous_ending_index(timeline, t)
    next_index = next_starting_index(timeline, t)

    if previous_index is not None and next_index is not None:
        eased = _windowed_offset(timeline, geometry, previous_index, next_index, t)
        if eased is not None:
            return eased
        nearer = (
            previous_index
            if t < transition_center(timeline, previous_index, next_index)
            else next_index
        )
        if next_index == timeline.next_valid(previous_index):
            return _offset_around(timeline, geometry, nearer, t)
        return resting_offset(timeline, geometry, nearer)

    if next_index is not None:
        return _offset_around(timeline, geometry, next_index, t)
    if previous_index is not None:
        return _offset_around(timeline, geometry, previous_index, t)
    # No cue can become active; keep the first row on the anchor.
    return resting_offset(timeline, geometry, 0)
