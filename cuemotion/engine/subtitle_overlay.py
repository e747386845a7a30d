"""Single-cue subtitle overlay with fade in and fade out."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cuemotion.config import DEFAULT_SUBTITLE_TRANSITION_SECONDS
from cuemotion.domain import ProcessedCue
from cuemotion.engine.easing import clamp


@dataclass(frozen=True)
class SubtitleOverlay:
    """The one subtitle shown at a given time."""

    index: int
    text: str
    opacity: float


def subtitle_overlay(
    cues: Sequence[ProcessedCue],
    t: float,
    transition_duration: float = DEFAULT_SUBTITLE_TRANSITION_SECONDS,
) -> SubtitleOverlay | None:
    """Returns the first cue visible at ``t``, faded near its bounds.

    A cue is visible from ``start - transition_duration`` to
    ``end + transition_duration``. Returns ``None`` when nothing is visible.
    """
    for index, cue in enumerate(cues):
        if not cue.start - transition_duration <= t <= cue.end + transition_duration:
            continue
        opacity = 1.0
        if transition_duration > 0.0:
            if t < cue.start:
                opacity = (t - (cue.start - transition_duration)) / transition_duration
            elif t > cue.end:
                opacity = 1.0 - (t - cue.end) / transition_duration
        opacity = clamp(opacity)
        if opacity <= 0.0:
            return None
        return SubtitleOverlay(index=index, text=cue.text, opacity=opacity)
    return None
