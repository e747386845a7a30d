"""Lookups of the cues surrounding a playback time.

All lookups scan in timeline order, so unsorted or overlapping input resolves
to the first matching cue instead of failing. Cues with a non-positive
duration never become active and are skipped by every lookup.
"""

from __future__ import annotations

from collections.abc import Sequence

from cuemotion.domain import ProcessedCue


def resolve_active_index(cues: Sequence[ProcessedCue], t: float) -> int | None:
    """Returns the first cue index whose ``[start, end]`` contains ``t``.

    Cues with a non-positive duration are never active.
    """
    for index, cue in enumerate(cues):
        if cue.is_valid and cue.start <= t <= cue.end:
            return index
    return None


def previous_ending_index(cues: Sequence[ProcessedCue], t: float) -> int | None:
    """Returns the cue with the latest ``end <= t``; the first one on ties."""
    best: int | None = None
    for index, cue in enumerate(cues):
        if not cue.is_valid:
            continue
        if cue.end <= t and (best is None or cues[best].end < cue.end):
            best = index
    return best


def next_starting_index(cues: Sequence[ProcessedCue], t: float) -> int | None:
    """Returns the first cue in timeline order with ``start > t``."""
    for index, cue in enumerate(cues):
        if cue.is_valid and cue.start > t:
            return index
    return None
