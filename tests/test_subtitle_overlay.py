"""Tests for the single-cue subtitle overlay."""

import pytest

from cuemotion.domain import ProcessedCue
from cuemotion.engine.subtitle_overlay import subtitle_overlay

CUES = [
    ProcessedCue(0.0, 2.0, "A", 1),
    ProcessedCue(2.0, 4.0, "B", 1),
]


def test_visible_cue_is_fully_opaque() -> None:
    overlay = subtitle_overlay(CUES, 1.0)

    assert overlay is not None
    assert (overlay.index, overlay.text, overlay.opacity) == (0, "A", 1.0)


def test_fade_in_and_fade_out() -> None:
    fading_in = subtitle_overlay(CUES, -0.15)
    fading_out = subtitle_overlay(CUES, 4.15)

    assert fading_in is not None and fading_in.text == "A"
    assert fading_in.opacity == pytest.approx(0.5)
    assert fading_out is not None and fading_out.text == "B"
    assert fading_out.opacity == pytest.approx(0.5)


def test_first_cue_wins_on_shared_boundary() -> None:
    overlay = subtitle_overlay(CUES, 2.0)

    assert overlay is not None
    assert overlay.index == 0


def test_nothing_visible_far_from_cues() -> None:
    assert subtitle_overlay(CUES, 10.0) is None
    assert subtitle_overlay(CUES, -0.3) is None
    assert subtitle_overlay([], 1.0) is None


def test_zero_transition_shows_cue_only_inside_bounds() -> None:
    assert subtitle_overlay(CUES, 3.0, transition_duration=0.0).opacity == 1.0
    assert subtitle_overlay(CUES, 4.01, transition_duration=0.0) is None
