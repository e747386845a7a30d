"""Behavior tests for the cue animation engine facade."""

import json
import logging

import pytest

from cuemotion.config import (
    RenderConfig,
    UnsupportedFrameRateError,
    UnsupportedResolutionError,
    get_settings,
)
from cuemotion.engine import CueAnimationEngine, VolumeSampleBuffer


@pytest.fixture
def engine(sample_cues, render_config) -> CueAnimationEngine:
    return CueAnimationEngine(sample_cues, render_config=render_config)


def test_evaluate_is_deterministic_and_order_independent(engine) -> None:
    """Frames evaluated in any order match a fresh evaluation."""
    later = engine.evaluate(5.0)
    earlier = engine.evaluate(1.0)

    assert engine.evaluate(1.0) == earlier
    assert engine.evaluate(5.0) == later


def test_frame_state_reports_active_cue_and_offset(engine) -> None:
    state = engine.evaluate(3.0)

    assert state.active_index == 1
    assert state.scroll_offset == pytest.approx(-349.0)
    assert len(state.cues) == 3
    assert state.cues[1].position == pytest.approx(engine.geometry.anchor)
    assert state.cues[1].progress == 1.0
    assert state.subtitle is not None and state.subtitle.text == "B"


def test_empty_cue_list_yields_neutral_state(render_config) -> None:
    engine = CueAnimationEngine([], render_config=render_config)

    state = engine.evaluate(4.0)

    assert state.active_index is None
    assert state.scroll_offset == 0.0
    assert state.cues == ()
    assert state.subtitle is None
    assert state.visualizer.bars == ()


def test_non_finite_time_is_evaluated_at_zero(engine, caplog) -> None:
    caplog.set_level(logging.WARNING)

    state = engine.evaluate(float("nan"))

    assert state.time_seconds == 0.0
    assert state == engine.evaluate(0.0)
    assert any("Non-finite playback time" in message for message in caplog.messages)


def test_frames_map_to_time_at_frame_rate(engine) -> None:
    assert engine.frame_time(45) == pytest.approx(1.5)
    assert engine.evaluate_frame(60).time_seconds == pytest.approx(2.0)
    assert engine.frame_count(2.01) == 61
    assert engine.frame_count(0.0) == 0
    assert [frame.time_seconds for frame in engine.iter_frames(0, 3)] == pytest.approx(
        [0.0, 1 / 30, 2 / 30]
    )


def test_wrapping_threshold_comes_from_render_config(render_config) -> None:
    text = "a lyric line that is comfortably longer than forty one characters"
    engine = CueAnimationEngine([(0.0, 1.0, text)], render_config=render_config)

    assert engine.timeline.line_count(0) == 2


def test_volume_buffer_feeds_visualizer(sample_cues, render_config) -> None:
    buffer = VolumeSampleBuffer.from_levels([0.1] * 30)
    engine = CueAnimationEngine(
        sample_cues, render_config=render_config, volume_buffer=buffer
    )

    frame = engine.evaluate(10.5)

    assert frame.visualizer.first_second == 0
    assert frame.visualizer.last_second == 29


def test_unsupported_render_options_are_rejected(sample_cues) -> None:
    with pytest.raises(UnsupportedFrameRateError):
        CueAnimationEngine(sample_cues, render_config=RenderConfig(frame_rate=24))
    with pytest.raises(UnsupportedResolutionError):
        CueAnimationEngine(sample_cues, render_config=RenderConfig(resolution="4K"))


def test_default_render_config_comes_from_settings(sample_cues) -> None:
    engine = CueAnimationEngine(sample_cues)

    assert engine.render_config == get_settings().render


def test_to_dict_is_json_serializable(engine) -> None:
    payload = engine.evaluate(1.9).to_dict()

    encoded = json.loads(json.dumps(payload))
    assert encoded["active_index"] == 0
    assert encoded["cues"][0]["css_color"].startswith("rgb(")
    assert isinstance(encoded["cues"][0]["color"], list)


def test_subtitle_keeps_unwrapped_text(render_config) -> None:
    """The list wraps long cues; the single subtitle overlay does not."""
    text = "a subtitle line that is comfortably longer than forty one characters"
    engine = CueAnimationEngine([(0.0, 2.0, text)], render_config=render_config)

    state = engine.evaluate(1.0)

    assert "\n" in state.cues[0].text
    assert state.subtitle is not None
    assert state.subtitle.text == text
