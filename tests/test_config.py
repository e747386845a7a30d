"""Tests for typed configuration loading and environment refresh."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

import cuemotion.config as config

_ENV_NAMES = (
    "CUEMOTION_RESOLUTION",
    "CUEMOTION_FRAME_RATE",
    "CUEMOTION_LINE_THRESHOLD",
    "CUEMOTION_TRANSITION_SECONDS",
    "CUEMOTION_SUBTITLE_TRANSITION_SECONDS",
    "CUEMOTION_OUTPUT_DIR",
)


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keeps global settings stable across tests."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    config.reload_settings()
    yield
    monkeypatch.undo()
    config.reload_settings()


def test_defaults_without_environment() -> None:
    settings = config.reload_settings()

    assert settings.render == config.RenderConfig()
    assert settings.render.line_threshold == 41
    assert settings.output_folder == Path("./frames")


def test_reload_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables should be reflected in loaded settings."""
    monkeypatch.setenv("CUEMOTION_RESOLUTION", "2K")
    monkeypatch.setenv("CUEMOTION_FRAME_RATE", "60")
    monkeypatch.setenv("CUEMOTION_LINE_THRESHOLD", "30")
    monkeypatch.setenv("CUEMOTION_TRANSITION_SECONDS", "0.75")
    monkeypatch.setenv("CUEMOTION_SUBTITLE_TRANSITION_SECONDS", "0")
    monkeypatch.setenv("CUEMOTION_OUTPUT_DIR", "custom/frames")

    settings = config.reload_settings()

    assert settings.render.resolution == "2K"
    assert settings.render.frame_rate == 60
    assert settings.render.line_threshold == 30
    assert settings.render.transition_seconds == pytest.approx(0.75)
    assert settings.render.subtitle_transition_seconds == 0.0
    assert settings.output_folder == Path("custom/frames")
    assert config.get_settings() is settings


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("CUEMOTION_RESOLUTION", "720p"),
        ("CUEMOTION_FRAME_RATE", "24"),
        ("CUEMOTION_FRAME_RATE", "fast"),
        ("CUEMOTION_TRANSITION_SECONDS", "-1"),
        ("CUEMOTION_TRANSITION_SECONDS", "nan"),
    ],
)
def test_invalid_values_fall_back_to_defaults(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
    name: str,
    value: str,
) -> None:
    """Unusable values are logged and replaced by the defaults."""
    caplog.set_level(logging.WARNING)
    monkeypatch.setenv(name, value)

    settings = config.reload_settings()

    assert settings.render == config.RenderConfig()
    assert any(name in message for message in caplog.messages)


def test_non_positive_line_threshold_disables_wrapping(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("CUEMOTION_LINE_THRESHOLD", "0")

    assert config.reload_settings().render.line_threshold is None


def test_validators_raise_for_unknown_values() -> None:
    assert config.validate_resolution("2K") == "2K"
    assert config.validate_frame_rate(60) == 60
    with pytest.raises(config.UnsupportedResolutionError):
        config.validate_resolution("4K")
    with pytest.raises(config.UnsupportedFrameRateError):
        config.validate_frame_rate(25)
