"""Tests for resolution scaling of layout constants."""

import pytest

from cuemotion.config import UnsupportedResolutionError
from cuemotion.engine.geometry import (
    build_render_geometry,
    resolution_scale_factor,
    scale_value,
)


def test_reference_resolution_keeps_base_values() -> None:
    """1080p geometry should equal the reference constants."""
    geometry = build_render_geometry("1080p")

    assert geometry.scale_factor == pytest.approx(1.0)
    assert geometry.row_height == 98
    assert geometry.row_margin == 48
    assert geometry.row_pitch == 146
    assert geometry.extra_line_margin == 30
    assert geometry.anchor == pytest.approx(1080 / 2 - 45)
    assert geometry.opacity_far_distance == 350
    assert geometry.bar_pitch == 4
    assert geometry.transition_duration == pytest.approx(0.5)


def test_2k_scales_pixel_constants_and_rounds_half_up() -> None:
    """2K geometry scales every pixel constant by 2560/1920."""
    geometry = build_render_geometry("2K")

    assert resolution_scale_factor("2K") == pytest.approx(2560 / 1920)
    assert geometry.row_height == 131
    assert geometry.row_margin == 64
    assert geometry.extra_line_margin == 40
    assert geometry.anchor == pytest.approx(1440 / 2 - 60)
    assert geometry.scale_distance == 200
    assert geometry.opacity_far_distance == 467
    assert geometry.active_font_size == 80
    assert geometry.inactive_font_size == 72
    assert geometry.active_font_weight == 700


def test_scale_value_rounds_half_away_from_even() -> None:
    """Half-pixel values round up rather than to even."""
    assert scale_value(2.5, 1.0) == 3.0
    assert scale_value(3.5, 1.0) == 4.0


def test_unknown_resolution_is_rejected() -> None:
    with pytest.raises(UnsupportedResolutionError):
        build_render_geometry("720p")


def test_negative_transition_duration_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_render_geometry("1080p", transition_duration=-0.1)


def test_geometry_is_immutable() -> None:
    geometry = build_render_geometry("1080p")

    with pytest.raises(AttributeError):
        geometry.row_height = 10  # type: ignore[misc]
