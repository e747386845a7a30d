"""Clamped interpolation and cubic-bezier easing helpers."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from typing import TypeAlias

import numpy as np

EasingFunction: TypeAlias = Callable[[float], float]

_NEWTON_ITERATIONS = 8
_NEWTON_MIN_SLOPE = 1e-3
_SUBDIVISION_PRECISION = 1e-7
_SUBDIVISION_MAX_ITERATIONS = 20


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """Clamps ``value`` into ``[lower, upper]``."""
    return max(lower, min(upper, value))


def lerp(start: float, end: float, progress: float) -> float:
    """Linearly interpolates with ``progress`` clamped to ``[0, 1]``."""
    return start + (end - start) * clamp(progress)


def interpolate(
    value: float,
    input_range: Sequence[float],
    output_range: Sequence[float],
) -> float:
    """Piecewise-linear mapping that clamps outside ``input_range``.

    Args:
        value: Input value.
        input_range: Strictly increasing breakpoints.
        output_range: Output value at each breakpoint.

    Returns:
        Interpolated output, held constant beyond the first/last breakpoint.

    Raises:
        ValueError: If ranges differ in length or are not increasing.
    """
    if len(input_range) != len(output_range) or len(input_range) < 2:
        raise ValueError("input_range and output_range need matching lengths >= 2.")
    breakpoints = np.asarray(input_range, dtype=np.float64)
    if np.any(np.diff(breakpoints) <= 0.0):
        raise ValueError("input_range must be strictly increasing.")
    return float(
        np.interp(value, breakpoints, np.asarray(output_range, dtype=np.float64))
    )


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFunction:
    """Builds a CSS-style cubic-bezier easing function.

    The curve runs from ``(0, 0)`` to ``(1, 1)`` with control points
    ``(x1, y1)`` and ``(x2, y2)``. Inputs are clamped to ``[0, 1]``.

    Raises:
        ValueError: If an x control coordinate is outside ``[0, 1]``.
    """
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        raise ValueError("bezier x values must be in [0, 1].")

    if x1 == y1 and x2 == y2:
        return clamp

    def coefficients(p1: float, p2: float) -> tuple[float, float, float]:
        c = 3.0 * p1
        b = 3.0 * (p2 - p1) - c
        a = 1.0 - c - b
        return a, b, c

    ax, bx, cx = coefficients(x1, x2)
    ay, by, cy = coefficients(y1, y2)

    def sample_x(t: float) -> float:
        return ((ax * t + bx) * t + cx) * t

    def sample_y(t: float) -> float:
        return ((ay * t + by) * t + cy) * t

    def slope_x(t: float) -> float:
        return (3.0 * ax * t + 2.0 * bx) * t + cx

    def solve_t(x: float) -> float:
        t = x
        for _ in range(_NEWTON_ITERATIONS):
            slope = slope_x(t)
            if abs(slope) < _NEWTON_MIN_SLOPE:
                break
            error = sample_x(t) - x
            if abs(error) < _SUBDIVISION_PRECISION:
                return t
            t -= error / slope
        else:
            if 0.0 <= t <= 1.0:
                return t

        lower, upper = 0.0, 1.0
        t = x
        for _ in range(_SUBDIVISION_MAX_ITERATIONS):
            error = sample_x(t) - x
            if abs(error) < _SUBDIVISION_PRECISION:
                break
            if error > 0.0:
                upper = t
            else:
                lower = t
            t = (lower + upper) / 2.0
        return t

    def ease(progress: float) -> float:
        x = clamp(progress)
        if x == 0.0 or x == 1.0:
            return x
        return sample_y(solve_t(x))

    return ease


# Standard CSS "ease" curve used for scrolling between cues.
EASE = cubic_bezier(0.25, 0.1, 0.25, 1.0)
