"""Windowed audio-level bars around the playback time."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from cuemotion.engine.geometry import RenderGeometry

SAMPLE_PADDING = 40
WINDOW_SECONDS = 20
MISSING_VOLUME = 0.05
VOLUME_GAIN = 3.5
HEIGHT_FILL = 0.8
EDGE_FADE_START_SECONDS = 18.0
EDGE_FADE_SPAN_SECONDS = 2.0
EDGE_FADE_MAX_ATTENUATION = 0.3
OPACITY_FALLOFF = 0.5


class VolumeSampleBuffer:
    """Read-only per-second loudness values padded on both sides.

    The raw array holds ``SAMPLE_PADDING`` padding samples, then one value per
    second of audio, then ``SAMPLE_PADDING`` padding samples again.
    """

    def __init__(self, samples: Iterable[float] | NDArray[np.float64]) -> None:
        values = np.array(samples, dtype=np.float64)
        if values.ndim != 1:
            raise ValueError("Volume samples must be a one-dimensional sequence.")
        values.setflags(write=False)
        self._samples: NDArray[np.float64] = values

    @classmethod
    def from_levels(
        cls,
        levels: Iterable[float],
        pad_value: float = 0.0,
    ) -> VolumeSampleBuffer:
        """Builds a buffer from unpadded per-second levels."""
        data = np.asarray(list(levels), dtype=np.float64)
        padding = np.full(SAMPLE_PADDING, pad_value, dtype=np.float64)
        return cls(np.concatenate((padding, data, padding)))

    def __len__(self) -> int:
        return int(self._samples.shape[0])

    @property
    def samples(self) -> NDArray[np.float64]:
        return self._samples

    @property
    def data_length(self) -> int:
        """Number of audio seconds covered, excluding padding."""
        return max(0, len(self) - 2 * SAMPLE_PADDING)

    def volumes_at(self, seconds: NDArray[np.int64]) -> NDArray[np.float64]:
        """Volume for each second, ``MISSING_VOLUME`` where no finite sample exists."""
        indices = np.asarray(seconds, dtype=np.int64) + SAMPLE_PADDING
        in_bounds = (indices >= 0) & (indices < len(self))
        volumes = np.full(indices.shape, MISSING_VOLUME, dtype=np.float64)
        volumes[in_bounds] = self._samples[indices[in_bounds]]
        volumes[~np.isfinite(volumes)] = MISSING_VOLUME
        return volumes


@dataclass(frozen=True)
class VisualizerBar:
    """One bar of the audio-level strip."""

    second: int
    height: float
    opacity: float
    is_center: bool


@dataclass(frozen=True)
class VisualizerFrame:
    """Bars around the playback time and the strip's leftward sub-second shift."""

    center_second: int
    bars: tuple[VisualizerBar, ...]
    shift: float

    @property
    def first_second(self) -> int | None:
        return self.bars[0].second if self.bars else None

    @property
    def last_second(self) -> int | None:
        return self.bars[-1].second if self.bars else None


def boundary_attenuation(distances: NDArray[np.float64]) -> NDArray[np.float64]:
    """Reduces amplitude by up to 30% for bars far from the playback time."""
    fade = 1.0 - (
        (distances - EDGE_FADE_START_SECONDS) / EDGE_FADE_SPAN_SECONDS
    ) * EDGE_FADE_MAX_ATTENUATION
    fade = np.clip(fade, 1.0 - EDGE_FADE_MAX_ATTENUATION, 1.0)
    return np.where(distances > EDGE_FADE_START_SECONDS, fade, 1.0)


def build_visualizer_frame(
    buffer: VolumeSampleBuffer | None,
    t: float,
    geometry: RenderGeometry,
) -> VisualizerFrame:
    """Builds the bar window for seconds ``[floor(t) - 20, floor(t) + 20]``.

    Args:
        buffer: Padded per-second volumes, or ``None`` when unavailable.
        t: Playback time in seconds.
        geometry: Scaled layout constants.

    Returns:
        The bars clipped to the buffer's audio range, oldest first.
    """
    center_second = math.floor(t)
    shift = (t - center_second) * geometry.bar_pitch
    if buffer is None:
        return VisualizerFrame(center_second=center_second, bars=(), shift=shift)

    first_second = max(0, center_second - WINDOW_SECONDS)
    last_second = min(buffer.data_length - 1, center_second + WINDOW_SECONDS)
    if last_second < first_second:
        return VisualizerFrame(center_second=center_second, bars=(), shift=shift)

    seconds = np.arange(first_second, last_second + 1, dtype=np.int64)
    distances = np.abs(seconds.astype(np.float64) - t)
    heights = (
        np.minimum(1.0, buffer.volumes_at(seconds) * VOLUME_GAIN)
        * boundary_attenuation(distances)
        * geometry.visualizer_height
        * HEIGHT_FILL
    )
    opacities = np.clip(1.0 - (distances / WINDOW_SECONDS) * OPACITY_FALLOFF, 0.0, 1.0)

    bars = tuple(
        VisualizerBar(
            second=int(second),
            height=float(height),
            opacity=float(opacity),
            is_center=int(second) == center_second,
        )
        for second, height, opacity in zip(seconds, heights, opacities)
    )
    return VisualizerFrame(center_second=center_second, bars=bars, shift=shift)
