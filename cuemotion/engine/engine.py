"""Per-frame evaluation entry point for lyric and subtitle videos."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass
from typing import Any

from cuemotion.config import RenderConfig, get_settings, validate_frame_rate
from cuemotion.domain import CueEntry, ProcessedCue
from cuemotion.engine.geometry import RenderGeometry, build_render_geometry
from cuemotion.engine.resolver import resolve_active_index
from cuemotion.engine.scroll import scroll_offset
from cuemotion.engine.subtitle_overlay import SubtitleOverlay, subtitle_overlay
from cuemotion.engine.timeline import CueTimeline, process_cue
from cuemotion.engine.visual_state import CueVisualState, build_cue_visual_state
from cuemotion.engine.visualizer import (
    VisualizerFrame,
    VolumeSampleBuffer,
    build_visualizer_frame,
)
from cuemotion.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class FrameState:
    """Complete visual state of one rendered instant."""

    time_seconds: float
    active_index: int | None
    scroll_offset: float
    cues: tuple[CueVisualState, ...]
    visualizer: VisualizerFrame
    subtitle: SubtitleOverlay | None

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation, colors included as CSS strings."""
        payload = asdict(self)
        for cue_payload, cue in zip(payload["cues"], self.cues):
            cue_payload["color"] = list(cue.color)
            cue_payload["css_color"] = cue.css_color
        return payload


class CueAnimationEngine:
    """Evaluates cue, scroll and visualizer state for any playback time.

    The engine holds only immutable inputs, so frames may be evaluated in any
    order and any number of times with identical results.
    """

    def __init__(
        self,
        cues: Iterable[CueEntry],
        *,
        render_config: RenderConfig | None = None,
        volume_buffer: VolumeSampleBuffer | None = None,
    ) -> None:
        config = render_config if render_config is not None else get_settings().render
        self.render_config: RenderConfig = config
        self.frame_rate: int = validate_frame_rate(config.frame_rate)
        self.geometry: RenderGeometry = build_render_geometry(
            config.resolution,
            transition_duration=config.transition_seconds,
        )
        entries = [CueEntry(*cue) for cue in cues]
        self.timeline: CueTimeline = CueTimeline.build(
            entries, config.line_threshold, self.geometry
        )
        # Subtitles are shown one at a time and keep their source line breaks.
        self.subtitle_cues: tuple[ProcessedCue, ...] = tuple(
            process_cue(entry, None) for entry in entries
        )
        self.volume_buffer: VolumeSampleBuffer | None = volume_buffer
        logger.info(
            "Cue engine ready: %s cues at %s/%sfps.",
            len(self.timeline),
            config.resolution,
            self.frame_rate,
        )

    def evaluate(self, t: float) -> FrameState:
        """Computes the full visual state at playback time ``t`` in seconds."""
        t = float(t)
        if not math.isfinite(t):
            logger.warning("Non-finite playback time %s; evaluating at 0.0.", t)
            t = 0.0

        timeline = self.timeline
        active_index = resolve_active_index(timeline, t)
        offset = scroll_offset(timeline, self.geometry, t, active_index)
        cue_states = tuple(
            build_cue_visual_state(
                index,
                cue,
                timeline.natural_position(index),
                offset,
                t,
                self.geometry,
            )
            for index, cue in enumerate(timeline)
        )
        return FrameState(
            time_seconds=t,
            active_index=active_index,
            scroll_offset=offset,
            cues=cue_states,
            visualizer=build_visualizer_frame(self.volume_buffer, t, self.geometry),
            subtitle=subtitle_overlay(
                self.subtitle_cues,
                t,
                self.render_config.subtitle_transition_seconds,
            ),
        )

    def frame_time(self, frame: int) -> float:
        return frame / self.frame_rate

    def evaluate_frame(self, frame: int) -> FrameState:
        """Computes the visual state of video frame number ``frame``."""
        return self.evaluate(self.frame_time(frame))

    def frame_count(self, duration_seconds: float) -> int:
        """Number of frames needed to cover ``duration_seconds``."""
        if duration_seconds <= 0.0:
            return 0
        return math.ceil(duration_seconds * self.frame_rate)

    def iter_frames(self, start_frame: int, end_frame: int) -> Iterator[FrameState]:
        """Yields frame states for ``start_frame`` up to, excluding, ``end_frame``."""
        for frame in range(start_frame, end_frame):
            yield self.evaluate_frame(frame)
