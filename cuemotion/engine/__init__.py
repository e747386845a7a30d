"""Deterministic per-frame cue animation engine."""

from .engine import CueAnimationEngine, FrameState
from .geometry import BaseGeometry, RenderGeometry, build_render_geometry
from .line_wrap import count_lines, split_text_into_lines, wrap_text
from .resolver import next_starting_index, previous_ending_index, resolve_active_index
from .scroll import resting_offset, scroll_offset
from .subtitle_overlay import SubtitleOverlay, subtitle_overlay
from .timeline import CueTimeline
from .visual_state import CueVisualState, build_cue_visual_state, cue_progress
from .visualizer import (
    VisualizerBar,
    VisualizerFrame,
    VolumeSampleBuffer,
    build_visualizer_frame,
)

__all__ = [
    "BaseGeometry",
    "CueAnimationEngine",
    "CueTimeline",
    "CueVisualState",
    "FrameState",
    "RenderGeometry",
    "SubtitleOverlay",
    "VisualizerBar",
    "VisualizerFrame",
    "VolumeSampleBuffer",
    "build_cue_visual_state",
    "build_render_geometry",
    "build_visualizer_frame",
    "count_lines",
    "cue_progress",
    "next_starting_index",
    "previous_ending_index",
    "resolve_active_index",
    "resting_offset",
    "scroll_offset",
    "split_text_into_lines",
    "subtitle_overlay",
    "wrap_text",
]
