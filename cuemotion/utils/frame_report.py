"""
Frame Report Utility Functions

This module turns evaluated frame states into human-readable and tabular
reports: a colored terminal table for one frame and a CSV file with one row
per cue per frame.

Functions:
    - frame_rows: Flattens frame states into report rows.
    - save_frames_to_csv: Saves frame rows to a CSV file.
    - print_frame: Prints one frame state as a colored table.
    - color_txt: Colorizes a string.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TypeAlias

from colored import attr, bg, fg
from halo import Halo

from cuemotion.engine.engine import FrameState
from cuemotion.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

CSV_HEADER = (
    "Time (s)",
    "Cue",
    "Active",
    "Scroll",
    "Position",
    "Progress",
    "Opacity",
    "Scale",
    "Font size",
    "Font weight",
    "Color",
    "Text",
)

ReportRow: TypeAlias = tuple[float, int, bool, float, float, float, float, float, float, float, str, str]


def frame_rows(frames: Iterable[FrameState]) -> list[ReportRow]:
    """Flattens frame states into one row per cue per frame."""
    rows: list[ReportRow] = []
    for frame in frames:
        for cue in frame.cues:
            rows.append(
                (
                    round(frame.time_seconds, 4),
                    cue.index,
                    cue.index == frame.active_index,
                    round(frame.scroll_offset, 3),
                    round(cue.position, 3),
                    round(cue.progress, 4),
                    round(cue.opacity, 4),
                    round(cue.scale, 4),
                    round(cue.font_size, 3),
                    round(cue.font_weight, 3),
                    cue.css_color,
                    cue.text.replace("\n", " / "),
                )
            )
    return rows


def save_frames_to_csv(frames: Iterable[FrameState], file_path: str | Path) -> Path:
    """
    Saves evaluated frames to a CSV file.

    Arguments:
        frames (Iterable[FrameState]): The frame states to be saved.
        file_path (str | Path): Destination file. Parent folders are created.

    Returns:
        Path: The path to the saved CSV file.
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Starting to save frames to CSV.")

    with Halo(text=f"Saving frames to {path}", spinner="dots", text_color="green"):
        rows = frame_rows(frames)
        with open(path, mode="w", newline="", encoding="utf-8") as file:
            writer = csv.writer(file)
            writer.writerow(CSV_HEADER)
            writer.writerows(rows)

    logger.info("%s rows successfully saved to %s", len(rows), path)
    return path


def color_txt(string: str, fg_color: str, bg_color: str, padding: int = 0) -> str:
    """
    Colorizes a string.

    Arguments:
        string (str): String to be colorized.
        fg_color (str): Foreground color.
        bg_color (str): Background color.
        padding (int): Minimum width, filled with spaces.

    Returns:
        str: Colorized string.
    """
    if padding:
        string = string.ljust(padding)

    return f"{fg(fg_color)}{bg(bg_color)}{string}{attr('reset')}"


def print_frame(frame: FrameState) -> None:
    """
    Prints one frame state as a table, highlighting the active cue.

    Arguments:
        frame (FrameState): Evaluated frame.
    """
    active = "-" if frame.active_index is None else str(frame.active_index)
    print(
        color_txt(f" t={frame.time_seconds:.3f}s ", "black", "green")
        + color_txt(f" active={active} ", "black", "yellow")
        + color_txt(f" scroll={frame.scroll_offset:.1f}px ", "black", "blue")
    )

    if not frame.cues:
        print("(no cues)")
    else:
        text_width = max(len(cue.text.replace("\n", " / ")) for cue in frame.cues)
        for cue in frame.cues:
            text = cue.text.replace("\n", " / ").ljust(text_width)
            row = (
                f"{cue.index:>4} {text} "
                f"opacity={cue.opacity:.2f} scale={cue.scale:.3f} "
                f"size={cue.font_size:.1f} weight={cue.font_weight:.0f} "
                f"{cue.css_color}"
            )
            if cue.index == frame.active_index:
                print(color_txt(row, "black", "green"))
            else:
                print(row)

    if frame.subtitle is not None:
        print(f"subtitle: {frame.subtitle.text!r} opacity={frame.subtitle.opacity:.2f}")

    bars = frame.visualizer.bars
    if bars:
        print(
            f"visualizer: seconds {bars[0].second}..{bars[-1].second}, "
            f"center {frame.visualizer.center_second}, "
            f"shift {frame.visualizer.shift:.2f}px"
        )
