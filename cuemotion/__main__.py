"""
Cue Animation Engine CLI

Evaluates the visual state of a lyric or subtitle video at chosen instants and
prints it, dumps it as JSON, or saves it to CSV.

Usage:
    cuemotion --cues lyrics.json --time 12.5
    cuemotion --cues lyrics.srt --volume levels.json --frames 0:300 --output frames.csv
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv
from halo import Halo

from cuemotion.config import FRAME_RATES, RESOLUTIONS, RenderConfig, reload_settings
from cuemotion.engine import CueAnimationEngine, FrameState, VolumeSampleBuffer
from cuemotion.utils import configure_logging, get_logger
from cuemotion.utils.cue_io import CueFormatError, load_cues, load_volume_buffer
from cuemotion.utils.frame_report import print_frame, save_frames_to_csv

logger: logging.Logger = get_logger("cuemotion")


def _parse_frame_range(value: str) -> tuple[int, int]:
    """Parses ``START:END`` into a half-open frame range."""
    start_text, separator, end_text = value.partition(":")
    try:
        if not separator:
            raise ValueError(value)
        start, end = int(start_text), int(end_text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(
            f"Invalid frame range {value!r}; expected START:END."
        ) from err
    if start < 0 or end <= start:
        raise argparse.ArgumentTypeError(
            f"Invalid frame range {value!r}; END must be greater than START >= 0."
        )
    return start, end


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cue animation engine")
    parser.add_argument("--cues", type=str, help="Cue file (.json, .srt or .vtt)")
    parser.add_argument("--volume", type=str, help="JSON file with per-second volume levels")
    parser.add_argument("--resolution", choices=tuple(RESOLUTIONS), help="Output resolution")
    parser.add_argument("--fps", type=int, choices=FRAME_RATES, help="Output frame rate")
    parser.add_argument(
        "--line-threshold",
        type=int,
        help="Wrap cues longer than this many characters (0 disables wrapping)",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--time", type=float, help="Playback time in seconds")
    target.add_argument(
        "--frames",
        type=_parse_frame_range,
        help="Half-open frame range START:END to evaluate",
    )
    parser.add_argument("--output", type=str, help="Save evaluated frames to this CSV file")
    parser.add_argument("--json", action="store_true", help="Print frame states as JSON lines")
    parser.add_argument("--log-level", type=str, help="Logging level (overrides LOG_LEVEL)")
    return parser


def _render_config(args: argparse.Namespace, defaults: RenderConfig) -> RenderConfig:
    overrides: dict[str, object] = {}
    if args.resolution:
        overrides["resolution"] = args.resolution
    if args.fps:
        overrides["frame_rate"] = args.fps
    if args.line_threshold is not None:
        overrides["line_threshold"] = args.line_threshold if args.line_threshold > 0 else None
    return dataclasses.replace(defaults, **overrides)


def _output_path(output: str, output_folder: Path) -> Path:
    """Places bare file names inside the configured output folder."""
    path = Path(output)
    if not path.parent.parts:
        return output_folder / path
    return path


def _emit(frames: list[FrameState], args: argparse.Namespace, output_folder: Path) -> None:
    if args.output:
        save_frames_to_csv(frames, _output_path(args.output, output_folder))
    if args.json:
        for frame in frames:
            print(json.dumps(frame.to_dict()))
    elif len(frames) == 1:
        print_frame(frames[0])


def main() -> None:
    """
    Main function to handle the command line interface logic.
    """
    load_dotenv()
    settings = reload_settings()
    args = build_parser().parse_args()
    configure_logging(args.log_level)

    if not args.cues:
        logger.error("No cue file provided.")
        sys.exit(1)

    try:
        cues = load_cues(args.cues)
        volume_buffer: VolumeSampleBuffer | None = (
            load_volume_buffer(args.volume) if args.volume else None
        )
        engine = CueAnimationEngine(
            cues,
            render_config=_render_config(args, settings.render),
            volume_buffer=volume_buffer,
        )
    except (CueFormatError, OSError, ValueError) as err:
        logger.error("Unable to prepare the cue engine: %s", err)
        sys.exit(1)

    start_time = time.perf_counter()
    if args.frames:
        start_frame, end_frame = args.frames
        with Halo(
            text=f"Evaluating frames {start_frame}..{end_frame - 1}",
            spinner="dots",
            text_color="green",
        ):
            frames = list(engine.iter_frames(start_frame, end_frame))
    else:
        frames = [engine.evaluate(args.time if args.time is not None else 0.0)]
    logger.info(
        "Evaluated %s frame(s) in %.3f seconds",
        len(frames),
        time.perf_counter() - start_time,
    )

    try:
        _emit(frames, args, settings.output_folder)
    except OSError as err:
        logger.error("Failed to write frame output: %s", err, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
