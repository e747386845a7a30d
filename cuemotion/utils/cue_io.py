"""Loading of cue lists and volume levels handed to the engine.

Cues are read from JSON (``[{"start": 0.0, "end": 2.0, "text": "..."}]``) or
from SubRip / WebVTT files. Volume levels are read from JSON, either as a bare
list of per-second levels, as ``{"levels": [...]}``, or as an already padded
``{"samples": [...]}`` buffer.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from cuemotion.domain import CueEntry
from cuemotion.engine.visualizer import VolumeSampleBuffer
from cuemotion.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

SUBTITLE_SUFFIXES = (".srt", ".vtt")
_TIMESTAMP_PATTERN = re.compile(
    r"(?:(?P<hours>\d+):)?(?P<minutes>\d{1,2}):(?P<seconds>\d{1,2})[,.](?P<millis>\d{1,3})"
)
_ARROW = "-->"


class CueFormatError(ValueError):
    """Raised when a cue or volume file cannot be interpreted."""


def parse_timestamp(value: str) -> float:
    """Converts ``HH:MM:SS,mmm`` / ``MM:SS.mmm`` into seconds."""
    match = _TIMESTAMP_PATTERN.fullmatch(value.strip())
    if match is None:
        raise CueFormatError(f"Invalid timestamp: {value!r}")
    hours = int(match.group("hours") or 0)
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds"))
    millis = int(match.group("millis").ljust(3, "0"))
    return hours * 3600 + minutes * 60 + seconds + millis / 1000.0


def parse_cue_records(records: Iterable[Any]) -> list[CueEntry]:
    """Converts ``{"start", "end", "text"}`` mappings into cues.

    Raises:
        CueFormatError: If a record is not a mapping or misses a field.
    """
    cues: list[CueEntry] = []
    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise CueFormatError(f"Cue #{position} is not an object: {record!r}")
        try:
            cue = CueEntry(
                start=float(record["start"]),
                end=float(record["end"]),
                text=str(record["text"]),
            )
        except (KeyError, TypeError, ValueError) as err:
            raise CueFormatError(f"Invalid cue #{position}: {record!r}") from err
        cues.append(cue)
        logger.debug("Parsed cue: Start %s, End %s, Text %s", cue.start, cue.end, cue.text)
    return cues


def parse_subtitle_text(content: str) -> list[CueEntry]:
    """Parses SubRip or WebVTT content into cues.

    Blocks without a timing line (the ``WEBVTT`` header, ``NOTE`` blocks) are
    skipped; blocks with a malformed timing line are logged and skipped.
    """
    cues: list[CueEntry] = []
    blocks = re.split(r"\r?\n\s*\r?\n", content.strip().lstrip("\ufeff"))
    for block in blocks:
        lines = [line.rstrip() for line in block.splitlines()]
        timing_index = next(
            (index for index, line in enumerate(lines) if _ARROW in line), None
        )
        if timing_index is None:
            continue
        start_text, _, end_text = lines[timing_index].partition(_ARROW)
        try:
            start = parse_timestamp(start_text)
            # WebVTT cue settings follow the end timestamp.
            end = parse_timestamp(end_text.split()[0] if end_text.split() else "")
        except CueFormatError:
            logger.error("Invalid subtitle timing line: %s", lines[timing_index])
            continue
        text = "\n".join(line.strip() for line in lines[timing_index + 1 :] if line.strip())
        cues.append(CueEntry(start=start, end=end, text=text))
        logger.debug("Parsed subtitle: Start %s, End %s, Text %s", start, end, text)
    return cues


def load_cues(file_path: str | Path) -> list[CueEntry]:
    """Loads cues from a JSON, SRT or VTT file.

    Raises:
        CueFormatError: If the file content is not a valid cue list.
        OSError: If the file cannot be read.
    """
    path = Path(file_path)
    logger.info("Loading cues from %s", path)
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() in SUBTITLE_SUFFIXES:
        cues = parse_subtitle_text(content)
    else:
        try:
            payload = json.loads(content)
        except json.JSONDecodeError as err:
            raise CueFormatError(f"{path} is not valid JSON: {err}") from err
        if isinstance(payload, Mapping):
            payload = payload.get("lyrics", payload.get("cues"))
        if not isinstance(payload, list):
            raise CueFormatError(f"{path} does not contain a list of cues.")
        cues = parse_cue_records(payload)
    logger.info("Loaded %s cues from %s", len(cues), path)
    return cues


def load_volume_buffer(file_path: str | Path) -> VolumeSampleBuffer:
    """Loads per-second volume levels into a padded sample buffer.

    Raises:
        CueFormatError: If the file does not hold a list of numbers.
        OSError: If the file cannot be read.
    """
    path = Path(file_path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as err:
        raise CueFormatError(f"{path} is not valid JSON: {err}") from err

    padded = False
    if isinstance(payload, Mapping):
        if "samples" in payload:
            payload, padded = payload["samples"], True
        else:
            payload = payload.get("levels")
    if not isinstance(payload, list):
        raise CueFormatError(f"{path} does not contain a list of volume levels.")
    try:
        values = [float(value) for value in payload]
    except (TypeError, ValueError) as err:
        raise CueFormatError(f"{path} contains a non-numeric volume level.") from err

    buffer = VolumeSampleBuffer(values) if padded else VolumeSampleBuffer.from_levels(values)
    logger.info("Loaded %s seconds of volume levels from %s", buffer.data_length, path)
    return buffer
