"""Preprocessed, read-only cue list with memoized layout offsets."""

from __future__ import annotations

import logging
import math
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator, Sequence
from itertools import accumulate

from cuemotion.domain import CueEntry, ProcessedCue
from cuemotion.engine.geometry import RenderGeometry
from cuemotion.engine.line_wrap import count_lines, wrap_text
from cuemotion.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


def process_cue(cue: CueEntry, threshold: int | None) -> ProcessedCue:
    """Wraps the text of ``cue`` when it exceeds ``threshold``."""
    text = str(cue.text)
    if threshold is not None and threshold > 0 and len(text) > threshold:
        text = wrap_text(text, threshold)
    return ProcessedCue(
        start=float(cue.start),
        end=float(cue.end),
        text=text,
        line_count=count_lines(text),
    )


def _report_data_quality(cues: Sequence[ProcessedCue]) -> None:
    """Logs cues that the resolver will skip or order-dependently resolve."""
    for index, cue in enumerate(cues):
        if not (math.isfinite(cue.start) and math.isfinite(cue.end)):
            logger.warning(
                "Cue %s has non-finite bounds (%s, %s); it will never be active.",
                index,
                cue.start,
                cue.end,
            )
        elif not cue.is_valid:
            logger.warning(
                "Cue %s has non-positive duration (%s -> %s); it will never be active.",
                index,
                cue.start,
                cue.end,
            )
        if index and cue.start < cues[index - 1].end and cues[index - 1].is_valid:
            logger.warning(
                "Cue %s starts at %s before cue %s ends at %s; "
                "the earlier cue wins while they overlap.",
                index,
                cue.start,
                index - 1,
                cues[index - 1].end,
            )


class CueTimeline(Sequence[ProcessedCue]):
    """Ordered cues plus the extra vertical margin reserved by multi-line cues.

    The timeline keeps the caller's order. Cues are expected to be
    chronological and non-overlapping; violations are logged, not repaired.
    """

    def __init__(
        self,
        cues: Iterable[ProcessedCue],
        extra_line_margin: float,
        row_pitch: float,
    ) -> None:
        self._cues: tuple[ProcessedCue, ...] = tuple(cues)
        self._extra_line_margin = float(extra_line_margin)
        self._row_pitch = float(row_pitch)
        # _extra_margins[i] is the margin added by all cues before i.
        self._extra_margins: tuple[float, ...] = tuple(
            accumulate(
                ((cue.line_count - 1) * self._extra_line_margin for cue in self._cues),
                initial=0.0,
            )
        )
        # Cues that can become active, in timeline order.
        self._valid_indices: tuple[int, ...] = tuple(
            index for index, cue in enumerate(self._cues) if cue.is_valid
        )

    @classmethod
    def build(
        cls,
        cues: Iterable[CueEntry],
        threshold: int | None,
        geometry: RenderGeometry,
    ) -> CueTimeline:
        """Wraps long cue text and memoizes layout offsets for ``geometry``.

        Args:
            cues: Raw cues in display order.
            threshold: Line-wrap threshold in characters; ``None`` disables it.
            geometry: Scaled layout constants.

        Returns:
            The read-only timeline.
        """
        processed = [process_cue(CueEntry(*cue), threshold) for cue in cues]
        _report_data_quality(processed)
        logger.debug(
            "Built cue timeline with %s cues (%s wrapped).",
            len(processed),
            sum(1 for cue in processed if cue.line_count > 1),
        )
        return cls(
            processed,
            extra_line_margin=geometry.extra_line_margin,
            row_pitch=geometry.row_pitch,
        )

    def __len__(self) -> int:
        return len(self._cues)

    def __getitem__(self, index):  # type: ignore[override]
        return self._cues[index]

    def __iter__(self) -> Iterator[ProcessedCue]:
        return iter(self._cues)

    def line_count(self, index: int) -> int:
        return self._cues[index].line_count

    def extra_margin(self, index: int) -> float:
        """Extra margin contributed by the multi-line cues before ``index``."""
        return self._extra_margins[index]

    def natural_position(self, index: int) -> float:
        """Unscrolled vertical position of cue ``index`` in the list."""
        return index * self._row_pitch + self._extra_margins[index]

    @property
    def valid_indices(self) -> tuple[int, ...]:
        return self._valid_indices

    def previous_valid(self, index: int) -> int | None:
        """Nearest cue before ``index`` that can become active."""
        position = bisect_left(self._valid_indices, index)
        return self._valid_indices[position - 1] if position else None

    def next_valid(self, index: int) -> int | None:
        """Nearest cue after ``index`` that can become active."""
        position = bisect_right(self._valid_indices, index)
        if position < len(self._valid_indices):
            return self._valid_indices[position]
        return None
