"""Balanced two-line wrapping for overlong cue text."""

from __future__ import annotations

LINE_BREAK = "\n"
MAX_SEARCH_RADIUS = 10


def _wrapping_enabled(threshold: int | None) -> bool:
    return threshold is not None and threshold > 0


def _find_break_index(text: str) -> int:
    """Returns the index of the space closest to the middle, or the middle.

    Spaces before the middle are scanned first, so a space exactly as far
    before the middle as another is after it wins the tie.
    """
    middle = len(text) // 2
    radius = min(MAX_SEARCH_RADIUS, len(text) // 4)

    best_index = middle
    best_distance = len(text)
    for index in range(max(0, middle - radius), middle):
        if text[index] == " " and middle - index < best_distance:
            best_distance = middle - index
            best_index = index
    for index in range(middle, min(len(text) - 1, middle + radius) + 1):
        if text[index] == " " and index - middle < best_distance:
            best_distance = index - middle
            best_index = index
    return best_index


def split_text_into_lines(text: str, threshold: int | None) -> list[str]:
    """Splits ``text`` into at most two balanced lines.

    Args:
        text: Cue text.
        threshold: Maximum characters kept on one line. ``None`` or a
            non-positive value disables wrapping.

    Returns:
        ``[text]`` when no wrap is needed, otherwise the two stripped halves.
        Line breaks already present in wrapped text are folded into spaces.
    """
    if not _wrapping_enabled(threshold) or len(text) <= threshold:
        return [text]

    text = " ".join(line.strip() for line in text.splitlines() if line.strip())
    break_index = _find_break_index(text)
    return [text[:break_index].strip(), text[break_index:].strip()]


def wrap_text(text: str, threshold: int | None) -> str:
    """Returns ``text`` with a line break inserted when it exceeds ``threshold``."""
    return LINE_BREAK.join(split_text_into_lines(text, threshold))


def count_lines(text: str) -> int:
    """Counts display lines, including breaks present in the source text."""
    if not text:
        return 1
    return text.count(LINE_BREAK) + 1
