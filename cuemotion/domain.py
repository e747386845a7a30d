"""Domain data structures for timed text cues."""

from typing import NamedTuple


class CueEntry(NamedTuple):
    """A lyric or subtitle line shown between start/end timestamps in seconds."""

    start: float
    end: float
    text: str


class ProcessedCue(NamedTuple):
    """A cue whose text has been wrapped for display."""

    start: float
    end: float
    text: str
    line_count: int

    @property
    def is_valid(self) -> bool:
        """Whether the cue has a positive duration and may become active."""
        return self.end > self.start
