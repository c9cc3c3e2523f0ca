"""SRT subtitle entry model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SRTEntry:
    """A single subtitle entry.

    Timestamps are kept as ``HH:MM:SS,mmm`` text exactly as received; only
    :mod:`app.services.time_codec` interprets them. Entries are immutable, so
    every pipeline stage builds new ones instead of editing its input.
    """

    index: int
    start_time: str
    end_time: str
    text: str

    def __repr__(self) -> str:
        return f"SRTEntry(index={self.index}, time={self.start_time} --> {self.end_time})"
