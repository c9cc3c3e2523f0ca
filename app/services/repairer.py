"""Timestamp repair for raw alignment output.

The alignment model returns entries whose timestamps may be missing, garbled
or out of order. ``repair_timestamps`` walks the entries once, left to right,
and replaces every unusable start or end with a value derived from the
already-repaired previous entry, the next entry's start, or an estimate based
on how long the text takes to read.
"""

import math

from app.core.logging import get_logger
from app.models.srt import SRTEntry
from app.services.time_codec import format_timestamp, parse_timestamp

logger = get_logger(__name__)

READING_SPEED_CPS = 15
MIN_ESTIMATED_DURATION_MS = 1000


def estimate_duration_ms(text: str) -> int:
    """Estimate how long ``text`` stays on screen at the reading-speed constant."""
    reading_ms = math.floor(len(text.strip()) * 1000 / READING_SPEED_CPS + 0.5)
    return max(MIN_ESTIMATED_DURATION_MS, reading_ms)


def repair_timestamps(entries: list[SRTEntry]) -> list[SRTEntry]:
    """Return a copy of ``entries`` in which every entry has a causal interval.

    Rules, applied per entry in order:

    1. A start that is unparsable, or does not move past the previous repaired
       start, becomes the previous repaired end + 1ms (0 for the first entry).
    2. An end that is unparsable or not after the start is anchored to the
       next entry's original start - 1ms when that start is valid and leaves a
       positive duration; otherwise it is the start plus the estimated reading
       time of the text.

    Earlier entries are never revisited, so a run of broken entries turns into
    back-to-back estimated slots.

    Args:
        entries: Raw entries as decoded from the alignment response

    Returns:
        New list of entries with well-formed, strictly positive intervals
    """
    repaired: list[SRTEntry] = []
    prev_start: int | None = None
    prev_end: int | None = None
    fixed_count = 0

    for position, entry in enumerate(entries):
        start = parse_timestamp(entry.start_time)
        if start is None or (prev_start is not None and start <= prev_start):
            new_start = 0 if prev_end is None else prev_end + 1
            logger.debug(
                "Entry %d: start %r replaced with %s",
                position + 1,
                entry.start_time,
                format_timestamp(new_start),
            )
            start = new_start
            fixed_count += 1

        end = parse_timestamp(entry.end_time)
        if end is None or end <= start:
            next_entry = entries[position + 1] if position + 1 < len(entries) else None
            new_end = _fallback_end(start, entry.text, next_entry)
            logger.debug(
                "Entry %d: end %r replaced with %s",
                position + 1,
                entry.end_time,
                format_timestamp(new_end),
            )
            end = new_end
            fixed_count += 1

        repaired.append(
            SRTEntry(entry.index, format_timestamp(start), format_timestamp(end), entry.text)
        )
        prev_start, prev_end = start, end

    logger.info("Timestamp repair: %d fields fixed across %d entries", fixed_count, len(entries))
    return repaired


def _fallback_end(start: int, text: str, next_entry: SRTEntry | None) -> int:
    if next_entry is not None:
        next_start = parse_timestamp(next_entry.start_time)
        if next_start is not None and next_start - 1 > start:
            return next_start - 1
    return start + estimate_duration_ms(text)
