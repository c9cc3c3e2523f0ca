"""Re-segmentation of over-length subtitle entries.

Entries longer than the character budget are split into several entries.
Split points are chosen by an ordered list of rules (clause punctuation,
balanced midpoint, last whitespace, hard cut) and each piece receives a share
of the original interval proportional to its length. A final forward pass
removes overlaps between neighbours and the sequence is re-indexed from 1.
"""

from dataclasses import dataclass
import math

from app.core.logging import get_logger
from app.models.srt import SRTEntry
from app.services.time_codec import format_timestamp, parse_timestamp

logger = get_logger(__name__)

CLAUSE_PUNCTUATION = frozenset(".?!,;:")


@dataclass
class _Cue:
    """Working interval in milliseconds; private to a single segmentation run."""

    start: int
    end: int
    text: str


def _after_clause_punctuation(remaining: str, window: str, max_chars: int) -> int | None:
    # Only punctuation followed by whitespace, so "3.5" or "e.g" stay intact
    for i in range(len(window) - 2, 0, -1):
        if window[i] in CLAUSE_PUNCTUATION and remaining[i + 1].isspace():
            return i + 1
    return None


def _balanced_midpoint(remaining: str, window: str, max_chars: int) -> int | None:
    if len(remaining) > 2 * max_chars:
        return None

    middle = len(remaining) // 2
    for i in range(middle, 0, -1):
        if remaining[i].isspace():
            return i
    for i in range(middle + 1, len(remaining)):
        if remaining[i].isspace():
            return i
    return None


def _last_whitespace(remaining: str, window: str, max_chars: int) -> int | None:
    for i in range(len(window) - 1, 0, -1):
        if window[i].isspace():
            return i
    return None


# Priority order decides line-break aesthetics; do not reorder
_SPLIT_RULES = (_after_clause_punctuation, _balanced_midpoint, _last_whitespace)


def _choose_split_point(remaining: str, max_chars: int) -> int:
    window = remaining[: max_chars + 1]
    for rule in _SPLIT_RULES:
        cut = rule(remaining, window, max_chars)
        if cut is not None and 0 < cut < len(window):
            return cut
    return max_chars


def split_text(text: str, max_chars: int) -> list[str]:
    """Split ``text`` into pieces of at most ``max_chars`` characters.

    Whitespace at each split point is dropped. A piece only reaches
    ``max_chars`` through a hard cut when the window holds no whitespace at all.
    """
    pieces = []
    remaining = text.strip()
    while remaining:
        if len(remaining) <= max_chars:
            pieces.append(remaining)
            break
        cut = _choose_split_point(remaining, max_chars)
        pieces.append(remaining[:cut].rstrip())
        remaining = remaining[cut:].lstrip()
    return pieces


def _apportion(start: int, end: int, text: str, pieces: list[str]) -> list[_Cue]:
    total = end - start
    cues = []
    cursor = start
    for n, piece in enumerate(pieces):
        if n == len(pieces) - 1:
            # Last piece takes the original end so rounding never drifts
            piece_end = end
        else:
            piece_end = cursor + math.floor(total * len(piece) / len(text) + 0.5)
        cues.append(_Cue(cursor, piece_end, piece))
        cursor = piece_end
    return cues


def _resolve_overlaps(cues: list[_Cue]) -> None:
    for i, cue in enumerate(cues):
        if cue.end <= cue.start:
            cue.end = cue.start + 1
        if i + 1 == len(cues):
            break

        following = cues[i + 1]
        if cue.end >= following.start:
            shrunk = max(following.start - 1, 0)
            if shrunk > cue.start:
                cue.end = shrunk
            else:
                # Shrinking would collapse this cue; move the next one instead
                cue.end = cue.start + 1
                following.start = cue.end + 1


def segment_entries(entries: list[SRTEntry], max_chars: int) -> list[SRTEntry]:
    """Split over-length entries, resolve overlaps and re-index from 1.

    Args:
        entries: Entries with repaired timestamps
        max_chars: Character budget per entry

    Returns:
        New list of entries satisfying the budget, with no overlaps and
        indices ``1..N``

    Raises:
        ValueError: If max_chars is smaller than 1
    """
    if max_chars < 1:
        raise ValueError(f"max_chars must be at least 1, got {max_chars}")

    cues: list[_Cue] = []
    split_count = 0

    for entry in entries:
        if not entry.text.strip():
            logger.debug("Dropping entry %s with blank text", entry.index)
            continue

        start = parse_timestamp(entry.start_time) or 0
        end = parse_timestamp(entry.end_time)
        if end is None:
            end = start

        if len(entry.text) <= max_chars:
            cues.append(_Cue(start, end, entry.text))
            continue

        pieces = split_text(entry.text, max_chars)
        cues.extend(_apportion(start, end, entry.text, pieces))
        split_count += 1
        logger.debug(
            "Entry %s (%d chars) split into %d pieces", entry.index, len(entry.text), len(pieces)
        )

    _resolve_overlaps(cues)

    logger.info(
        "Segmentation: %d entries in, %d out (%d split, max_chars=%d)",
        len(entries),
        len(cues),
        split_count,
        max_chars,
    )

    return [
        SRTEntry(index, format_timestamp(cue.start), format_timestamp(cue.end), cue.text)
        for index, cue in enumerate(cues, start=1)
    ]
