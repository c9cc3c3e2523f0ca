"""Subtitle post-processing pipeline: repair, segment, serialize."""

from app.core.logging import get_logger
from app.models.srt import SRTEntry
from app.services.repairer import repair_timestamps
from app.services.segmenter import segment_entries
from app.services.srt_parser import serialize_srt

logger = get_logger(__name__)


class NoAlignmentDataError(Exception):
    """Raised when there are no entries to build subtitles from."""

    def __init__(self, message: str = "No alignment data produced"):
        super().__init__(message)


def build_subtitle_entries(entries: list[SRTEntry], max_chars: int) -> list[SRTEntry]:
    """Run repair and segmentation over ``entries``.

    The input list is copied first; callers keep ownership of theirs.

    Raises:
        NoAlignmentDataError: If entries is empty
        ValueError: If max_chars is smaller than 1
    """
    if not entries:
        raise NoAlignmentDataError()

    working = list(entries)
    repaired = repair_timestamps(working)
    return segment_entries(repaired, max_chars)


def build_subtitles(entries: list[SRTEntry], max_chars: int) -> str:
    """Turn raw aligned entries into an SRT document.

    Args:
        entries: Raw entries, timestamps possibly malformed or overlapping
        max_chars: Character budget per subtitle entry

    Returns:
        SRT formatted string

    Raises:
        NoAlignmentDataError: If entries is empty
        ValueError: If max_chars is smaller than 1
    """
    final_entries = build_subtitle_entries(entries, max_chars)
    logger.info("Built %d subtitle entries from %d raw entries", len(final_entries), len(entries))
    return serialize_srt(final_entries)
