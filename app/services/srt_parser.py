"""SRT parsing and serialization.

``parse_srt`` reads well-formed SRT files through pysubs2. ``parse_raw_srt``
reads the looser SRT-like text an alignment model may return, keeping broken
timestamps verbatim for the repair step. ``serialize_srt`` renders the final
entries in SRT wire format.
"""

import re

import pysubs2

from app.core.logging import get_logger
from app.models.srt import SRTEntry
from app.services.time_codec import format_timestamp

logger = get_logger(__name__)

_BLOCK_SEPARATOR_RE = re.compile(r"\n[ \t]*\n")


def parse_srt(content: str) -> list[SRTEntry]:
    """Parse SRT content into a list of subtitle entries.

    Args:
        content: Raw SRT file content as string

    Returns:
        List of SRTEntry objects with index, timestamps, and text

    Raises:
        ValueError: If SRT format is invalid
    """
    if not content or not content.strip():
        raise ValueError("SRT content is empty")

    try:
        subs = pysubs2.SSAFile.from_string(content, format_="srt")
    except Exception as e:
        raise ValueError(f"Failed to parse SRT: {e}")

    return [
        SRTEntry(i, format_timestamp(line.start), format_timestamp(line.end), line.plaintext)
        for i, line in enumerate(subs, start=1)
    ]


def parse_raw_srt(content: str) -> list[SRTEntry]:
    """Parse SRT-like text without validating timestamps.

    Blocks are separated by blank lines. A block's timing line is the first
    line containing ``-->``; the text is everything after it. Blocks without a
    timing line keep their text and get empty timestamps. Missing or
    non-numeric indices become 0.

    Args:
        content: SRT-like text

    Returns:
        Entries in block order, timestamps exactly as written
    """
    normalized = content.replace("\r\n", "\n").replace("\r", "\n").strip()
    if not normalized:
        return []

    entries = []
    for block in _BLOCK_SEPARATOR_RE.split(normalized):
        lines = [line.strip() for line in block.strip().split("\n")]

        timing_at = next((n for n, line in enumerate(lines) if "-->" in line), None)
        if timing_at is None:
            start_time = end_time = ""
            has_index = lines[0].isdigit()
            header, body = (lines[:1], lines[1:]) if has_index else ([], lines)
        else:
            start_time, _, end_time = lines[timing_at].partition("-->")
            start_time, end_time = start_time.strip(), end_time.strip()
            header, body = lines[:timing_at], lines[timing_at + 1 :]

        index = int(header[0]) if header and header[0].isdigit() else 0
        text = "\n".join(line for line in body if line)
        if not text:
            continue
        entries.append(SRTEntry(index, start_time, end_time, text))

    return entries


def serialize_srt(entries: list[SRTEntry]) -> str:
    """Render entries as SRT blocks separated by a blank line.

    Entries with a falsy index, an empty timestamp or blank text are skipped.

    Args:
        entries: Final, re-indexed entries

    Returns:
        SRT formatted string
    """
    blocks = []
    for entry in entries:
        if not entry.index or not entry.start_time or not entry.end_time or not entry.text.strip():
            logger.debug("Skipping incomplete entry during serialization: %r", entry)
            continue
        blocks.append(f"{entry.index}\n{entry.start_time} --> {entry.end_time}\n{entry.text}")

    return "\n\n".join(blocks)
