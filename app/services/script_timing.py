"""Estimated subtitle timing from a script alone, without audio."""

import re

from app.models.srt import SRTEntry
from app.services.time_codec import format_timestamp

LONG_SENTENCE_WORD_THRESHOLD = 15
DURATION_PER_WORD_MS = 400
MIN_DURATION_MS = 2000
GAP_BETWEEN_SUBTITLES_MS = 200

_PHRASE_END_RE = re.compile(r"(?<=[.,!?])\s*")


def split_script(script: str) -> list[str]:
    """Split a script into subtitle-sized phrases.

    The script is cut after every ``.``, ``,``, ``!`` or ``?``; phrases longer
    than the word threshold are halved at the word midpoint.
    """
    phrases = [phrase.strip() for phrase in _PHRASE_END_RE.split(script)]
    phrases = [phrase for phrase in phrases if phrase]

    chunks = []
    for phrase in phrases:
        words = phrase.split()
        if len(words) > LONG_SENTENCE_WORD_THRESHOLD:
            middle = (len(words) + 1) // 2
            chunks.append(" ".join(words[:middle]))
            chunks.append(" ".join(words[middle:]))
        else:
            chunks.append(phrase)
    return chunks


def draft_entries_from_script(script: str) -> list[SRTEntry]:
    """Build back-to-back entries with durations estimated from word counts.

    Args:
        script: Reference script text

    Returns:
        Entries numbered from 1, each shown for ``max(2s, 0.4s per word)``
        with a 200ms pause before the next one
    """
    entries = []
    start = 0
    for index, chunk in enumerate(split_script(script), start=1):
        duration = max(MIN_DURATION_MS, len(chunk.split()) * DURATION_PER_WORD_MS)
        end = start + duration
        entries.append(SRTEntry(index, format_timestamp(start), format_timestamp(end), chunk))
        start = end + GAP_BETWEEN_SUBTITLES_MS
    return entries
