"""Conversion between SRT timestamps (``HH:MM:SS,mmm``) and integer milliseconds."""

import math
import re

_TIMESTAMP_RE = re.compile(r"^(\d{2}):(\d{2}):(\d{2}),(\d{3})$")


def parse_timestamp(value) -> int | None:
    """Parse an SRT timestamp into milliseconds.

    Args:
        value: Timestamp text such as ``"00:01:02,345"``

    Returns:
        Offset in milliseconds, or None if ``value`` is not a well-formed timestamp
    """
    if not isinstance(value, str):
        return None

    match = _TIMESTAMP_RE.match(value.strip())
    if not match:
        return None

    hours, minutes, seconds, millis = (int(group) for group in match.groups())
    return hours * 3_600_000 + minutes * 60_000 + seconds * 1000 + millis


def format_timestamp(ms: float) -> str:
    """Format milliseconds as an SRT timestamp.

    Negative, NaN and infinite values render as ``00:00:00,000``.
    """
    if not math.isfinite(ms) or ms < 0:
        ms = 0
    ms = int(round(ms))

    hours, ms = divmod(ms, 3_600_000)
    minutes, ms = divmod(ms, 60_000)
    seconds, milliseconds = divmod(ms, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"
