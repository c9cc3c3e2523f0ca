"""Logging filter for redacting credentials from log messages."""

import logging
import re
from typing import Pattern

REDACTED = "***REDACTED***"


class SensitiveDataFilter(logging.Filter):
    """Filter to redact sensitive data from log messages.

    Redacts:
    - Google API keys (``AIza...``) and ``GOOGLE_API_KEY=`` assignments
    - The service API key in ``X-API-Key`` headers or ``API_KEY=`` assignments
    - Authorization headers and bearer tokens
    - ``key=...`` query parameters appended to Google API URLs
    """

    def __init__(self):
        super().__init__()

        # Order matters - header patterns must run before the generic ones
        self.patterns: list[tuple[Pattern, str]] = [
            (
                re.compile(r"(Authorization):\s+(Bearer\s+)?([^\s,]+)", re.IGNORECASE),
                rf"\1: {REDACTED}",
            ),
            (
                re.compile(r"(X-API-Key|x-goog-api-key):\s*([^\s,]+)", re.IGNORECASE),
                rf"\1: {REDACTED}",
            ),
            (
                re.compile(r"(GOOGLE_API_KEY|GEMINI_API_KEY|API_KEY)=([^\s,\)]+)", re.IGNORECASE),
                rf"\1={REDACTED}",
            ),
            # Query-string keys on Google endpoints (?key=...)
            (
                re.compile(r"([?&]key=)([^\s&]+)", re.IGNORECASE),
                rf"\1{REDACTED}",
            ),
            (
                re.compile(
                    r"(api[_-]?key|apikey|token|secret|password)['\"]?\s*[:=]\s*['\"]?"
                    r"([A-Za-z0-9_\-\.]{16,})",
                    re.IGNORECASE,
                ),
                rf"\1={REDACTED}",
            ),
            (
                re.compile(r"\bBearer\s+([A-Za-z0-9_\-\.=]+)", re.IGNORECASE),
                f"Bearer {REDACTED}",
            ),
            (
                re.compile(r"\bAIza[A-Za-z0-9_\-]{15,}\b"),
                REDACTED,
            ),
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact the record in place and always let it through."""
        if record.msg:
            record.msg = self.redact(str(record.msg))

        # Args used in % formatting
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)

        return True

    def _redact_value(self, value):
        # Numbers stay numbers so %d formatting keeps working
        if isinstance(value, str):
            return self.redact(value)
        return value

    def redact(self, text: str) -> str:
        """Apply redaction patterns to text.

        Args:
            text: Text to redact

        Returns:
            Text with sensitive data redacted
        """
        for pattern, replacement in self.patterns:
            text = pattern.sub(replacement, text)
        return text
