"""Audio-to-script alignment through Google GenAI (Gemini).

The model hears the audio, reads the reference script and returns timed
fragments of that script. Its reply is decoded into raw ``SRTEntry`` values;
nothing here validates timestamps, that is the repair step's job.
"""

import json
import re

from google import genai
from google.genai import types
from pydantic import ValidationError

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.models.srt import SRTEntry
from app.schemas.subtitles import AlignedEntry
from app.services.pipeline import NoAlignmentDataError
from app.services.srt_parser import parse_raw_srt

logger = get_logger(__name__)

AUDIO_MIME_TYPES = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
    ".webm": "audio/webm",
}

_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?|\n?```\s*$")


class AlignmentError(Exception):
    """Raised when the alignment model call fails or its reply cannot be decoded."""

    pass


def build_alignment_prompt(script: str) -> str:
    """Return the instruction text sent alongside the audio."""
    return f"""You are an expert audio-to-text alignment tool. Your task is to time \
every line of the provided script against the provided audio.

Follow these instructions precisely:
1. Analyze the audio to determine the exact start and end times for each line of the script.
2. The text you return MUST EXACTLY MATCH the provided script. Do not add, remove, or \
change any words or punctuation.
3. Return a JSON array only. Each element is an object with the keys "index" (integer, \
starting at 1), "startTime" and "endTime" (strings formatted HH:MM:SS,mmm) and "text".
4. Do not include any explanations, comments, or text before or after the JSON.

Here is the script you must use for the subtitles:
--- SCRIPT START ---
{script}
--- SCRIPT END ---"""


def decode_alignment_response(content: str) -> list[SRTEntry]:
    """Decode the model's reply into raw entries.

    JSON arrays are the expected shape; SRT-like text (anything containing
    ``-->``) is accepted as a fallback.

    Args:
        content: Reply text from the model

    Returns:
        Raw entries in reply order

    Raises:
        NoAlignmentDataError: If the reply decodes to something other than a
            non-empty array of entries
        AlignmentError: If the reply cannot be decoded at all
    """
    stripped = _CODE_FENCE_RE.sub("", content.strip()).strip()

    try:
        payload = json.loads(stripped)
    except json.JSONDecodeError as e:
        if "-->" in stripped:
            logger.info("Alignment reply is SRT text, parsing leniently")
            entries = parse_raw_srt(stripped)
            if not entries:
                raise NoAlignmentDataError()
            return entries
        raise AlignmentError(f"Alignment reply is not valid JSON: {e}")

    if not isinstance(payload, list) or not payload:
        raise NoAlignmentDataError()

    entries = []
    for position, item in enumerate(payload, start=1):
        try:
            entries.append(AlignedEntry.model_validate(item).to_entry())
        except ValidationError as e:
            logger.warning("Skipping undecodable alignment item %d: %s", position, e)

    if not entries:
        raise NoAlignmentDataError()

    return entries


async def align_script_to_audio(
    audio: bytes,
    script: str,
    mime_type: str = "audio/mpeg",
    model: str | None = None,
    settings: Settings | None = None,
) -> list[SRTEntry]:
    """Ask the alignment model to time ``script`` against ``audio``.

    Args:
        audio: Raw audio file bytes
        script: Reference script text
        mime_type: MIME type of the audio
        model: Google GenAI model ID (default from settings)
        settings: Settings instance (optional, will use get_settings() if not provided)

    Returns:
        Raw entries as returned by the model

    Raises:
        AlignmentError: If the API request fails or the reply cannot be decoded
        NoAlignmentDataError: If the model returned no entries
        ValueError: If API key not configured
    """
    if settings is None:
        settings = get_settings()

    if not settings.google_api_key:
        raise ValueError(
            "GOOGLE_API_KEY not found in environment. "
            "Please set it in .env file or environment variables."
        )

    model = model or settings.alignment_model
    logger.info(
        "Requesting alignment: model=%s, audio=%d bytes (%s), script=%d chars",
        model,
        len(audio),
        mime_type,
        len(script),
    )

    try:
        client = genai.Client(api_key=settings.google_api_key)

        response = await client.aio.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=audio, mime_type=mime_type),
                build_alignment_prompt(script),
            ],
            config=types.GenerateContentConfig(
                temperature=0.0,
                response_mime_type="application/json",
            ),
        )

        if (
            not response.candidates
            or not response.candidates[0].content
            or not response.candidates[0].content.parts
        ):
            raise AlignmentError("Invalid response structure from API")

        reply_parts = [
            part.text
            for part in response.candidates[0].content.parts
            if part.text and not part.thought
        ]

        if not reply_parts:
            raise NoAlignmentDataError()

        entries = decode_alignment_response("".join(reply_parts))

    except (AlignmentError, NoAlignmentDataError):
        raise
    except Exception as e:
        raise AlignmentError(f"Error during alignment: {str(e)}")

    logger.info("Alignment returned %d raw entries", len(entries))
    return entries
