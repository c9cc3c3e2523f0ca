"""Audio alignment endpoint."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from app.api.v1.subtitles import render_subtitles
from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.schemas import SubtitleResponse
from app.services.alignment import AUDIO_MIME_TYPES, AlignmentError, align_script_to_audio
from app.services.pipeline import NoAlignmentDataError

router = APIRouter()
logger = get_logger(__name__)


@router.post(
    "",
    response_model=SubtitleResponse,
    status_code=status.HTTP_200_OK,
    summary="Align a script to audio",
    description=(
        "Sends the audio and reference script to the alignment model, then repairs, "
        "re-segments and serializes its output as SRT"
    ),
)
async def create_alignment(
    settings: Annotated[Settings, Depends(get_settings)],
    audio: UploadFile = File(..., description="Audio file the script is spoken in"),
    script: str = Form(..., min_length=1, description="Reference script text"),
    max_chars: int | None = Form(None, ge=1, description="Maximum characters per subtitle"),
):
    """Align a reference script to an audio file and return SRT subtitles.

    **Validation order:**
    1. Alignment model configured (503 if not)
    2. File format (400 if invalid)
    3. File size (413 if too large)

    Args:
        settings: Application settings
        audio: Uploaded audio file
        script: Reference script text
        max_chars: Character budget per subtitle (default from settings)

    Returns:
        SubtitleResponse with SRT content and entry count

    Raises:
        HTTPException: 400, 413, 502 (alignment failed or returned nothing),
            503 (not configured), 500 (unexpected)
    """
    if not settings.google_api_key:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Alignment model is not configured (GOOGLE_API_KEY missing).",
        )

    file_ext = Path(audio.filename or "").suffix.lower()
    if file_ext not in settings.allowed_audio_formats:
        logger.warning(
            "Invalid audio format: %s (allowed: %s)", file_ext, settings.allowed_audio_formats
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Invalid audio format '{file_ext}'. "
                f"Allowed formats: {', '.join(sorted(settings.allowed_audio_formats))}"
            ),
        )

    audio_bytes = await audio.read()
    if len(audio_bytes) > settings.max_audio_file_size:
        logger.warning(
            "File too large: %d bytes (max: %d bytes)",
            len(audio_bytes),
            settings.max_audio_file_size,
        )
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=(
                f"File size ({len(audio_bytes):,} bytes) exceeds maximum allowed "
                f"({settings.max_audio_file_size:,} bytes)"
            ),
        )

    mime_type = AUDIO_MIME_TYPES.get(file_ext) or audio.content_type or "audio/mpeg"
    max_chars = max_chars or settings.default_max_chars

    try:
        raw_entries = await align_script_to_audio(
            audio_bytes, script, mime_type=mime_type, settings=settings
        )
        return render_subtitles(raw_entries, max_chars)

    except NoAlignmentDataError as e:
        logger.warning("Alignment produced no data for %s", audio.filename)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )
    except AlignmentError as e:
        logger.error("Alignment failed for %s: %s", audio.filename, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Alignment service error: {str(e)}",
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected error during alignment")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Unexpected error: {str(e)}",
        )
