"""Subtitle building endpoints that do not need audio."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.models.srt import SRTEntry
from app.schemas import DraftRequest, ResegmentRequest, SubtitleBuildRequest, SubtitleResponse
from app.services.pipeline import NoAlignmentDataError, build_subtitle_entries
from app.services.script_timing import draft_entries_from_script
from app.services.srt_parser import parse_srt, serialize_srt

router = APIRouter()
logger = get_logger(__name__)


def render_subtitles(entries: list[SRTEntry], max_chars: int) -> SubtitleResponse:
    """Run the pipeline and wrap the result in a response model."""
    final_entries = build_subtitle_entries(entries, max_chars)
    return SubtitleResponse(
        srt_content=serialize_srt(final_entries), entry_count=len(final_entries)
    )


@router.post(
    "",
    response_model=SubtitleResponse,
    status_code=status.HTTP_200_OK,
    summary="Build SRT from aligned entries",
    description=(
        "Repairs timestamps, splits entries over the character budget and "
        "serializes the result as SRT"
    ),
)
async def build_from_entries(
    request: SubtitleBuildRequest,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Build SRT content from raw aligned entries.

    Raises:
        HTTPException: 400 for unusable input, 500 for unexpected errors
    """
    max_chars = request.max_chars or settings.default_max_chars
    try:
        entries = [item.to_entry() for item in request.entries]
        return render_subtitles(entries, max_chars)

    except (ValueError, NoAlignmentDataError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected error building subtitles")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Unexpected error: {str(e)}",
        )


@router.post(
    "/resegment",
    response_model=SubtitleResponse,
    status_code=status.HTTP_200_OK,
    summary="Re-segment an SRT file",
    description="Splits over-length entries of an existing SRT file and fixes overlaps",
)
async def resegment_srt(
    request: ResegmentRequest,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Re-segment existing SRT content to a new character budget.

    Raises:
        HTTPException: 400 for invalid or empty SRT, 500 for unexpected errors
    """
    max_chars = request.max_chars or settings.default_max_chars
    try:
        entries = parse_srt(request.srt_content)

        if not entries:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid SRT entries found in content. Please check SRT format.",
            )

        return render_subtitles(entries, max_chars)

    except HTTPException:
        raise
    except (ValueError, NoAlignmentDataError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid SRT format: {str(e)}",
        )
    except Exception as e:
        logger.exception("Unexpected error re-segmenting SRT")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Unexpected error: {str(e)}",
        )


@router.post(
    "/draft",
    response_model=SubtitleResponse,
    status_code=status.HTTP_200_OK,
    summary="Estimate SRT from a script",
    description="Produces SRT with reading-speed timing when no audio is available",
)
async def draft_from_script(
    request: DraftRequest,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Estimate subtitle timing from the script text alone.

    Raises:
        HTTPException: 400 if the script has no usable text
    """
    max_chars = request.max_chars or settings.default_max_chars
    entries = draft_entries_from_script(request.script)

    if not entries:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Script contains no text to build subtitles from.",
        )

    return render_subtitles(entries, max_chars)
