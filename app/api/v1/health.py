"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings
from app.schemas import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Annotated[Settings, Depends(get_settings)]):
    """Report service status and whether the alignment model is configured.

    The subtitle pipeline has no external dependencies, so the service is
    "running" even without a Google API key; only audio alignment is
    unavailable in that case.
    """
    alignment_ready = bool(settings.google_api_key)
    components = {
        "alignment_model": {
            "status": "configured" if alignment_ready else "unconfigured",
            "message": (
                f"Model {settings.alignment_model} ready"
                if alignment_ready
                else "GOOGLE_API_KEY not set; audio alignment disabled"
            ),
        },
        "subtitle_pipeline": {"status": "healthy", "message": "No external dependencies"},
    }

    endpoints = {
        "alignment": [
            "POST /api/v1/alignments - Align a script to audio and return SRT",
        ],
        "subtitles": [
            "POST /api/v1/subtitles - Build SRT from raw aligned entries",
            "POST /api/v1/subtitles/resegment - Re-segment an existing SRT file",
            "POST /api/v1/subtitles/draft - Estimate SRT timing from a script alone",
        ],
        "health": [
            "GET /api/v1/health - Service health check with component status",
        ],
    }

    return HealthResponse(
        service=settings.app_name,
        status="running" if alignment_ready else "degraded",
        version=settings.app_version,
        authentication="enabled" if settings.api_key else "disabled",
        components=components,
        endpoints=endpoints,
    )
