"""Pydantic schemas for API request/response validation."""

from app.schemas.subtitles import (
    AlignedEntry,
    DraftRequest,
    HealthResponse,
    ResegmentRequest,
    SubtitleBuildRequest,
    SubtitleResponse,
)

__all__ = [
    "AlignedEntry",
    "DraftRequest",
    "HealthResponse",
    "ResegmentRequest",
    "SubtitleBuildRequest",
    "SubtitleResponse",
]
