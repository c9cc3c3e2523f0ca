"""Pydantic schemas for subtitle building API."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.srt import SRTEntry


class AlignedEntry(BaseModel):
    """One raw entry as produced by the alignment model.

    Field names follow the model's camelCase JSON; snake_case is accepted too.
    Timestamps are free-form text and are repaired downstream, so any scalar
    is kept as text. An index that is not a whole number becomes 0.
    """

    model_config = ConfigDict(populate_by_name=True)

    index: int | None = Field(None, description="Position reported by the aligner (not trusted)")
    start_time: str | None = Field(None, alias="startTime", description="HH:MM:SS,mmm")
    end_time: str | None = Field(None, alias="endTime", description="HH:MM:SS,mmm")
    text: str = Field("", description="Subtitle text")

    @field_validator("index", mode="before")
    @classmethod
    def coerce_index(cls, value):
        if value is None or (isinstance(value, int) and not isinstance(value, bool)):
            return value
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return 0

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def stringify_timestamp(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def to_entry(self) -> SRTEntry:
        return SRTEntry(self.index or 0, self.start_time or "", self.end_time or "", self.text)


class SubtitleBuildRequest(BaseModel):
    """Request model for building subtitles from raw aligned entries."""

    entries: list[AlignedEntry] = Field(
        ..., description="Raw aligned entries in playback order", min_length=1
    )
    max_chars: int | None = Field(
        None, ge=1, description="Maximum characters per subtitle (default from settings)"
    )


class ResegmentRequest(BaseModel):
    """Request model for re-segmenting an existing SRT file."""

    srt_content: str = Field(..., description="SRT subtitle file content", min_length=1)
    max_chars: int | None = Field(
        None, ge=1, description="Maximum characters per subtitle (default from settings)"
    )


class DraftRequest(BaseModel):
    """Request model for estimating subtitles from a script without audio."""

    script: str = Field(..., description="Reference script text", min_length=1)
    max_chars: int | None = Field(
        None, ge=1, description="Maximum characters per subtitle (default from settings)"
    )


class SubtitleResponse(BaseModel):
    """Response model for every subtitle-producing endpoint."""

    srt_content: str = Field(..., description="Generated SRT subtitle content")
    entry_count: int = Field(..., description="Number of subtitle entries in srt_content")


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    service: str
    status: str
    version: str
    authentication: str
    components: dict[str, dict[str, str]]
    endpoints: dict[str, list[str]]
