"""
DayNotes Backend: Note Request/Response Schemas
=================================================

What:  Pydantic models defining the Notes API contract.
Why:   Input validation, serialization, and OpenAPI doc generation.
Who:   Route handlers use them as request bodies and response models.

Wire format:
    - `userId` is camelCase on the wire; Python code uses `user_id`
    - `date` is serialized as an ISO date ("2024-01-15"). Requests may send
      either an ISO date or an ISO datetime ("2024-01-15T00:00:00.000Z");
      only the day component is kept
    - PUT bodies are full notes as the client holds them; `id` and `userId`
      in the body are ignored (the path id and the session decide those)
"""

import datetime as dt
import uuid
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from daynotes.models.note import DEFAULT_NOTE_TIME, NoteStatus


def parse_day(value: Union[str, dt.date, dt.datetime]) -> dt.date:
    """
    Reduce an ISO date or datetime to its calendar day.

    The day is taken as written: "2024-01-15T23:30:00-05:00" is the 15th,
    no timezone conversion happens.

    Raises:
        ValueError: value is not an ISO-8601 date or datetime
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO-8601 date, got {type(value).__name__}")
    raw = value.strip()
    if len(raw) == 10:
        return dt.date.fromisoformat(raw)
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    return dt.datetime.fromisoformat(raw).date()


class NoteCreate(BaseModel):
    """Body of POST /api/notes: `{content, time, status, date}`."""

    content: str = Field(description="Note text; must not be blank")
    time: str = Field(default=DEFAULT_NOTE_TIME, max_length=20, description="Time label, e.g. '09:00'")
    status: NoteStatus = Field(default=NoteStatus.pending)
    date: dt.date = Field(description="Day the note belongs to (ISO date or datetime)")

    @field_validator("date", mode="before")
    @classmethod
    def coerce_day(cls, v):
        return parse_day(v)


class NoteUpdate(BaseModel):
    """
    Body of PUT /api/notes/{id}.

    Every field is optional; missing fields keep their stored value. The
    Notes Panel always sends the whole note anyway.
    """

    content: Optional[str] = None
    time: Optional[str] = Field(default=None, max_length=20)
    status: Optional[NoteStatus] = None
    date: Optional[dt.date] = None

    @field_validator("date", mode="before")
    @classmethod
    def coerce_day(cls, v):
        if v is None:
            return None
        return parse_day(v)


class NoteResponse(BaseModel):
    """A stored note as returned by every Notes API endpoint."""

    id: uuid.UUID
    date: dt.date
    time: str
    content: str
    status: NoteStatus
    user_id: uuid.UUID = Field(
        serialization_alias="userId",
        validation_alias=AliasChoices("userId", "user_id"),
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class DaySummary(BaseModel):
    """Per-day note counts used by the dashboard calendar."""

    date: dt.date
    total: int
    completed: int


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "unauthorized",
            "message": "Authentication required",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
