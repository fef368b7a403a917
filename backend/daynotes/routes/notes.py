"""
DayNotes Backend: Notes Route Handlers
========================================

What:  The Notes API consumed by the Notes Panel.
How:   Parses query/path/body, resolves the session, delegates to NoteService.

Endpoints:
    GET    /api/notes?date=<ISO date|datetime>   → [Note]
    GET    /api/notes/summary?from=<d>&to=<d>    → [DaySummary]
    POST   /api/notes                            → 201 Note
    PUT    /api/notes/{id}                       → 200 Note
    DELETE /api/notes/{id}                       → 204

Every endpoint answers 401 without a session; the panel redirects to the
login page on that status.

Caching:
    Note lists change on every mutation, so responses are marked no-store.
"""

import datetime as dt
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.database import get_db_session
from daynotes.exceptions import ValidationError
from daynotes.schemas.note import (
    DaySummary,
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    parse_day,
)
from daynotes.services.note_service import note_service
from daynotes.session import AuthSession, require_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

_AUTH_RESPONSES = {401: {"description": "No session", "model": ErrorResponse}}


def _day_param(value: str, name: str) -> dt.date:
    try:
        return parse_day(value)
    except ValueError:
        raise ValidationError(
            message=f"'{name}' must be an ISO-8601 date or datetime",
            field=name,
        )


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses=_AUTH_RESPONSES,
    summary="List the caller's notes for one day",
)
async def list_notes(
    response: Response,
    date: str = Query(description="Day to list, as ISO date or ISO datetime"),
    session: AuthSession = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    day = _day_param(date, "date")
    notes = await note_service.list_notes(db=db, user_id=session.user_id, day=day)
    response.headers["Cache-Control"] = "no-store"
    return notes


@router.get(
    "/notes/summary",
    response_model=List[DaySummary],
    responses=_AUTH_RESPONSES,
    summary="Per-day note counts for a date range",
)
async def summarize_notes(
    response: Response,
    start: str = Query(alias="from", description="First day (inclusive)"),
    end: str = Query(alias="to", description="Last day (inclusive)"),
    session: AuthSession = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
) -> List[DaySummary]:
    summary = await note_service.summarize(
        db=db,
        user_id=session.user_id,
        start=_day_param(start, "from"),
        end=_day_param(end, "to"),
    )
    response.headers["Cache-Control"] = "no-store"
    return summary


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_AUTH_RESPONSES, 400: {"description": "Blank content", "model": ErrorResponse}},
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    session: AuthSession = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.create_note(db=db, user_id=session.user_id, payload=payload)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={**_AUTH_RESPONSES, 404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Replace a note's fields",
    description="Accepts the full note as the client holds it; id and userId in the body are ignored.",
)
async def update_note(
    note_id: UUID,
    payload: NoteUpdate,
    session: AuthSession = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(
        db=db, user_id=session.user_id, note_id=note_id, payload=payload
    )


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**_AUTH_RESPONSES, 404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(
    note_id: UUID,
    session: AuthSession = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, user_id=session.user_id, note_id=note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
