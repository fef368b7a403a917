"""
DayNotes Backend: Note Service (Business Logic)
=================================================

What:  CRUD for a user's day notes plus the per-day summary.
Why:   Keeps ownership rules and validation out of the route handlers.
Who:   Called by the /api/notes route handlers.

Ownership:
    Every query is scoped to the session user's id. A note id that exists
    but belongs to someone else behaves exactly like a missing id (404).

Error Handling Strategy:
    Business-rule failures raise ValidationError / NotFoundError directly.
    SQLAlchemy failures are logged and wrapped in DatabaseError so no SQL
    detail reaches the client.

Design Decision:
    NoteService is stateless: it receives the db session per call, which
    makes it trivial to unit-test with a mocked AsyncSession.
"""

import datetime as dt
import logging
from typing import List
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.exceptions import DatabaseError, NotFoundError, ValidationError
from daynotes.models import Note, NoteStatus
from daynotes.schemas.note import DaySummary, NoteCreate, NoteResponse, NoteUpdate

logger = logging.getLogger(__name__)

# Widest range GET /api/notes/summary accepts (a year, leap-safe)
MAX_SUMMARY_DAYS = 366


def to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        date=note.date,
        time=note.time,
        content=note.content,
        status=note.status,
        user_id=note.user_id,
    )


def _require_content(content: str) -> None:
    if not content or not content.strip():
        raise ValidationError(message="Note content must not be empty", field="content")


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes(): one user's notes for one day, ordered by time label
        - create_note(): insert and return the stored row (with its new id)
        - update_note(): apply the provided fields to an owned note
        - delete_note(): remove an owned note
        - summarize(): per-day totals for the dashboard calendar
    """

    async def list_notes(
        self,
        db: AsyncSession,
        user_id: UUID,
        day: dt.date,
    ) -> List[NoteResponse]:
        """
        Return the user's notes whose stored date equals `day`.

        Query plan:
            SELECT ... WHERE user_id = :uid AND date = :day ORDER BY time, created_at
            → idx_notes_user_date
        """
        try:
            result = await db.execute(
                select(Note)
                .where(Note.user_id == user_id, Note.date == day)
                .order_by(Note.time, Note.created_at)
            )
            return [to_response(note) for note in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing notes for %s: %s", day, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def create_note(
        self,
        db: AsyncSession,
        user_id: UUID,
        payload: NoteCreate,
    ) -> NoteResponse:
        """
        Create a note for `user_id`.

        Raises:
            ValidationError: blank content (→ 400)
            DatabaseError: insert failed (→ 500)
        """
        _require_content(payload.content)

        note = Note(
            date=payload.date,
            time=payload.time,
            content=payload.content,
            status=payload.status,
            user_id=user_id,
        )
        try:
            db.add(note)
            # flush assigns defaults without committing; get_db_session commits
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note %s created for %s at %s", note.id, note.date, note.time)
        return to_response(note)

    async def update_note(
        self,
        db: AsyncSession,
        user_id: UUID,
        note_id: UUID,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Apply every field present in `payload` to the user's note.

        Raises:
            NotFoundError: no such note for this user (→ 404)
            ValidationError: content provided but blank (→ 400)
        """
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "content" in changes:
            _require_content(changes["content"])

        note = await self._get_owned(db, user_id, note_id)
        for field, value in changes.items():
            setattr(note, field, value)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": str(note_id)},
            )

        logger.info("Note %s updated (%s)", note_id, ", ".join(sorted(changes)) or "no changes")
        return to_response(note)

    async def delete_note(self, db: AsyncSession, user_id: UUID, note_id: UUID) -> None:
        """
        Raises:
            NotFoundError: no such note for this user (→ 404)
        """
        note = await self._get_owned(db, user_id, note_id)
        try:
            await db.delete(note)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(note_id)},
            )
        logger.info("Note %s deleted", note_id)

    async def summarize(
        self,
        db: AsyncSession,
        user_id: UUID,
        start: dt.date,
        end: dt.date,
    ) -> List[DaySummary]:
        """
        Count notes per day in [start, end] for the user.

        Days without notes are omitted. Used by the dashboard to mark
        calendar days and refreshed after every panel mutation.
        """
        if end < start:
            raise ValidationError(message="'to' must not be before 'from'", field="to")
        if (end - start).days >= MAX_SUMMARY_DAYS:
            raise ValidationError(
                message=f"Summary range is limited to {MAX_SUMMARY_DAYS} days",
                field="to",
            )

        completed = func.sum(case((Note.status == NoteStatus.completed, 1), else_=0))
        try:
            result = await db.execute(
                select(Note.date, func.count(Note.id), completed)
                .where(Note.user_id == user_id, Note.date >= start, Note.date <= end)
                .group_by(Note.date)
                .order_by(Note.date)
            )
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Database error summarizing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the note summary. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [
            DaySummary(date=day, total=total, completed=int(done or 0))
            for day, total, done in rows
        ]

    async def _get_owned(self, db: AsyncSession, user_id: UUID, note_id: UUID) -> Note:
        try:
            result = await db.execute(
                select(Note).where(Note.id == note_id, Note.user_id == user_id)
            )
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": str(note_id)},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note


note_service = NoteService()
