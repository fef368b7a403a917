"""
DayNotes Backend: Note SQLAlchemy Model
=========================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - date: calendar day only (DATE column); the API accepts ISO datetimes but
      stores the day component
    - time: free-form label such as "09:00". It is not a TIME column: the
      client sorts on the string, and nothing validates it against a clock
    - status: 'pending' | 'completed', enforced by a CHECK constraint so no
      other value can reach the table
    - user_id: every note belongs to exactly one user (NOT NULL FK)

    Index on (user_id, date):
        The only list query is "this user's notes for this day".
"""

import datetime as dt
import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from daynotes.database import Base

if TYPE_CHECKING:
    from daynotes.models.user import User


class NoteStatus(str, enum.Enum):
    """Completion state of a note. A new note is always pending."""

    pending = "pending"
    completed = "completed"


DEFAULT_NOTE_TIME = "00:00"


class Note(Base):
    """
    A short note pinned to one calendar day of one user.

    Lifecycle:
        1. Created by POST /api/notes (status = 'pending' unless given)
        2. Edited or toggled by PUT /api/notes/{id}
        3. Removed by DELETE /api/notes/{id}, or with its owning user
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    date: Mapped[dt.date] = mapped_column(
        Date,
        nullable=False,
        comment="Calendar day the note belongs to",
    )

    time: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DEFAULT_NOTE_TIME,
        server_default=text(f"'{DEFAULT_NOTE_TIME}'"),
        comment="Time-of-day label, e.g. '09:00'",
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[NoteStatus] = mapped_column(
        Enum(
            NoteStatus,
            name="note_status",
            native_enum=False,
            create_constraint=True,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=NoteStatus.pending,
        server_default=text("'pending'"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: dt.datetime.now(dt.timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    user: Mapped["User"] = relationship(back_populates="notes")

    __table_args__ = (
        Index("idx_notes_user_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, date='{self.date}', time='{self.time}', "
            f"status='{self.status.value}')>"
        )
