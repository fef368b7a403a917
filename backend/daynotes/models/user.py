"""
DayNotes Backend: User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table.
Who:   Created by AuthService.register(); looked up on login and by the
       session resolver on every authenticated request.

Table Design:
    - UUID primary key, same as notes
    - email is unique and stored lower-cased; AuthService normalises it
    - password holds a passlib hash, never the plain text
    - notes: one-to-many; deleting a user deletes their notes
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from daynotes.database import Base

if TYPE_CHECKING:
    from daynotes.models.note import Note


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Display name; optional at registration
    name: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="passlib hash of the user's password",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    notes: Mapped[List["Note"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
