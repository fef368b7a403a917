"""
DayNotes Client: Notes Panel State
====================================

What:  The panel's data: the day's notes, the note being edited, and the
       "new note" draft, as one immutable snapshot.
How:   Frozen Pydantic models. Every transition returns a new PanelState,
       so a handler that awaited a response can never observe a half-applied
       change, and tests can compare snapshots by value.

This module must not import the server packages (models, database): the
panel runs against any DayNotes server over HTTP.
"""

from typing import Iterable, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

PENDING = "pending"
COMPLETED = "completed"

NoteStatus = Literal["pending", "completed"]

DEFAULT_TIME = "00:00"

# The 24 top-of-hour labels offered by the time picker
TIME_OPTIONS: Tuple[str, ...] = tuple(f"{hour:02d}:00" for hour in range(24))


def toggled_status(status: NoteStatus) -> NoteStatus:
    return PENDING if status == COMPLETED else COMPLETED


class PanelNote(BaseModel):
    """
    Client copy of a server note.

    Keeps every field the server sent (`date`, `userId`) so PUT can send the
    full note back unchanged apart from the edited fields.
    """

    id: str
    time: str
    content: str
    status: NoteStatus = PENDING
    date: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict:
        """Wire form of the note (camelCase keys)."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def with_status(self, status: NoteStatus) -> "PanelNote":
        return self.model_copy(update={"status": status})


class NoteDraft(BaseModel):
    """Contents of the "new note" inputs."""

    content: str = ""
    time: str = DEFAULT_TIME
    status: NoteStatus = PENDING

    model_config = ConfigDict(frozen=True)


def display_notes(notes: Iterable[PanelNote]) -> List[PanelNote]:
    """
    Notes in display order: ascending by time label.

    Plain string comparison. It matches chronological order for zero-padded
    24-hour "HH:MM" labels, which is all TIME_OPTIONS produces. The sort is
    stable, so notes sharing a label keep their arrival order.
    """
    return sorted(notes, key=lambda note: note.time)


class PanelState(BaseModel):
    """
    One snapshot of the panel.

    Editing is exclusive: `editing` holds at most one note, and starting an
    edit on another note replaces it, discarding unsaved changes.
    """

    notes: Tuple[PanelNote, ...] = ()
    editing: Optional[PanelNote] = None
    draft: NoteDraft = NoteDraft()

    model_config = ConfigDict(frozen=True)

    # ── note list ─────────────────────────────────────────────────────────

    def with_notes(self, notes: Iterable[PanelNote]) -> "PanelState":
        return self.model_copy(update={"notes": tuple(notes)})

    def with_added(self, note: PanelNote) -> "PanelState":
        return self.model_copy(update={"notes": self.notes + (note,)})

    def with_replaced(self, note: PanelNote) -> "PanelState":
        notes = tuple(note if n.id == note.id else n for n in self.notes)
        return self.model_copy(update={"notes": notes})

    def with_removed(self, note_id: str) -> "PanelState":
        notes = tuple(n for n in self.notes if n.id != note_id)
        return self.model_copy(update={"notes": notes})

    def with_status(self, note_id: str, status: NoteStatus) -> "PanelState":
        notes = tuple(n.with_status(status) if n.id == note_id else n for n in self.notes)
        return self.model_copy(update={"notes": notes})

    # ── editing ───────────────────────────────────────────────────────────

    def start_editing(self, note: PanelNote) -> "PanelState":
        return self.model_copy(update={"editing": note})

    def edit(self, content: Optional[str] = None, time: Optional[str] = None) -> "PanelState":
        if self.editing is None:
            return self
        changes = {}
        if content is not None:
            changes["content"] = content
        if time is not None:
            changes["time"] = time
        return self.model_copy(update={"editing": self.editing.model_copy(update=changes)})

    def stop_editing(self) -> "PanelState":
        return self.model_copy(update={"editing": None})

    def is_editing(self, note_id: str) -> bool:
        return self.editing is not None and self.editing.id == note_id

    # ── draft ─────────────────────────────────────────────────────────────

    def with_draft(self, content: Optional[str] = None, time: Optional[str] = None) -> "PanelState":
        changes = {}
        if content is not None:
            changes["content"] = content
        if time is not None:
            changes["time"] = time
        return self.model_copy(update={"draft": self.draft.model_copy(update=changes)})

    def with_reset_draft(self) -> "PanelState":
        return self.model_copy(update={"draft": NoteDraft()})
