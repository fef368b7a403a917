"""
DayNotes Client
=================

HTTP-driven counterparts of the dashboard UI: the Notes Panel and its
parent Dashboard. They talk to the server only through the Notes API.

Usage:
    async with httpx.AsyncClient(base_url="http://localhost:8000") as client:
        await client.post("/api/auth/login", json={"email": ..., "password": ...})
        panel = NotesPanel(client, datetime.date.today())
        await panel.mount()
        panel.set_draft(content="Stand-up", time="09:00")
        await panel.add_note()
"""

from daynotes.client.dashboard import Dashboard, DayCount
from daynotes.client.panel import (
    NoteDeleteError,
    NoteRequestError,
    NotesPanel,
    NotesPanelError,
    NoteUpdateError,
    Toast,
    iso_datetime,
)
from daynotes.client.state import (
    COMPLETED,
    DEFAULT_TIME,
    PENDING,
    TIME_OPTIONS,
    NoteDraft,
    PanelNote,
    PanelState,
    display_notes,
    toggled_status,
)

__all__ = [
    "COMPLETED",
    "DEFAULT_TIME",
    "Dashboard",
    "DayCount",
    "NoteDeleteError",
    "NoteDraft",
    "NoteRequestError",
    "NotesPanel",
    "NotesPanelError",
    "NoteUpdateError",
    "PENDING",
    "PanelNote",
    "PanelState",
    "TIME_OPTIONS",
    "Toast",
    "display_notes",
    "iso_datetime",
    "toggled_status",
]
