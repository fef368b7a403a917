"""
DayNotes Client: Notes Panel
==============================

What:  The day-notes component: lists one calendar day's notes and creates,
       edits, deletes and toggles them through the Notes API.
How:   Drives an `httpx.AsyncClient` pointed at a DayNotes server. The
       browser pieces the component depends on are injected as callbacks:
       `navigate(path)` for the router and `notify(toast)` for toasts.

Confirm-then-apply:
    Nothing is rendered optimistically. Every mutation waits for a 2xx
    before it touches local state, so the panel never shows a note the
    server does not have.

Failure handling (same for every operation):
    - HTTP 401      → navigate to the login page, no toast, state untouched
    - transport error, non-JSON body, malformed note, other non-2xx
                    → logged, generic "Failed to X. Please try again." toast,
                      state untouched
    No retries. Server error text is never shown.

Ordering:
    Requests are not fenced. If two responses race, the one that lands last
    wins. Responses that land after `unmount()` are dropped.
"""

import datetime as dt
import inspect
import logging
from typing import Any, Callable, List, Literal, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from daynotes.client.state import (
    NoteDraft,
    PanelNote,
    PanelState,
    display_notes,
    toggled_status,
)

logger = logging.getLogger(__name__)

NOTES_ENDPOINT = "/api/notes"
LOGIN_PATH = "/login"


class Toast(BaseModel):
    """A transient notification, as the UI's toast system would show it."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"

    model_config = ConfigDict(frozen=True)


class NotesPanelError(Exception):
    """A Notes API call returned something the panel cannot use."""


class NoteRequestError(NotesPanelError):
    """Unexpected status or payload on fetch/add."""


class NoteUpdateError(NotesPanelError):
    """PUT /api/notes/{id} answered with a non-2xx status."""


class NoteDeleteError(NotesPanelError):
    """DELETE /api/notes/{id} answered with a non-2xx status."""


# Everything a Notes API round trip can fail with short of a programming error
REQUEST_FAILURES = (httpx.HTTPError, ValueError, NotesPanelError)


def iso_datetime(day: dt.date) -> str:
    """Midnight UTC of `day` in ISO-8601, the form the API's `date` expects."""
    return f"{day.isoformat()}T00:00:00.000Z"


def _log_navigation(path: str) -> None:
    logger.info("Navigate to %s", path)


def _log_toast(toast: Toast) -> None:
    level = logging.WARNING if toast.variant == "destructive" else logging.INFO
    logger.log(level, "%s: %s", toast.title, toast.description)


class NotesPanel:
    """
    Notes for one calendar day.

    Args:
        client: AsyncClient with `base_url` set to the DayNotes server and
            carrying the session cookie.
        date: the day whose notes are shown.
        on_notes_change: called (and awaited, if it returns an awaitable)
            after every successful mutation; parents use it to refresh
            aggregate state. It runs after the request has succeeded, so
            an exception it raises reaches the caller instead of turning
            into a failure toast.
        navigate: router callback; receives the login path on HTTP 401.
        notify: toast callback.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        date: dt.date,
        on_notes_change: Optional[Callable[[], Any]] = None,
        navigate: Optional[Callable[[str], Any]] = None,
        notify: Optional[Callable[[Toast], Any]] = None,
        login_path: str = LOGIN_PATH,
    ):
        self.client = client
        self.date = date
        self.on_notes_change = on_notes_change
        self.navigate = navigate or _log_navigation
        self.notify = notify or _log_toast
        self.login_path = login_path
        self.state = PanelState()
        self._mounted = True

    # ── read-only views ───────────────────────────────────────────────────

    @property
    def notes(self) -> List[PanelNote]:
        """The day's notes in display order."""
        return display_notes(self.state.notes)

    @property
    def editing(self) -> Optional[PanelNote]:
        return self.state.editing

    @property
    def draft(self) -> NoteDraft:
        return self.state.draft

    @property
    def mounted(self) -> bool:
        return self._mounted

    # ── lifecycle ─────────────────────────────────────────────────────────

    async def mount(self) -> None:
        self._mounted = True
        await self.fetch_notes()

    def unmount(self) -> None:
        """Stop applying results; requests already in flight run to completion."""
        self._mounted = False

    async def change_date(self, date: dt.date) -> None:
        """Bind the panel to another day and load its notes."""
        self.date = date
        await self.fetch_notes()

    # ── local edits (no I/O) ──────────────────────────────────────────────

    def set_draft(self, content: Optional[str] = None, time: Optional[str] = None) -> None:
        self.state = self.state.with_draft(content=content, time=time)

    def start_editing(self, note: PanelNote) -> None:
        """Edit `note`. Any other in-progress edit is discarded, not saved."""
        self.state = self.state.start_editing(note)

    def edit(self, content: Optional[str] = None, time: Optional[str] = None) -> None:
        self.state = self.state.edit(content=content, time=time)

    def cancel_editing(self) -> None:
        self.state = self.state.stop_editing()

    # ── Notes API operations ──────────────────────────────────────────────

    async def fetch_notes(self) -> None:
        """Replace the note list with the server's notes for `self.date`."""
        try:
            response = await self.client.get(
                NOTES_ENDPOINT, params={"date": iso_datetime(self.date)}
            )
            if self._discarded() or self._session_expired(response):
                return
            if not response.is_success:
                raise NoteRequestError(f"GET {NOTES_ENDPOINT} returned {response.status_code}")
            data = response.json()
            if not isinstance(data, list):
                raise NoteRequestError("Notes payload is not a list")
            notes = [PanelNote.model_validate(item) for item in data]
            self.state = self.state.with_notes(notes)
        except REQUEST_FAILURES as error:
            if self._discarded():
                return
            logger.error("Failed to fetch notes: %s", error)
            self._toast_error("Failed to fetch notes. Please try again.")

    async def add_note(self) -> None:
        """Create a note from the draft. Does nothing while the draft is empty."""
        draft = self.state.draft
        if not draft.content:
            return

        try:
            response = await self.client.post(
                NOTES_ENDPOINT,
                json={
                    "content": draft.content,
                    "time": draft.time,
                    "status": draft.status,
                    "date": iso_datetime(self.date),
                },
            )
            if self._discarded() or self._session_expired(response):
                return
            if not response.is_success:
                raise NoteRequestError(f"POST {NOTES_ENDPOINT} returned {response.status_code}")
            added = PanelNote.model_validate(response.json())
            self.state = self.state.with_added(added).with_reset_draft()
        except REQUEST_FAILURES as error:
            if self._discarded():
                return
            logger.error("Failed to add note: %s", error)
            self._toast_error("Failed to add note. Please try again.")
        else:
            await self._notes_changed()
            self.notify(Toast(title="Success", description="Note added successfully."))

    async def update_note(self) -> None:
        """Save the note being edited. Does nothing when not editing."""
        edited = self.state.editing
        if edited is None:
            return

        try:
            response = await self.client.put(
                f"{NOTES_ENDPOINT}/{edited.id}", json=edited.to_payload()
            )
            if self._discarded() or self._session_expired(response):
                return
            if not response.is_success:
                raise NoteUpdateError("Failed to update note")
            self.state = self.state.with_replaced(edited).stop_editing()
        except REQUEST_FAILURES as error:
            if self._discarded():
                return
            logger.error("Failed to update note: %s", error)
            self._toast_error("Failed to update note. Please try again.")
        else:
            await self._notes_changed()
            self.notify(Toast(title="Success", description="Note updated successfully."))

    async def delete_note(self, note_id: str) -> None:
        try:
            response = await self.client.delete(f"{NOTES_ENDPOINT}/{note_id}")
            if self._discarded() or self._session_expired(response):
                return
            if not response.is_success:
                raise NoteDeleteError("Failed to delete note")
            self.state = self.state.with_removed(note_id)
        except REQUEST_FAILURES as error:
            if self._discarded():
                return
            logger.error("Failed to delete note: %s", error)
            self._toast_error("Failed to delete note. Please try again.")
        else:
            await self._notes_changed()
            self.notify(Toast(title="Success", description="Note deleted successfully."))

    async def toggle_note_status(self, note: PanelNote) -> None:
        """Flip pending/completed. Only `status` differs from `note` in the PUT body."""
        new_status = toggled_status(note.status)
        try:
            response = await self.client.put(
                f"{NOTES_ENDPOINT}/{note.id}",
                json=note.with_status(new_status).to_payload(),
            )
            if self._discarded() or self._session_expired(response):
                return
            if not response.is_success:
                raise NoteUpdateError("Failed to update note status")
            self.state = self.state.with_status(note.id, new_status)
        except REQUEST_FAILURES as error:
            if self._discarded():
                return
            logger.error("Failed to update note status: %s", error)
            self._toast_error("Failed to update note status. Please try again.")
        else:
            await self._notes_changed()
            self.notify(Toast(title="Success", description=f"Note marked as {new_status}."))

    # ── helpers ───────────────────────────────────────────────────────────

    def _discarded(self) -> bool:
        if not self._mounted:
            logger.debug("Panel unmounted; dropping response")
            return True
        return False

    def _session_expired(self, response: httpx.Response) -> bool:
        if response.status_code == 401:
            self.navigate(self.login_path)
            return True
        return False

    async def _notes_changed(self) -> None:
        if self.on_notes_change is None:
            return
        result = self.on_notes_change()
        if inspect.isawaitable(result):
            await result

    def _toast_error(self, description: str) -> None:
        self.notify(Toast(title="Error", description=description, variant="destructive"))
