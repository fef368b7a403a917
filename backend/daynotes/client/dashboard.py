"""
DayNotes Client: Dashboard
============================

What:  Parent of the Notes Panel. Owns the selected day and a per-day summary
       of the visible month, used to mark calendar days that have notes.
How:   Hands `refresh_summary` to the panel as `on_notes_change`, so every
       successful add/edit/delete/toggle refreshes the month's counts.
"""

import calendar
import datetime as dt
import logging
from typing import Any, Callable, Dict, Optional, Tuple

import httpx
from pydantic import BaseModel, ConfigDict

from daynotes.client.panel import (
    LOGIN_PATH,
    NOTES_ENDPOINT,
    REQUEST_FAILURES,
    NoteRequestError,
    NotesPanel,
    Toast,
)

logger = logging.getLogger(__name__)

SUMMARY_ENDPOINT = f"{NOTES_ENDPOINT}/summary"


class DayCount(BaseModel):
    date: dt.date
    total: int
    completed: int

    model_config = ConfigDict(frozen=True)


def month_bounds(day: dt.date) -> Tuple[dt.date, dt.date]:
    """First and last day of `day`'s month."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


class Dashboard:
    """Selected day + Notes Panel + month summary."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        selected: Optional[dt.date] = None,
        navigate: Optional[Callable[[str], Any]] = None,
        notify: Optional[Callable[[Toast], Any]] = None,
        login_path: str = LOGIN_PATH,
    ):
        self.client = client
        self.selected = selected or dt.date.today()
        self.summary: Dict[dt.date, DayCount] = {}
        self.panel = NotesPanel(
            client,
            self.selected,
            on_notes_change=self.refresh_summary,
            navigate=navigate,
            notify=notify,
            login_path=login_path,
        )

    async def open(self) -> None:
        await self.panel.mount()
        await self.refresh_summary()

    def close(self) -> None:
        self.panel.unmount()

    async def select_date(self, day: dt.date) -> None:
        """Show `day`; the month summary is reloaded only when the month changes."""
        month_changed = (day.year, day.month) != (self.selected.year, self.selected.month)
        self.selected = day
        await self.panel.change_date(day)
        if month_changed:
            await self.refresh_summary()

    async def refresh_summary(self) -> None:
        """
        Reload the counts for the selected month.

        Failures keep the previous summary; a stale calendar mark is not worth
        a toast on top of the panel's own.
        """
        start, end = month_bounds(self.selected)
        try:
            response = await self.client.get(
                SUMMARY_ENDPOINT,
                params={"from": start.isoformat(), "to": end.isoformat()},
            )
            if not self.panel.mounted:
                return
            if response.status_code == 401:
                self.panel.navigate(self.panel.login_path)
                return
            if not response.is_success:
                raise NoteRequestError(f"GET {SUMMARY_ENDPOINT} returned {response.status_code}")
            counts = [DayCount.model_validate(item) for item in response.json()]
        except REQUEST_FAILURES as error:
            logger.warning("Failed to refresh note summary: %s", error)
            return

        self.summary = {count.date: count for count in counts}

    def has_notes(self, day: dt.date) -> bool:
        count = self.summary.get(day)
        return count is not None and count.total > 0
