"""
DayNotes Backend: Page Routes and Session Guard
=================================================

What:  Server-rendered pages: the dashboard (guarded) and the login page.
How:   The session is resolved by a dependency and handed to
       `render_dashboard()` as an explicit argument. The renderer branches
       only on whether that session exists, so the auth boundary can be
       tested without a request or a database.

Pages:
    GET /           → redirect to /dashboard
    GET /dashboard  → dashboard shell, or redirect to /login without a session
    GET /login      → login page, or redirect to /dashboard with a session

The markup is a deliberately bare shell; the Notes Panel drives the data.
"""

import datetime as dt
import html
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from daynotes.config import settings
from daynotes.session import AuthSession, get_optional_session

router = APIRouter(tags=["Pages"], include_in_schema=False)

DASHBOARD_PATH = "/dashboard"

_DASHBOARD_HTML = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>DayNotes</title></head>
<body>
  <main id="dashboard" data-user-id="{user_id}" data-date="{today}">
    <h1>Hello, {display_name}</h1>
    <section id="day-notes" data-notes-endpoint="/api/notes"></section>
  </main>
</body>
</html>
"""

_LOGIN_HTML = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>DayNotes - Log in</title></head>
<body>
  <main id="login" data-login-endpoint="/api/auth/login" data-next="{next_path}">
    <h1>Log in to DayNotes</h1>
  </main>
</body>
</html>
"""


def render_dashboard(session: Optional[AuthSession], today: Optional[dt.date] = None) -> Response:
    """
    Session guard for the dashboard.

    No session → redirect to the login page and render nothing else.
    Session → the dashboard shell for that user.
    """
    if session is None:
        return RedirectResponse(url=settings.login_path, status_code=307)

    day = today or dt.date.today()
    body = _DASHBOARD_HTML.format(
        user_id=html.escape(str(session.user_id)),
        today=day.isoformat(),
        display_name=html.escape(session.name or session.email),
    )
    return HTMLResponse(body)


@router.get("/")
async def index() -> RedirectResponse:
    return RedirectResponse(url=DASHBOARD_PATH, status_code=307)


@router.get(DASHBOARD_PATH)
async def dashboard_page(
    session: Optional[AuthSession] = Depends(get_optional_session),
) -> Response:
    return render_dashboard(session)


@router.get("/login")
async def login_page(
    session: Optional[AuthSession] = Depends(get_optional_session),
) -> Response:
    if session is not None:
        return RedirectResponse(url=DASHBOARD_PATH, status_code=307)
    return HTMLResponse(_LOGIN_HTML.format(next_path=DASHBOARD_PATH))
