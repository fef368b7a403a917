"""
DayNotes Backend: Session Resolution
======================================

What:  Turns the signed session cookie into an `AuthSession` (or None).
Why:   Both the page guard and the Notes API need "who is calling?", and the
       page guard needs it as a plain value it can branch on.
How:   Starlette's SessionMiddleware verifies and decodes the cookie into
       `request.session`; we keep only the user id there and load the user
       row on every request, so a deleted account ends its sessions at once.

Dependencies:
    get_optional_session → Optional[AuthSession]   (page guard)
    require_session      → AuthSession or 401      (Notes API, auth/session)
"""

import logging
import uuid
from typing import Optional

from fastapi import Depends, Request
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.database import get_db_session
from daynotes.exceptions import AuthenticationError
from daynotes.models import User

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


class AuthSession(BaseModel):
    """The resolved, authenticated caller."""

    user_id: uuid.UUID
    email: str
    name: Optional[str] = None

    model_config = ConfigDict(frozen=True)


def start_session(request: Request, user: User) -> AuthSession:
    """Bind `user` to the caller's session cookie."""
    request.session.clear()
    request.session[SESSION_USER_KEY] = str(user.id)
    return AuthSession(user_id=user.id, email=user.email, name=user.name)


def end_session(request: Request) -> None:
    request.session.clear()


async def resolve_session(request: Request, db: AsyncSession) -> Optional[AuthSession]:
    """
    Look up the current session.

    Returns None when there is no cookie, the stored id is malformed, or the
    user it names no longer exists. Stale sessions are cleared on the way out.
    """
    raw_user_id = request.session.get(SESSION_USER_KEY)
    if not raw_user_id:
        return None

    try:
        user_id = uuid.UUID(str(raw_user_id))
    except ValueError:
        logger.warning("Discarding session with malformed user id")
        request.session.clear()
        return None

    user = await db.get(User, user_id)
    if user is None:
        logger.info("Discarding session for missing user %s", user_id)
        request.session.clear()
        return None

    return AuthSession(user_id=user.id, email=user.email, name=user.name)


async def get_optional_session(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Optional[AuthSession]:
    return await resolve_session(request, db)


async def require_session(
    session: Optional[AuthSession] = Depends(get_optional_session),
) -> AuthSession:
    """Dependency for API routes: the session, or a 401 via AuthenticationError."""
    if session is None:
        raise AuthenticationError()
    return session
