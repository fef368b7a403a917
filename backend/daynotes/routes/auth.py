"""
DayNotes Backend: Auth Route Handlers
=======================================

What:  Register, log in, log out, and inspect the current session.
How:   AuthService checks credentials; the session cookie itself is written
       by Starlette's SessionMiddleware from `request.session`.

Endpoints:
    POST /api/auth/register  → 201 UserResponse
    POST /api/auth/login     → 200 SessionResponse (+ Set-Cookie)
    POST /api/auth/logout    → 204 (cookie cleared)
    GET  /api/auth/session   → 200 SessionResponse | 401

Both credential endpoints sit behind RateLimitMiddleware.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.database import get_db_session
from daynotes.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    SessionResponse,
    UserResponse,
)
from daynotes.schemas.note import ErrorResponse
from daynotes.services.auth_service import auth_service
from daynotes.session import AuthSession, end_session, require_session, start_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Password too short", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await auth_service.register(db=db, payload=payload)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=SessionResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
)
async def login(
    payload: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> SessionResponse:
    user = await auth_service.authenticate(db=db, payload=payload)
    start_session(request, user)
    logger.info("User %s logged in", user.id)
    return SessionResponse(user=UserResponse.model_validate(user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request) -> Response:
    end_session(request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/session",
    response_model=SessionResponse,
    responses={401: {"description": "No session", "model": ErrorResponse}},
)
async def current_session(session: AuthSession = Depends(require_session)) -> SessionResponse:
    return SessionResponse(
        user=UserResponse(id=session.user_id, name=session.name, email=session.email)
    )
