"""
DayNotes Backend: Auth Service
================================

What:  Registration and credential checks.
How:   Passwords are hashed with passlib's CryptContext. pbkdf2_sha256 is
       pure Python, so no native bcrypt build is needed; `deprecated="auto"`
       lets a future scheme change rehash on next login.
Who:   Called by the /api/auth routes. Session cookies are handled by the
       routes (daynotes.session), not here.
"""

import logging

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ValidationError,
)
from daynotes.models import User
from daynotes.schemas.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class AuthService:
    """Stateless; every call receives the request's database session."""

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> User:
        """
        Create a user.

        Raises:
            ValidationError: password shorter than MIN_PASSWORD_LENGTH (→ 400)
            ConflictError: email already registered (→ 409)
            DatabaseError: insert failed for another reason (→ 500)
        """
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                field="password",
            )

        existing = await db.execute(select(User.id).where(User.email == payload.email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(message="An account with this email already exists")

        name = payload.name.strip() if payload.name else None
        user = User(
            name=name or None,
            email=payload.email,
            password=pwd_context.hash(payload.password),
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise ConflictError(message="An account with this email already exists")
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Registered user %s", user.id)
        return user

    async def authenticate(self, db: AsyncSession, payload: LoginRequest) -> User:
        """
        Return the user matching the credentials.

        Unknown email and wrong password raise the same AuthenticationError,
        and an unknown email still pays for one hash verification.
        """
        result = await db.execute(select(User).where(User.email == payload.email))
        user = result.scalar_one_or_none()

        if user is None:
            pwd_context.dummy_verify()
            raise AuthenticationError(message="Invalid email or password")

        valid, new_hash = pwd_context.verify_and_update(payload.password, user.password)
        if not valid:
            logger.info("Failed login for user %s", user.id)
            raise AuthenticationError(message="Invalid email or password")

        if new_hash:
            user.password = new_hash

        return user


auth_service = AuthService()
