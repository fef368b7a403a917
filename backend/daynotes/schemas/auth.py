"""
DayNotes Backend: Auth Schemas
================================

What:  Request and response bodies for /api/auth/*.
Note:  The password hash never appears in any response model.

Emails are validated by pydantic's EmailStr (email-validator) and stored
lower-cased, so "Ada@Example.com" and "ada@example.com" are one account.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class RegisterRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v)


class UserResponse(BaseModel):
    id: uuid.UUID
    name: Optional[str] = None
    email: str

    model_config = ConfigDict(from_attributes=True)


class SessionResponse(BaseModel):
    """The authenticated session, as exposed by GET /api/auth/session."""
    user: UserResponse
