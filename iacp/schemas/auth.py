"""Request/response schemas for auth endpoints."""

from typing import Any

from pydantic import BaseModel, EmailStr, Field

from iacp.schemas.common import EMAIL_MAX_LEN, PASSWORD_MAX_LEN, PHONE_MAX_LEN, PHONE_PATTERN, CamelModel
from iacp.schemas.roles import ApplicationWithRoles
from iacp.schemas.users import UserOut


class LoginRequest(BaseModel):
    """Credentials for login: all three must match the same account."""

    email: EmailStr = Field(..., max_length=EMAIL_MAX_LEN, description="Email address")
    phone: str = Field(..., max_length=PHONE_MAX_LEN, pattern=PHONE_PATTERN, description="Phone number")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class DecodeRequest(BaseModel):
    """Token to verify and decode (debugging aid)."""

    token: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    """Issued token plus the authenticated user."""

    message: str
    token: str
    user: UserOut


class LoginResponse(AuthResponse):
    """Login also returns the user's applications and their roles."""

    applications: list[ApplicationWithRoles]


class MeResponse(CamelModel):
    """Current user resolved from the bearer token, with the raw claims."""

    user: UserOut
    claims: dict[str, Any]


class DecodeResponse(BaseModel):
    decoded: dict[str, Any]
