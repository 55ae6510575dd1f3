"""Request/response schemas for user administration."""

from datetime import datetime

from pydantic import EmailStr, Field

from iacp.schemas.common import (
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    PHONE_MAX_LEN,
    PHONE_PATTERN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    USERNAME_PATTERN,
    CamelModel,
)
from iacp.schemas.roles import ApplicationWithRoles


class UserOut(CamelModel):
    """User as exposed by the API (never includes the password hash)."""

    id: int
    username: str
    email: str
    phone: str
    created_at: datetime
    updated_at: datetime


class UserCreate(CamelModel):
    """Body for registration and admin user creation."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        pattern=USERNAME_PATTERN,
        description="Letters, digits and underscore",
    )
    email: EmailStr = Field(..., max_length=EMAIL_MAX_LEN)
    phone: str = Field(..., max_length=PHONE_MAX_LEN, pattern=PHONE_PATTERN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UserUpdate(CamelModel):
    """Partial update: only fields present in the body are applied."""

    username: str | None = Field(
        default=None,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        pattern=USERNAME_PATTERN,
    )
    email: EmailStr | None = Field(default=None, max_length=EMAIL_MAX_LEN)
    phone: str | None = Field(default=None, max_length=PHONE_MAX_LEN, pattern=PHONE_PATTERN)
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    def changes(self) -> dict[str, str]:
        """Fields the caller actually supplied (explicit nulls count as absent)."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class UserResponse(CamelModel):
    message: str | None = None
    user: UserOut


class UsersListResponse(CamelModel):
    users: list[UserOut]


class UserApplicationsRolesResponse(CamelModel):
    """Every application a user belongs to, each with its bound roles."""

    user_id: int
    applications: list[ApplicationWithRoles]
