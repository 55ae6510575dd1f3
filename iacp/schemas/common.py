"""Shared schema base and validation patterns."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Validation patterns carried over from the public API contract.
USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"
PHONE_PATTERN = r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,9}$"
TOKEN_EXPIRY_PATTERN = r"^[0-9]+[smhd]$"

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PHONE_MAX_LEN = 20
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 255
NAME_MAX_LEN = 255


class CamelModel(BaseModel):
    """Base for API bodies: snake_case in Python, camelCase on the wire, readable from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str = Field(..., description="Human-readable result")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    details: str | None = None
