"""Pydantic request/response schemas."""

from iacp.schemas.auth import (
    AuthResponse,
    DecodeRequest,
    DecodeResponse,
    LoginRequest,
    LoginResponse,
    MeResponse,
)
from iacp.schemas.common import ErrorResponse, MessageResponse
from iacp.schemas.config import ClaimConfigOut, ClaimConfigUpdate, ClaimConfigUpdateResponse
from iacp.schemas.health import HealthResponse
from iacp.schemas.roles import (
    AppRoleOut,
    ApplicationOut,
    ApplicationWithRoles,
    RoleOut,
    UserApplicationOut,
)
from iacp.schemas.users import UserCreate, UserOut, UserUpdate

__all__ = [
    "AppRoleOut",
    "ApplicationOut",
    "ApplicationWithRoles",
    "AuthResponse",
    "ClaimConfigOut",
    "ClaimConfigUpdate",
    "ClaimConfigUpdateResponse",
    "DecodeRequest",
    "DecodeResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "MessageResponse",
    "RoleOut",
    "UserApplicationOut",
    "UserCreate",
    "UserOut",
    "UserUpdate",
]
