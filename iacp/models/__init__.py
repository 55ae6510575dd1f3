"""SQLAlchemy ORM models."""

from iacp.models.application import Application
from iacp.models.base import Base
from iacp.models.bindings import AppRole, UserApplication
from iacp.models.claim_config import ClaimConfig
from iacp.models.role import Role
from iacp.models.user import User

__all__ = [
    "AppRole",
    "Application",
    "Base",
    "ClaimConfig",
    "Role",
    "User",
    "UserApplication",
]
