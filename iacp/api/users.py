"""User administration endpoints (bearer token required)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from iacp.api.auth import require_token
from iacp.core.database import get_db
from iacp.schemas.common import MessageResponse
from iacp.schemas.roles import ApplicationWithRoles
from iacp.schemas.users import (
    UserApplicationsRolesResponse,
    UserCreate,
    UserOut,
    UserResponse,
    UserUpdate,
    UsersListResponse,
)
from iacp.services import authorization, users

router = APIRouter(dependencies=[Depends(require_token)])

UserId = Annotated[int, Path(ge=1, description="User ID")]


@router.get("", response_model=UsersListResponse)
def list_users(db: Annotated[Session, Depends(get_db)]) -> UsersListResponse:
    return UsersListResponse(users=[UserOut.model_validate(u) for u in users.list_users(db)])


@router.post("", response_model=UserResponse)
def create_user(
    body: UserCreate,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Create a user on someone's behalf. Unlike register, no token is issued."""
    user = users.create_user(db, body.username, str(body.email), body.phone, body.password)
    return UserResponse(message="User created successfully", user=UserOut.model_validate(user))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: UserId, db: Annotated[Session, Depends(get_db)]) -> UserResponse:
    return UserResponse(user=UserOut.model_validate(users.require_user(db, user_id)))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UserId,
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Partial update; each changed username/email/phone must be free."""
    user = users.update_user(db, user_id, body)
    return UserResponse(message="User updated successfully", user=UserOut.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: UserId, db: Annotated[Session, Depends(get_db)]) -> MessageResponse:
    users.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/{user_id}/applications-roles", response_model=UserApplicationsRolesResponse)
def get_user_applications_roles(
    user_id: UserId,
    db: Annotated[Session, Depends(get_db)],
) -> UserApplicationsRolesResponse:
    """Every application the user belongs to, each with the roles bound to that application."""
    users.require_user(db, user_id)
    pairs = authorization.applications_and_roles_for_user(db, user_id)
    return UserApplicationsRolesResponse(
        user_id=user_id,
        applications=[ApplicationWithRoles.from_pair(a, roles) for a, roles in pairs],
    )
