"""Role CRUD endpoints (bearer token required)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from iacp.api.auth import require_token
from iacp.core.database import get_db
from iacp.schemas.common import MessageResponse
from iacp.schemas.roles import (
    ApplicationOut,
    ApplicationsListResponse,
    RoleCreate,
    RoleOut,
    RoleResponse,
    RolesListResponse,
    RoleUpdate,
)
from iacp.services import authorization

router = APIRouter(dependencies=[Depends(require_token)])

RoleId = Annotated[int, Path(ge=1, description="Role ID")]


@router.get("", response_model=RolesListResponse)
def list_roles(db: Annotated[Session, Depends(get_db)]) -> RolesListResponse:
    """All roles ordered by name."""
    return RolesListResponse(roles=[RoleOut.model_validate(r) for r in authorization.list_roles(db)])


@router.get("/{role_id}", response_model=RoleResponse)
def get_role(role_id: RoleId, db: Annotated[Session, Depends(get_db)]) -> RoleResponse:
    return RoleResponse(role=RoleOut.model_validate(authorization.require_role(db, role_id)))


@router.post("", response_model=RoleResponse)
def create_role(body: RoleCreate, db: Annotated[Session, Depends(get_db)]) -> RoleResponse:
    role = authorization.create_role(db, body.role_name)
    return RoleResponse(message="Role created successfully", role=RoleOut.model_validate(role))


@router.put("/{role_id}", response_model=RoleResponse)
def update_role(
    role_id: RoleId,
    body: RoleUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> RoleResponse:
    role = authorization.update_role(db, role_id, body.role_name)
    return RoleResponse(message="Role updated successfully", role=RoleOut.model_validate(role))


@router.delete("/{role_id}", response_model=MessageResponse)
def delete_role(role_id: RoleId, db: Annotated[Session, Depends(get_db)]) -> MessageResponse:
    """Hard delete; the role is unbound from every application."""
    authorization.delete_role(db, role_id)
    return MessageResponse(message="Role deleted successfully")


@router.get("/{role_id}/applications", response_model=ApplicationsListResponse)
def get_role_applications(
    role_id: RoleId,
    db: Annotated[Session, Depends(get_db)],
) -> ApplicationsListResponse:
    """Applications this role is bound to."""
    authorization.require_role(db, role_id)
    return ApplicationsListResponse(
        applications=[ApplicationOut.model_validate(a) for a in authorization.apps_for_role(db, role_id)]
    )
