"""Application CRUD and app-role / user-application binding endpoints (bearer token required)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from iacp.api.auth import require_token
from iacp.core.database import get_db
from iacp.schemas.common import MessageResponse
from iacp.schemas.roles import (
    AppRoleOut,
    AppRoleResponse,
    AppRolesListResponse,
    ApplicationCreate,
    ApplicationOut,
    ApplicationResponse,
    ApplicationsListResponse,
    ApplicationUpdate,
    AssignRoleRequest,
    AssignUserRequest,
    UserApplicationOut,
    UserApplicationResponse,
    UserApplicationsListResponse,
)
from iacp.services import authorization

router = APIRouter(dependencies=[Depends(require_token)])

AppId = Annotated[int, Path(ge=1, description="Application ID")]
RoleId = Annotated[int, Path(ge=1, description="Role ID")]
UserId = Annotated[int, Path(ge=1, description="User ID")]


@router.get("", response_model=ApplicationsListResponse)
def list_applications(db: Annotated[Session, Depends(get_db)]) -> ApplicationsListResponse:
    """All applications ordered by name."""
    return ApplicationsListResponse(
        applications=[ApplicationOut.model_validate(a) for a in authorization.list_applications(db)]
    )


@router.post("", response_model=ApplicationResponse)
def create_application(
    body: ApplicationCreate,
    db: Annotated[Session, Depends(get_db)],
) -> ApplicationResponse:
    application = authorization.create_application(db, body.app_name)
    return ApplicationResponse(
        message="Application created successfully",
        application=ApplicationOut.model_validate(application),
    )


@router.get("/{app_id}", response_model=ApplicationResponse)
def get_application(app_id: AppId, db: Annotated[Session, Depends(get_db)]) -> ApplicationResponse:
    application = authorization.require_application(db, app_id)
    return ApplicationResponse(application=ApplicationOut.model_validate(application))


@router.put("/{app_id}", response_model=ApplicationResponse)
def update_application(
    app_id: AppId,
    body: ApplicationUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> ApplicationResponse:
    application = authorization.update_application(db, app_id, body.app_name)
    return ApplicationResponse(
        message="Application updated successfully",
        application=ApplicationOut.model_validate(application),
    )


@router.delete("/{app_id}", response_model=MessageResponse)
def delete_application(app_id: AppId, db: Annotated[Session, Depends(get_db)]) -> MessageResponse:
    """Hard delete; all role and user bindings of the application are removed too."""
    authorization.delete_application(db, app_id)
    return MessageResponse(message="Application deleted successfully")


@router.get("/{app_id}/roles", response_model=AppRolesListResponse)
def get_app_roles(app_id: AppId, db: Annotated[Session, Depends(get_db)]) -> AppRolesListResponse:
    authorization.require_application(db, app_id)
    return AppRolesListResponse(
        app_roles=[AppRoleOut.model_validate(b) for b in authorization.list_app_roles(db, app_id)]
    )


@router.post("/{app_id}/roles", response_model=AppRoleResponse)
def assign_role(
    app_id: AppId,
    body: AssignRoleRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AppRoleResponse:
    """Bind a role to the application. Re-assigning an existing pair returns the existing binding."""
    binding = authorization.assign_role_to_app(db, app_id, body.role_id)
    return AppRoleResponse(
        message="Role assigned to application successfully",
        app_role=AppRoleOut.model_validate(binding),
    )


@router.delete("/{app_id}/roles/{role_id}", response_model=MessageResponse)
def remove_role(
    app_id: AppId,
    role_id: RoleId,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    if not authorization.unassign_role_from_app(db, app_id, role_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="App-role assignment not found",
        )
    return MessageResponse(message="Role removed from application successfully")


@router.get("/{app_id}/users", response_model=UserApplicationsListResponse)
def get_app_users(app_id: AppId, db: Annotated[Session, Depends(get_db)]) -> UserApplicationsListResponse:
    authorization.require_application(db, app_id)
    return UserApplicationsListResponse(
        user_applications=[
            UserApplicationOut.model_validate(b)
            for b in authorization.list_user_applications(db, app_id)
        ]
    )


@router.post("/{app_id}/users", response_model=UserApplicationResponse)
def assign_user(
    app_id: AppId,
    body: AssignUserRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserApplicationResponse:
    """Bind a user to the application. Re-assigning an existing pair returns the existing binding."""
    binding = authorization.assign_user_to_app(db, app_id, body.user_id)
    return UserApplicationResponse(
        message="User assigned to application successfully",
        user_application=UserApplicationOut.model_validate(binding),
    )


@router.delete("/{app_id}/users/{user_id}", response_model=MessageResponse)
def remove_user(
    app_id: AppId,
    user_id: UserId,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    if not authorization.unassign_user_from_app(db, app_id, user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User-application assignment not found",
        )
    return MessageResponse(message="User removed from application successfully")
