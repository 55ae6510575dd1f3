"""Listings of every binding across all applications (bearer token required)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from iacp.api.auth import require_token
from iacp.core.database import get_db
from iacp.schemas.roles import (
    AppRoleOut,
    AppRolesListResponse,
    UserApplicationOut,
    UserApplicationsListResponse,
)
from iacp.services import authorization

router = APIRouter(dependencies=[Depends(require_token)])


@router.get("/app-roles", response_model=AppRolesListResponse)
def list_all_app_roles(db: Annotated[Session, Depends(get_db)]) -> AppRolesListResponse:
    return AppRolesListResponse(
        app_roles=[AppRoleOut.model_validate(b) for b in authorization.list_app_roles(db)]
    )


@router.get("/user-applications", response_model=UserApplicationsListResponse)
def list_all_user_applications(db: Annotated[Session, Depends(get_db)]) -> UserApplicationsListResponse:
    return UserApplicationsListResponse(
        user_applications=[
            UserApplicationOut.model_validate(b) for b in authorization.list_user_applications(db)
        ]
    )
