"""Request/response schemas for roles, applications and their bindings."""

from datetime import datetime

from pydantic import Field

from iacp.models import Application, Role
from iacp.schemas.common import NAME_MAX_LEN, CamelModel


class RoleOut(CamelModel):
    id: int
    role_name: str
    created_at: datetime
    updated_at: datetime


class RoleCreate(CamelModel):
    role_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="Unique role name")


class RoleUpdate(CamelModel):
    role_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="New role name")


class RoleResponse(CamelModel):
    message: str | None = None
    role: RoleOut


class RolesListResponse(CamelModel):
    roles: list[RoleOut]


class ApplicationOut(CamelModel):
    id: int
    app_name: str
    created_at: datetime
    updated_at: datetime


class ApplicationCreate(CamelModel):
    app_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="Unique application name")


class ApplicationUpdate(CamelModel):
    app_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="New application name")


class ApplicationResponse(CamelModel):
    message: str | None = None
    application: ApplicationOut


class ApplicationsListResponse(CamelModel):
    applications: list[ApplicationOut]


class ApplicationWithRoles(ApplicationOut):
    """An application the user belongs to, with every role bound to it."""

    roles: list[RoleOut] = Field(default_factory=list)

    @classmethod
    def from_pair(cls, application: Application, roles: list[Role]) -> "ApplicationWithRoles":
        return cls(
            id=application.id,
            app_name=application.app_name,
            created_at=application.created_at,
            updated_at=application.updated_at,
            roles=[RoleOut.model_validate(r) for r in roles],
        )


class AppRoleOut(CamelModel):
    """app_roles row enriched with the role and application names."""

    id: int
    app_id: int
    role_id: int
    role_name: str
    app_name: str
    created_at: datetime
    updated_at: datetime


class AssignRoleRequest(CamelModel):
    role_id: int = Field(..., ge=1, description="Role to bind to the application")


class AppRoleResponse(CamelModel):
    message: str | None = None
    app_role: AppRoleOut


class AppRolesListResponse(CamelModel):
    app_roles: list[AppRoleOut]


class UserApplicationOut(CamelModel):
    """user_applications row enriched with user and application names."""

    id: int
    user_id: int
    app_id: int
    username: str
    email: str
    app_name: str
    created_at: datetime
    updated_at: datetime


class AssignUserRequest(CamelModel):
    user_id: int = Field(..., ge=1, description="User to bind to the application")


class UserApplicationResponse(CamelModel):
    message: str | None = None
    user_application: UserApplicationOut


class UserApplicationsListResponse(CamelModel):
    user_applications: list[UserApplicationOut]
