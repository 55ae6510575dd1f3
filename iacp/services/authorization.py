"""Authorization graph: roles, applications and the bindings between users, apps and roles.

Assignments are idempotent (an existing binding is returned unchanged) and
removals report whether anything was deleted. Deleting a role or an
application is a hard delete that takes its bindings with it.
"""

import logging
from collections import defaultdict
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from iacp.models import AppRole, Application, Role, User, UserApplication
from iacp.services.errors import ConflictError, NotFoundError
from iacp.services.users import require_user

logger = logging.getLogger(__name__)

ROLE_EXISTS_MESSAGE = "Role with this name already exists"
APPLICATION_EXISTS_MESSAGE = "Application with this name already exists"


def _commit_or_conflict(db: Session, message: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(message) from e


# Roles


def list_roles(db: Session) -> list[Role]:
    return db.query(Role).order_by(Role.role_name).all()


def get_role(db: Session, role_id: int) -> Role | None:
    return db.get(Role, role_id)


def require_role(db: Session, role_id: int) -> Role:
    role = db.get(Role, role_id)
    if role is None:
        raise NotFoundError("Role not found")
    return role


def create_role(db: Session, role_name: str) -> Role:
    if db.query(Role).filter(Role.role_name == role_name).first() is not None:
        raise ConflictError(ROLE_EXISTS_MESSAGE)
    role = Role(role_name=role_name)
    db.add(role)
    _commit_or_conflict(db, ROLE_EXISTS_MESSAGE)
    db.refresh(role)
    logger.info("Role created", extra={"role_id": role.id})
    return role


def update_role(db: Session, role_id: int, role_name: str) -> Role:
    role = require_role(db, role_id)
    holder = db.query(Role).filter(Role.role_name == role_name).first()
    if holder is not None and holder.id != role.id:
        raise ConflictError(ROLE_EXISTS_MESSAGE)
    role.role_name = role_name
    role.updated_at = datetime.now(UTC)
    _commit_or_conflict(db, ROLE_EXISTS_MESSAGE)
    db.refresh(role)
    return role


def delete_role(db: Session, role_id: int) -> None:
    role = require_role(db, role_id)
    db.delete(role)
    db.commit()
    logger.info("Role deleted", extra={"role_id": role_id})


# Applications


def list_applications(db: Session) -> list[Application]:
    return db.query(Application).order_by(Application.app_name).all()


def get_application(db: Session, app_id: int) -> Application | None:
    return db.get(Application, app_id)


def require_application(db: Session, app_id: int) -> Application:
    application = db.get(Application, app_id)
    if application is None:
        raise NotFoundError("Application not found")
    return application


def create_application(db: Session, app_name: str) -> Application:
    if db.query(Application).filter(Application.app_name == app_name).first() is not None:
        raise ConflictError(APPLICATION_EXISTS_MESSAGE)
    application = Application(app_name=app_name)
    db.add(application)
    _commit_or_conflict(db, APPLICATION_EXISTS_MESSAGE)
    db.refresh(application)
    logger.info("Application created", extra={"app_id": application.id})
    return application


def update_application(db: Session, app_id: int, app_name: str) -> Application:
    application = require_application(db, app_id)
    holder = db.query(Application).filter(Application.app_name == app_name).first()
    if holder is not None and holder.id != application.id:
        raise ConflictError(APPLICATION_EXISTS_MESSAGE)
    application.app_name = app_name
    application.updated_at = datetime.now(UTC)
    _commit_or_conflict(db, APPLICATION_EXISTS_MESSAGE)
    db.refresh(application)
    return application


def delete_application(db: Session, app_id: int) -> None:
    """Delete the application together with its app-role and user-app bindings."""
    application = require_application(db, app_id)
    db.delete(application)
    db.commit()
    logger.info("Application deleted", extra={"app_id": app_id})


# One-hop traversals


def roles_for_app(db: Session, app_id: int) -> list[Role]:
    return (
        db.query(Role)
        .join(AppRole, AppRole.role_id == Role.id)
        .filter(AppRole.app_id == app_id)
        .order_by(AppRole.id)
        .all()
    )


def apps_for_role(db: Session, role_id: int) -> list[Application]:
    return (
        db.query(Application)
        .join(AppRole, AppRole.app_id == Application.id)
        .filter(AppRole.role_id == role_id)
        .order_by(AppRole.id)
        .all()
    )


def users_for_app(db: Session, app_id: int) -> list[User]:
    return (
        db.query(User)
        .join(UserApplication, UserApplication.user_id == User.id)
        .filter(UserApplication.app_id == app_id)
        .order_by(UserApplication.id)
        .all()
    )


def apps_for_user(db: Session, user_id: int) -> list[Application]:
    return (
        db.query(Application)
        .join(UserApplication, UserApplication.app_id == Application.id)
        .filter(UserApplication.user_id == user_id)
        .order_by(UserApplication.id)
        .all()
    )


def list_app_roles(db: Session, app_id: int | None = None) -> list[AppRole]:
    """Binding rows with role and application loaded; optionally for one application."""
    query = db.query(AppRole).options(
        joinedload(AppRole.role),
        joinedload(AppRole.application),
    )
    if app_id is not None:
        query = query.filter(AppRole.app_id == app_id)
    return query.order_by(AppRole.id).all()


def list_user_applications(db: Session, app_id: int | None = None) -> list[UserApplication]:
    query = db.query(UserApplication).options(
        joinedload(UserApplication.user),
        joinedload(UserApplication.application),
    )
    if app_id is not None:
        query = query.filter(UserApplication.app_id == app_id)
    return query.order_by(UserApplication.id).all()


# Assignments


def _find_app_role(db: Session, app_id: int, role_id: int) -> AppRole | None:
    return (
        db.query(AppRole)
        .filter(AppRole.app_id == app_id, AppRole.role_id == role_id)
        .first()
    )


def _find_user_application(db: Session, app_id: int, user_id: int) -> UserApplication | None:
    return (
        db.query(UserApplication)
        .filter(UserApplication.app_id == app_id, UserApplication.user_id == user_id)
        .first()
    )


def assign_role_to_app(db: Session, app_id: int, role_id: int) -> AppRole:
    """
    Bind role to application. Returns the existing binding if there is one;
    a concurrent insert of the same pair is resolved by re-reading it.
    """
    require_application(db, app_id)
    require_role(db, role_id)
    existing = _find_app_role(db, app_id, role_id)
    if existing is not None:
        return existing

    binding = AppRole(app_id=app_id, role_id=role_id)
    db.add(binding)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = _find_app_role(db, app_id, role_id)
        if existing is None:
            raise
        return existing
    db.refresh(binding)
    logger.info("Role assigned to application", extra={"app_id": app_id, "role_id": role_id})
    return binding


def unassign_role_from_app(db: Session, app_id: int, role_id: int) -> bool:
    deleted = (
        db.query(AppRole)
        .filter(AppRole.app_id == app_id, AppRole.role_id == role_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted:
        logger.info("Role removed from application", extra={"app_id": app_id, "role_id": role_id})
    return deleted > 0


def assign_user_to_app(db: Session, app_id: int, user_id: int) -> UserApplication:
    """Bind user to application; idempotent like assign_role_to_app."""
    require_application(db, app_id)
    require_user(db, user_id)
    existing = _find_user_application(db, app_id, user_id)
    if existing is not None:
        return existing

    binding = UserApplication(app_id=app_id, user_id=user_id)
    db.add(binding)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = _find_user_application(db, app_id, user_id)
        if existing is None:
            raise
        return existing
    db.refresh(binding)
    logger.info("User assigned to application", extra={"app_id": app_id, "user_id": user_id})
    return binding


def unassign_user_from_app(db: Session, app_id: int, user_id: int) -> bool:
    deleted = (
        db.query(UserApplication)
        .filter(UserApplication.app_id == app_id, UserApplication.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted:
        logger.info("User removed from application", extra={"app_id": app_id, "user_id": user_id})
    return deleted > 0


# Two-hop resolution


def applications_and_roles_for_user(db: Session, user_id: int) -> list[tuple[Application, list[Role]]]:
    """
    Applications the user belongs to (in binding order), each paired with the
    roles bound to it. Roles for all applications are fetched in one joined
    query and grouped here.
    """
    applications = apps_for_user(db, user_id)
    if not applications:
        return []

    rows = (
        db.query(AppRole.app_id, Role)
        .join(Role, AppRole.role_id == Role.id)
        .filter(AppRole.app_id.in_([a.id for a in applications]))
        .order_by(AppRole.id)
        .all()
    )
    roles_by_app: dict[int, list[Role]] = defaultdict(list)
    for app_id, role in rows:
        roles_by_app[app_id].append(role)
    return [(a, roles_by_app.get(a.id, [])) for a in applications]
