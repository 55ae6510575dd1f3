"""Credential store: registration, login checks and user administration."""

import logging
from datetime import UTC, datetime

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from iacp.core.security import hash_password, verify_password
from iacp.models import User
from iacp.schemas.users import UserUpdate
from iacp.services.errors import AuthenticationError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

# One message for unknown email, wrong phone and wrong password so that login
# responses do not reveal which accounts exist.
INVALID_CREDENTIALS_MESSAGE = "Invalid email, phone, or password"
DUPLICATE_USER_MESSAGE = "User with this email, username, or phone number already exists"
USER_NOT_FOUND_MESSAGE = "User not found"

# Checked in this order on update; the label ends up in the conflict message.
_UNIQUE_FIELDS = (
    ("email", "email"),
    ("username", "username"),
    ("phone", "phone number"),
)

_dummy_hash: str | None = None


def _burn_password_check(password: str) -> None:
    """Run one bcrypt comparison against a throwaway hash (unknown-email path)."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("not-a-real-password")
    verify_password(password, _dummy_hash)


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def find_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def find_by_phone(db: Session, phone: str) -> User | None:
    return db.query(User).filter(User.phone == phone).first()


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def require_user(db: Session, user_id: int) -> User:
    """Return the user or raise NotFoundError."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return user


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def create_user(db: Session, username: str, email: str, phone: str, password: str) -> User:
    """
    Persist a new user with a bcrypt-hashed password.

    Raises ConflictError if any of username, email or phone is already taken,
    including when a concurrent insert wins the race on the unique index.
    """
    existing = (
        db.query(User)
        .filter(or_(User.email == email, User.username == username, User.phone == phone))
        .first()
    )
    if existing is not None:
        raise ConflictError(DUPLICATE_USER_MESSAGE)

    user = User(
        username=username,
        email=email,
        phone=phone,
        password_hash=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(DUPLICATE_USER_MESSAGE) from e
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id})
    return user


def register(db: Session, username: str, email: str, phone: str, password: str) -> User:
    """Self-service registration; same uniqueness rules as admin creation."""
    user = create_user(db, username, email, phone, password)
    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(db: Session, email: str, phone: str, password: str) -> User:
    """
    Return the user whose email, phone and password all match.

    Raises AuthenticationError with the same message whichever check fails.
    """
    user = find_by_email(db, email)
    if user is None:
        _burn_password_check(password)
        logger.info("Login rejected")
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    if user.phone != phone or not verify_password(password, user.password_hash):
        logger.info("Login rejected", extra={"user_id": user.id})
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    return user


def update_user(db: Session, user_id: int, patch: UserUpdate) -> User:
    """
    Apply a partial update. Each supplied username/email/phone that differs
    from the current value must not belong to another user; the password is
    re-hashed only when supplied.
    """
    user = require_user(db, user_id)
    changes = patch.changes()

    for field, label in _UNIQUE_FIELDS:
        value = changes.get(field)
        if value is None or value == getattr(user, field):
            continue
        column = getattr(User, field)
        holder = db.query(User).filter(column == value, User.id != user.id).first()
        if holder is not None:
            raise ConflictError(f"User with this {label} already exists")

    for field in ("username", "email", "phone"):
        if field in changes:
            setattr(user, field, changes[field])
    if "password" in changes:
        user.password_hash = hash_password(changes["password"])
    user.updated_at = datetime.now(UTC)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(DUPLICATE_USER_MESSAGE) from e
    db.refresh(user)
    logger.info(
        "User updated",
        extra={"user_id": user.id, "fields": ",".join(sorted(changes))},
    )
    return user


def delete_user(db: Session, user_id: int) -> None:
    """Hard-delete a user; their application bindings go with them."""
    user = require_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
