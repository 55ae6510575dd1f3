"""Claim configuration: the singleton row deciding which claims tokens carry."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from iacp.models import ClaimConfig
from iacp.models.claim_config import CLAIM_CONFIG_ID, DEFAULT_TOKEN_EXPIRY
from iacp.schemas.config import ClaimConfigUpdate

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "include_username": True,
    "include_email": True,
    "include_user_id": True,
    "token_expiry": DEFAULT_TOKEN_EXPIRY,
}


def _apply(db: Session, row: ClaimConfig, changes: dict[str, Any]) -> ClaimConfig:
    for column, value in changes.items():
        setattr(row, column, value)
    row.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(row)
    return row


def _create(db: Session, overrides: dict[str, Any]) -> ClaimConfig:
    """
    Insert the singleton row with defaults plus overrides.

    If another request inserted it first, the primary key insert fails; the
    existing row is re-read and the overrides are applied to it instead.
    """
    row = ClaimConfig(id=CLAIM_CONFIG_ID, **{**DEFAULTS, **overrides})
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = db.get(ClaimConfig, CLAIM_CONFIG_ID)
        if existing is None:
            raise
        logger.info("Claim configuration was created concurrently; using existing row")
        return _apply(db, existing, overrides) if overrides else existing
    db.refresh(row)
    logger.info("Claim configuration initialised", extra={"token_expiry": row.token_expiry})
    return row


def get_claim_config(db: Session) -> ClaimConfig:
    """Return the claim configuration, creating it with defaults on first access."""
    row = db.get(ClaimConfig, CLAIM_CONFIG_ID)
    if row is not None:
        return row
    return _create(db, {})


def update_claim_config(db: Session, patch: ClaimConfigUpdate) -> ClaimConfig:
    """Change only the supplied fields; missing row is created with the rest at defaults."""
    changes = patch.changes()
    row = db.get(ClaimConfig, CLAIM_CONFIG_ID)
    if row is None:
        return _create(db, changes)
    row = _apply(db, row, changes)
    logger.info(
        "Claim configuration updated",
        extra={
            "fields": ",".join(sorted(changes)),
            "include_username": row.include_username,
            "include_email": row.include_email,
            "include_user_id": row.include_user_id,
            "token_expiry": row.token_expiry,
        },
    )
    return row
