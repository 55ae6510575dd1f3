"""ORM model for the singleton claim configuration row."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, true

from iacp.models.base import Base

# The configuration lives under a fixed primary key so a second insert
# (e.g. two concurrent first reads) fails on the primary key constraint.
CLAIM_CONFIG_ID = 1

DEFAULT_TOKEN_EXPIRY = "24h"


class ClaimConfig(Base):
    """Which claims issued tokens carry, and how long tokens live."""

    __tablename__ = "claim_config"

    id = Column(Integer, primary_key=True, autoincrement=False, default=CLAIM_CONFIG_ID)
    include_username = Column(Boolean, nullable=False, default=True, server_default=true())
    include_email = Column(Boolean, nullable=False, default=True, server_default=true())
    include_user_id = Column(Boolean, nullable=False, default=True, server_default=true())
    token_expiry = Column(
        String(50),
        nullable=False,
        default=DEFAULT_TOKEN_EXPIRY,
        server_default=DEFAULT_TOKEN_EXPIRY,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
