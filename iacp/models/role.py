"""ORM model for roles."""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from iacp.models.base import Base


class Role(Base):
    """A named role; bound to applications through app_roles."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    role_name = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    app_roles = relationship(
        "AppRole",
        back_populates="role",
        cascade="all, delete-orphan",
    )
