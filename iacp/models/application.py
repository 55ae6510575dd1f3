"""ORM model for applications."""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from iacp.models.base import Base


class Application(Base):
    """
    A client application. Roles are bound to it through app_roles and users
    through user_applications; deleting the application removes both.
    """

    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    app_name = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    app_roles = relationship(
        "AppRole",
        back_populates="application",
        cascade="all, delete-orphan",
    )
    user_applications = relationship(
        "UserApplication",
        back_populates="application",
        cascade="all, delete-orphan",
    )
