"""ORM models for the many-to-many join tables of the authorization graph."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import relationship

from iacp.models.base import Base


class AppRole(Base):
    """Binding of a role to an application. At most one row per (app_id, role_id)."""

    __tablename__ = "app_roles"
    __table_args__ = (
        UniqueConstraint("app_id", "role_id", name="uq_app_roles_app_id_role_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    app_id = Column(
        Integer,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role_id = Column(
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    application = relationship("Application", back_populates="app_roles")
    role = relationship("Role", back_populates="app_roles")

    @property
    def role_name(self) -> str:
        return self.role.role_name

    @property
    def app_name(self) -> str:
        return self.application.app_name


class UserApplication(Base):
    """Binding of a user to an application. At most one row per (user_id, app_id)."""

    __tablename__ = "user_applications"
    __table_args__ = (
        UniqueConstraint("user_id", "app_id", name="uq_user_applications_user_id_app_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    app_id = Column(
        Integer,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", back_populates="user_applications")
    application = relationship("Application", back_populates="user_applications")

    @property
    def username(self) -> str:
        return self.user.username

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def app_name(self) -> str:
        return self.application.app_name
