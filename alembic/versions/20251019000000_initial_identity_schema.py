"""Initial schema: users, claim configuration, roles, applications and bindings.

Revision ID: 20251019000000
Revises:
Create Date: 2025-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20251019000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_phone"), "users", ["phone"], unique=True)

    op.create_table(
        "claim_config",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("include_username", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("include_email", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("include_user_id", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("token_expiry", sa.String(length=50), server_default="24h", nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_claim_config")),
    )

    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("role_name", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_roles")),
    )
    op.create_index(op.f("ix_roles_role_name"), "roles", ["role_name"], unique=True)

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("app_name", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_applications")),
    )
    op.create_index(op.f("ix_applications_app_name"), "applications", ["app_name"], unique=True)

    op.create_table(
        "app_roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("app_id", sa.Integer(), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["app_id"], ["applications.id"],
            name=op.f("fk_app_roles_app_id_applications"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["role_id"], ["roles.id"],
            name=op.f("fk_app_roles_role_id_roles"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_app_roles")),
        sa.UniqueConstraint("app_id", "role_id", name="uq_app_roles_app_id_role_id"),
    )
    op.create_index(op.f("ix_app_roles_app_id"), "app_roles", ["app_id"], unique=False)
    op.create_index(op.f("ix_app_roles_role_id"), "app_roles", ["role_id"], unique=False)

    op.create_table(
        "user_applications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("app_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name=op.f("fk_user_applications_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["app_id"], ["applications.id"],
            name=op.f("fk_user_applications_app_id_applications"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_user_applications")),
        sa.UniqueConstraint("user_id", "app_id", name="uq_user_applications_user_id_app_id"),
    )
    op.create_index(op.f("ix_user_applications_user_id"), "user_applications", ["user_id"], unique=False)
    op.create_index(op.f("ix_user_applications_app_id"), "user_applications", ["app_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_user_applications_app_id"), table_name="user_applications")
    op.drop_index(op.f("ix_user_applications_user_id"), table_name="user_applications")
    op.drop_table("user_applications")
    op.drop_index(op.f("ix_app_roles_role_id"), table_name="app_roles")
    op.drop_index(op.f("ix_app_roles_app_id"), table_name="app_roles")
    op.drop_table("app_roles")
    op.drop_index(op.f("ix_applications_app_name"), table_name="applications")
    op.drop_table("applications")
    op.drop_index(op.f("ix_roles_role_name"), table_name="roles")
    op.drop_table("roles")
    op.drop_table("claim_config")
    op.drop_index(op.f("ix_users_phone"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
