"""Initial schema with default staff groups and language."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

from igniter.database import table_name


revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None


DEFAULT_STAFF_GROUPS = [
    {"staff_group_name": "Owners", "description": "Default group for owners", "location_access": False},
    {"staff_group_name": "Managers", "description": "Default group for managers", "location_access": False},
    {"staff_group_name": "Waiters", "description": "Default group for waiters", "location_access": True},
    {"staff_group_name": "Delivery", "description": "Default group for delivery drivers", "location_access": True},
]

DEFAULT_LANGUAGES = [
    {"code": "en", "name": "English", "idiom": "english", "status": True},
]


def upgrade() -> None:
    op.create_table(
        table_name("locations"),
        sa.Column("location_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("location_name", sa.String(length=128), nullable=False),
        sa.Column("location_email", sa.String(length=96), nullable=True),
        sa.Column("location_status", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )

    staff_groups = op.create_table(
        table_name("staff_groups"),
        sa.Column("staff_group_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("staff_group_name", sa.String(length=128), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location_access", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    languages = op.create_table(
        table_name("languages"),
        sa.Column("language_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(length=10), nullable=False, unique=True),
        sa.Column("name", sa.String(length=32), nullable=False),
        sa.Column("idiom", sa.String(length=32), nullable=False),
        sa.Column("status", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        table_name("staffs"),
        sa.Column("staff_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("staff_name", sa.String(length=128), nullable=False),
        sa.Column("staff_email", sa.String(length=96), nullable=False, unique=True),
        sa.Column(
            "staff_group_id",
            sa.Integer(),
            sa.ForeignKey(f"{table_name('staff_groups')}.staff_group_id"),
            nullable=False,
        ),
        sa.Column(
            "staff_location_id",
            sa.Integer(),
            sa.ForeignKey(f"{table_name('locations')}.location_id"),
            nullable=True,
        ),
        sa.Column(
            "language_id",
            sa.Integer(),
            sa.ForeignKey(f"{table_name('languages')}.language_id"),
            nullable=True,
        ),
        sa.Column("timezone", sa.String(length=32), nullable=True),
        sa.Column("staff_status", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "date_added",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index(
        f"ix_{table_name('staffs')}_staff_email",
        table_name("staffs"),
        ["staff_email"],
        unique=False,
    )

    op.create_table(
        table_name("users"),
        sa.Column("user_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "staff_id",
            sa.Integer(),
            sa.ForeignKey(f"{table_name('staffs')}.staff_id"),
            nullable=False,
            unique=True,
        ),
        sa.Column("username", sa.String(length=32), nullable=False, unique=True),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("super_user", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_activated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("date_activated", sa.DateTime(), nullable=True),
    )
    op.create_index(
        f"ix_{table_name('users')}_username",
        table_name("users"),
        ["username"],
        unique=False,
    )

    op.create_table(
        table_name("parameters"),
        sa.Column("item", sa.String(length=128), primary_key=True),
        sa.Column("value", sa.Text(), nullable=True),
    )

    op.bulk_insert(staff_groups, DEFAULT_STAFF_GROUPS)
    op.bulk_insert(languages, DEFAULT_LANGUAGES)


def downgrade() -> None:
    op.drop_table(table_name("parameters"))
    op.drop_index(f"ix_{table_name('users')}_username", table_name=table_name("users"))
    op.drop_table(table_name("users"))
    op.drop_index(f"ix_{table_name('staffs')}_staff_email", table_name=table_name("staffs"))
    op.drop_table(table_name("staffs"))
    op.drop_table(table_name("languages"))
    op.drop_table(table_name("staff_groups"))
    op.drop_table(table_name("locations"))
