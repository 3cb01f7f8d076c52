"""create users and employees tables

Revision ID: 4c1e9a7d2b30
Revises:
Create Date: 2026-10-19 10:12:41.503118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c1e9a7d2b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default="EMPLOYEE"),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "employees",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("class", sa.String(), nullable=True),
        sa.Column("attendance", sa.Float(), nullable=False, server_default="100"),
        sa.Column("performance", sa.Float(), nullable=False, server_default="7"),
        sa.Column("subjects", sa.JSON(), nullable=False),
        sa.Column("education", sa.JSON(), nullable=False),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("department", sa.String(), nullable=True),
        sa.Column("position", sa.String(), nullable=True),
        sa.Column("join_date", sa.DateTime(), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("profile_image", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        # SAFETY CONSTRAINTS
        sa.CheckConstraint("age IS NULL OR (age >= 18 AND age <= 100)", name="ck_employees_age_range"),
        sa.CheckConstraint("attendance >= 0 AND attendance <= 100", name="ck_employees_attendance_range"),
        sa.CheckConstraint("performance >= 0 AND performance <= 10", name="ck_employees_performance_range"),
    )
    op.create_index(op.f("ix_employees_email"), "employees", ["email"], unique=True)
    op.create_index("ix_employees_department", "employees", ["department"], unique=False)
    op.create_index("ix_employees_created_at", "employees", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_employees_created_at", table_name="employees")
    op.drop_index("ix_employees_department", table_name="employees")
    op.drop_index(op.f("ix_employees_email"), table_name="employees")
    op.drop_table("employees")

    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
