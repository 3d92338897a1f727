"""Tables read by the availability service: users, therapist profiles,
weekly schedules, legacy templates, overrides, sessions, session credits.

Revision ID: 001_availability
Revises:
Create Date: 2025-10-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_availability"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("full_name", sa.String(), nullable=True),
        sa.Column("user_type", sa.String(), nullable=False, server_default="individual"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_user_type"), "users", ["user_type"], unique=False)

    op.create_table(
        "therapist_profiles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        # pending | approved | rejected; only approved profiles are bookable
        sa.Column("verification_status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("availability_status", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_therapist_profiles_user_id"), "therapist_profiles", ["user_id"], unique=True)

    op.create_table(
        "availability_weekly_schedules",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("therapist_id", sa.String(), nullable=False),
        sa.Column("weekly_availability", sa.JSON(), nullable=False),
        sa.Column("template_name", sa.String(), nullable=False, server_default="primary"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["therapist_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_availability_weekly_schedules_therapist_id"),
        "availability_weekly_schedules",
        ["therapist_id"],
        unique=False,
    )

    op.create_table(
        "availability_templates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("therapist_id", sa.String(), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("session_duration", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("session_type", sa.String(), nullable=False, server_default="individual"),
        sa.Column("max_sessions", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_availability_templates_day_of_week"),
        sa.ForeignKeyConstraint(["therapist_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_availability_templates_therapist_id"), "availability_templates", ["therapist_id"], unique=False
    )

    op.create_table(
        "availability_overrides",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("therapist_id", sa.String(), nullable=False),
        sa.Column("override_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("session_duration", sa.Integer(), nullable=True),
        sa.Column("session_type", sa.String(), nullable=True),
        sa.Column("max_sessions", sa.Integer(), nullable=True),
        sa.Column("reason", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["therapist_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_availability_overrides_therapist_id"), "availability_overrides", ["therapist_id"], unique=False
    )
    op.create_index(
        op.f("ix_availability_overrides_override_date"), "availability_overrides", ["override_date"], unique=False
    )

    op.create_table(
        "sessions",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("therapist_id", sa.String(), nullable=False),
        sa.Column("scheduled_date", sa.Date(), nullable=True),
        sa.Column("scheduled_time", sa.String(), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("planned_duration_minutes", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("status", sa.String(), nullable=False, server_default="scheduled"),
        sa.Column("session_type", sa.String(), nullable=False, server_default="video"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["therapist_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sessions_user_id"), "sessions", ["user_id"], unique=False)
    op.create_index(op.f("ix_sessions_therapist_id"), "sessions", ["therapist_id"], unique=False)
    op.create_index(op.f("ix_sessions_start_time"), "sessions", ["start_time"], unique=False)
    op.create_index(op.f("ix_sessions_end_time"), "sessions", ["end_time"], unique=False)
    op.create_index(op.f("ix_sessions_status"), "sessions", ["status"], unique=False)

    op.create_table(
        "session_credits",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("session_duration_minutes", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("is_free_credit", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("session_id", sa.String(), nullable=True),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_session_credits_user_id"), "session_credits", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_session_credits_user_id"), table_name="session_credits")
    op.drop_table("session_credits")
    op.drop_index(op.f("ix_sessions_status"), table_name="sessions")
    op.drop_index(op.f("ix_sessions_end_time"), table_name="sessions")
    op.drop_index(op.f("ix_sessions_start_time"), table_name="sessions")
    op.drop_index(op.f("ix_sessions_therapist_id"), table_name="sessions")
    op.drop_index(op.f("ix_sessions_user_id"), table_name="sessions")
    op.drop_table("sessions")
    op.drop_index(op.f("ix_availability_overrides_override_date"), table_name="availability_overrides")
    op.drop_index(op.f("ix_availability_overrides_therapist_id"), table_name="availability_overrides")
    op.drop_table("availability_overrides")
    op.drop_index(op.f("ix_availability_templates_therapist_id"), table_name="availability_templates")
    op.drop_table("availability_templates")
    op.drop_index(
        op.f("ix_availability_weekly_schedules_therapist_id"), table_name="availability_weekly_schedules"
    )
    op.drop_table("availability_weekly_schedules")
    op.drop_index(op.f("ix_therapist_profiles_user_id"), table_name="therapist_profiles")
    op.drop_table("therapist_profiles")
    op.drop_index(op.f("ix_users_user_type"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
