from datetime import UTC, date, datetime, time
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def _utc_naive_now() -> datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


class WeeklyScheduleRecord(SQLModel, table=True):
    """Weekly availability document saved by the therapist availability editor."""

    __tablename__ = "availability_weekly_schedules"
    id: int | None = Field(default=None, primary_key=True)
    therapist_id: str = Field(foreign_key="users.id", index=True)
    weekly_availability: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    template_name: str = "primary"
    is_active: bool = True
    updated_at: datetime = Field(default_factory=_utc_naive_now)


class AvailabilityTemplate(SQLModel, table=True):
    """Legacy per-weekday availability rows (day_of_week: 0 = Sunday)."""

    __tablename__ = "availability_templates"
    id: int | None = Field(default=None, primary_key=True)
    therapist_id: str = Field(foreign_key="users.id", index=True)
    day_of_week: int = Field(ge=0, le=6)
    start_time: time
    end_time: time
    session_duration: int = 60
    session_type: str = "individual"
    max_sessions: int = 1
    is_active: bool = True


class AvailabilityOverride(SQLModel, table=True):
    __tablename__ = "availability_overrides"
    id: int | None = Field(default=None, primary_key=True)
    therapist_id: str = Field(foreign_key="users.id", index=True)
    override_date: date = Field(index=True)
    is_active: bool = True
    is_available: bool = False  # False blocks the whole date
    start_time: time | None = None
    end_time: time | None = None
    session_duration: int | None = None
    session_type: str | None = None
    max_sessions: int | None = None
    reason: str | None = None
    created_at: datetime = Field(default_factory=_utc_naive_now)
    updated_at: datetime = Field(default_factory=_utc_naive_now)
