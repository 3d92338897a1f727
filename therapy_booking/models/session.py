from datetime import UTC, date, datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TherapySession(SQLModel, table=True):
    """A booked session. Written by the booking committer, read here for conflicts."""

    __tablename__ = "sessions"
    id: str = Field(primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    therapist_id: str = Field(foreign_key="users.id", index=True)
    scheduled_date: date | None = None
    scheduled_time: str | None = None  # HH:MM, therapist-local
    start_time: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False, index=True))
    end_time: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False, index=True))
    planned_duration_minutes: int = 60
    # scheduled | confirmed | in_progress | completed | cancelled | no_show
    status: str = Field(default="scheduled", index=True)
    session_type: str = "video"
    created_at: datetime = Field(
        default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False)
    )
