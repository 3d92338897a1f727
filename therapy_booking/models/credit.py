from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class SessionCredit(SQLModel, table=True):
    """One prepaid (or free) session. Unused while used_at is NULL."""

    __tablename__ = "session_credits"
    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    session_duration_minutes: int = 60
    is_free_credit: bool = False
    session_id: str | None = None
    used_at: datetime | None = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    expires_at: datetime | None = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
