from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from therapy_booking.scheduling.timeutils import format_hhmm
from therapy_booking.scheduling.types import BookedSession, CandidateSlot


class SlotInfo(BaseModel):
    id: str
    date: str  # YYYY-MM-DD
    day_of_week: int  # 0 = Sunday
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    session_duration: int
    session_type: str
    max_sessions: int
    is_available: bool
    is_override: bool
    booking_status: Literal["available", "booked"]

    @classmethod
    def from_slot(cls, slot: CandidateSlot) -> "SlotInfo":
        start = format_hhmm(slot.start_time)
        return cls(
            id=f"{slot.date.isoformat()}-{start}",
            date=slot.date.isoformat(),
            day_of_week=slot.day_of_week,
            start_time=start,
            end_time=format_hhmm(slot.end_time),
            session_duration=slot.session_duration,
            session_type=slot.session_type,
            max_sessions=slot.max_sessions,
            is_available=slot.is_available,
            is_override=slot.is_override,
            booking_status=slot.booking_status,
        )


class DaySlotsResponse(BaseModel):
    success: bool = True
    date: str
    therapist_id: str
    slots: list[SlotInfo]
    total_slots: int
    message: str


class RangeSlotsResponse(BaseModel):
    success: bool = True
    therapist_id: str
    start_date: str
    days: int
    availability: list[SlotInfo]


class CheckAvailabilityRequest(BaseModel):
    therapist_id: str
    start_time: datetime
    duration_minutes: int = Field(gt=0)
    exclude_session_id: str | None = None


class ConflictInfo(BaseModel):
    id: str | None = None
    start_time: datetime
    end_time: datetime
    status: str

    @classmethod
    def from_session(cls, session: BookedSession) -> "ConflictInfo":
        return cls(id=session.id, start_time=session.start, end_time=session.end, status=session.status)


class SuggestedTime(BaseModel):
    time: datetime
    label: str


class CheckAvailabilityResponse(BaseModel):
    available: bool
    conflicting_sessions: list[ConflictInfo]
    suggested_times: list[SuggestedTime]
