import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SlotMode = Literal["available", "all"]
BookingStatus = Literal["available", "booked"]

TimeValue = str | dt.time

DEFAULT_SESSION_DURATION = 60
DEFAULT_BLOCKING_STATUSES = frozenset({"scheduled", "confirmed", "in_progress"})
# Template slot types that produce bookable windows; "break"/"unavailable" do not.
BOOKABLE_SLOT_TYPES = frozenset({"available", "individual"})


class GeneralHours(BaseModel):
    start: TimeValue | None = None
    end: TimeValue | None = None
    session_duration: int | None = None


class TimeSlotTemplate(BaseModel):
    start: TimeValue
    end: TimeValue
    type: str = "available"
    duration: int | None = None


class DayAvailability(BaseModel):
    enabled: bool = False
    general_hours: GeneralHours | None = None
    time_slots: list[TimeSlotTemplate] = Field(default_factory=list)


class SessionSettings(BaseModel):
    session_duration: int = DEFAULT_SESSION_DURATION
    advance_booking_days: int = 30


class WeeklySchedule(BaseModel):
    # Keyed by Sunday-first day index (0 = Sunday .. 6 = Saturday)
    days: dict[int, DayAvailability] = Field(default_factory=dict)
    session_settings: SessionSettings = Field(default_factory=SessionSettings)
    timezone: str = "UTC"

    def day(self, index: int) -> DayAvailability | None:
        return self.days.get(index)


class Override(BaseModel):
    therapist_id: str | None = None
    override_date: dt.date
    is_active: bool = True
    is_available: bool = False
    start_time: TimeValue | None = None
    end_time: TimeValue | None = None
    session_duration: int | None = None
    session_type: str | None = None
    reason: str | None = None

    @property
    def has_custom_hours(self) -> bool:
        return bool(self.start_time and self.end_time)


class BookedSession(BaseModel):
    id: str | None = None
    therapist_id: str | None = None
    start: dt.datetime
    end: dt.datetime
    status: str = "scheduled"


class CandidateSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    day_of_week: int
    start_time: dt.time
    end_time: dt.time
    session_duration: int
    session_type: str = "individual"
    max_sessions: int = 1
    is_available: bool = True
    is_override: bool = False
    booking_status: BookingStatus = "available"

    @property
    def start(self) -> dt.datetime:
        return dt.datetime.combine(self.date, self.start_time)

    @property
    def end(self) -> dt.datetime:
        return dt.datetime.combine(self.date, self.end_time)


class BookingRequest(BaseModel):
    therapist_id: str
    session_date: str  # YYYY-MM-DD
    start_time: str  # HH:MM
    duration_minutes: int = DEFAULT_SESSION_DURATION
    user_id: str | None = None


class ValidationResult(BaseModel):
    therapist_id: str
    session_date: dt.date
    start: dt.datetime
    end: dt.datetime
    duration_minutes: int
    available_credits: int | None = None
