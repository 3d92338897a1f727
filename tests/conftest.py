from datetime import date, datetime

import pytest

from therapy_booking.scheduling.types import (
    BookedSession,
    DayAvailability,
    GeneralHours,
    Override,
    SessionSettings,
    TimeSlotTemplate,
    WeeklySchedule,
)

# 2026-10-19 is a Monday (Sunday-first index 1)
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
SUNDAY = date(2026, 10, 18)


def general_day(start: str, end: str, duration: int | None = None) -> DayAvailability:
    return DayAvailability(
        enabled=True,
        general_hours=GeneralHours(start=start, end=end, session_duration=duration),
    )


def slots_day(*windows: tuple[str, str, str]) -> DayAvailability:
    return DayAvailability(
        enabled=True,
        time_slots=[TimeSlotTemplate(start=s, end=e, type=t) for s, e, t in windows],
    )


def make_schedule(days: dict[int, DayAvailability], duration: int = 60, timezone: str = "UTC") -> WeeklySchedule:
    return WeeklySchedule(
        days=days,
        session_settings=SessionSettings(session_duration=duration),
        timezone=timezone,
    )


def booked(start: datetime, end: datetime, status: str = "scheduled", session_id: str = "s-1") -> BookedSession:
    return BookedSession(id=session_id, therapist_id="t-1", start=start, end=end, status=status)


class FakeTherapists:
    def __init__(self, therapists: dict | None = None) -> None:
        self.therapists = {"t-1": {"id": "t-1", "full_name": "Ada Okafor"}} if therapists is None else therapists
        self.calls = 0

    async def get_bookable_therapist(self, therapist_id: str):
        self.calls += 1
        return self.therapists.get(therapist_id)


class FakeSessions:
    def __init__(self, sessions: list[BookedSession] | None = None) -> None:
        self.sessions = sessions or []
        self.calls = 0

    async def list_sessions(self, therapist_id: str, start: datetime, end: datetime) -> list[BookedSession]:
        self.calls += 1
        return [s for s in self.sessions if s.therapist_id == therapist_id]


class FakeOverrides:
    def __init__(self, overrides: list[Override] | None = None) -> None:
        self.overrides = overrides or []

    async def get_override(self, therapist_id: str, target_date: date) -> Override | None:
        matches = [o for o in self.overrides if o.override_date == target_date]
        return matches[-1] if matches else None


class FakeCredits:
    def __init__(self, balances: dict[str, int] | None = None) -> None:
        self.balances = balances or {}

    async def available_credits(self, user_id: str) -> int:
        return self.balances.get(user_id, 0)


@pytest.fixture
def monday_schedule() -> WeeklySchedule:
    return make_schedule({1: general_day("09:00", "12:00", 60)})
