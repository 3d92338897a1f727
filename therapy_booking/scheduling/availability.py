"""
Availability pipeline

Combines the pieces for one or more dates:
    weekly schedule -> generate_slots -> apply_override -> filter_conflicts

Every function here works on snapshots handed in by the caller and performs
no I/O.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from .conflicts import filter_conflicts, find_conflicts
from .overrides import apply_override, select_override
from .slots import generate_slots
from .timeutils import get_timezone, to_local_naive
from .types import (
    DEFAULT_BLOCKING_STATUSES,
    BookedSession,
    CandidateSlot,
    Override,
    SlotMode,
    WeeklySchedule,
)


def slots_for_date(
    schedule: WeeklySchedule,
    target_date: date,
    overrides: Iterable[Override] = (),
    sessions: Iterable[BookedSession] = (),
    mode: SlotMode = "available",
    *,
    blocking_statuses: frozenset[str] = DEFAULT_BLOCKING_STATUSES,
) -> list[CandidateSlot]:
    slots = generate_slots(schedule, target_date)
    override = select_override(overrides, target_date)
    slots = apply_override(slots, override, target_date, schedule.session_settings.session_duration)
    return filter_conflicts(
        slots,
        sessions,
        mode,
        blocking_statuses=blocking_statuses,
        tz=get_timezone(schedule.timezone),
    )


def slots_for_range(
    schedule: WeeklySchedule,
    start_date: date,
    days: int,
    overrides: Iterable[Override] = (),
    sessions: Iterable[BookedSession] = (),
    mode: SlotMode = "available",
    *,
    blocking_statuses: frozenset[str] = DEFAULT_BLOCKING_STATUSES,
) -> list[CandidateSlot]:
    """Slots for `days` consecutive dates starting at start_date, ordered by date then start time."""
    overrides = list(overrides)
    sessions = list(sessions)
    result: list[CandidateSlot] = []
    for offset in range(max(days, 0)):
        current = start_date + timedelta(days=offset)
        result.extend(
            slots_for_date(
                schedule,
                current,
                overrides,
                sessions,
                mode,
                blocking_statuses=blocking_statuses,
            )
        )
    result.sort(key=lambda s: (s.date, s.start_time))
    return result


def drop_started_slots(
    slots: Iterable[CandidateSlot],
    now: datetime,
    buffer_minutes: int,
    timezone: str = "UTC",
) -> list[CandidateSlot]:
    """Keep only slots starting at least buffer_minutes after now."""
    cutoff = to_local_naive(now, get_timezone(timezone)) + timedelta(minutes=buffer_minutes)
    return [s for s in slots if s.start >= cutoff]


def suggest_alternatives(
    start: datetime,
    duration_minutes: int,
    sessions: Iterable[BookedSession],
    *,
    timezone: str = "UTC",
    blocking_statuses: frozenset[str] = DEFAULT_BLOCKING_STATUSES,
    exclude_session_id: str | None = None,
) -> list[dict[str, object]]:
    """
    Nearby alternatives for a conflicting request: 30 minutes later, one hour
    later and the same time tomorrow, keeping only those without conflicts.
    """
    tz = get_timezone(timezone)
    sessions = list(sessions)
    candidates = [
        (timedelta(minutes=30), "30 minutes later"),
        (timedelta(hours=1), "1 hour later"),
        (timedelta(days=1), "Same time tomorrow"),
    ]
    suggestions = []
    for offset, label in candidates:
        candidate_start = start + offset
        candidate_end = candidate_start + timedelta(minutes=duration_minutes)
        conflicts = find_conflicts(
            candidate_start,
            candidate_end,
            sessions,
            blocking_statuses=blocking_statuses,
            tz=tz,
            exclude_session_id=exclude_session_id,
        )
        if not conflicts:
            suggestions.append(
                {
                    "time": candidate_start,
                    "label": f"{label} ({candidate_start.strftime('%H:%M')})",
                }
            )
    return suggestions
