"""
Conflict detection between candidate windows and booked sessions.

Intervals are half-open: a session ending at 10:00 does not conflict with a
slot starting at 10:00. Only sessions in a blocking status are considered.
"""

from collections.abc import Iterable
from datetime import datetime

import pytz

from .timeutils import to_local_naive
from .types import DEFAULT_BLOCKING_STATUSES, BookedSession, CandidateSlot, SlotMode


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    return a_start < b_end and a_end > b_start


def is_blocking(session: BookedSession, blocking_statuses: frozenset[str] = DEFAULT_BLOCKING_STATUSES) -> bool:
    return (session.status or "").lower() in blocking_statuses


def find_conflicts(
    start: datetime,
    end: datetime,
    sessions: Iterable[BookedSession],
    *,
    blocking_statuses: frozenset[str] = DEFAULT_BLOCKING_STATUSES,
    tz: pytz.BaseTzInfo = pytz.UTC,
    exclude_session_id: str | None = None,
) -> list[BookedSession]:
    """Blocking sessions overlapping [start, end). start/end are naive local times in tz."""
    conflicts = []
    for session in sessions:
        if exclude_session_id and session.id == exclude_session_id:
            continue
        if not is_blocking(session, blocking_statuses):
            continue
        if overlaps(start, end, to_local_naive(session.start, tz), to_local_naive(session.end, tz)):
            conflicts.append(session)
    return conflicts


def filter_conflicts(
    slots: list[CandidateSlot],
    sessions: Iterable[BookedSession],
    mode: SlotMode = "available",
    *,
    blocking_statuses: frozenset[str] = DEFAULT_BLOCKING_STATUSES,
    tz: pytz.BaseTzInfo = pytz.UTC,
) -> list[CandidateSlot]:
    """
    Remove ("available" mode) or mark as booked ("all" mode) every slot that
    overlaps a blocking session.
    """
    windows = [
        (to_local_naive(s.start, tz), to_local_naive(s.end, tz))
        for s in sessions
        if is_blocking(s, blocking_statuses)
    ]

    result = []
    for slot in slots:
        booked = any(overlaps(slot.start, slot.end, b_start, b_end) for b_start, b_end in windows)
        if not booked:
            result.append(slot)
        elif mode == "all":
            result.append(slot.model_copy(update={"is_available": False, "booking_status": "booked"}))
    return result
