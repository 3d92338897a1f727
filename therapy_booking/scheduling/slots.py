"""
Slot generation.

Turns a therapist's weekly schedule into the concrete, fixed-duration slots
for one calendar date. Slots inside a window are back to back; a trailing
remainder shorter than the session duration is dropped.
"""

import logging
from datetime import date

from .timeutils import day_name, day_of_week, minutes_of_day, parse_time, time_from_minutes
from .types import (
    BOOKABLE_SLOT_TYPES,
    CandidateSlot,
    DayAvailability,
    SessionSettings,
    TimeValue,
    WeeklySchedule,
)

logger = logging.getLogger(__name__)


def generate_window(
    target_date: date,
    start: TimeValue,
    end: TimeValue,
    duration: int,
    *,
    session_type: str = "individual",
    is_override: bool = False,
) -> list[CandidateSlot]:
    """
    Split [start, end) on target_date into consecutive slots of `duration` minutes.

    Raises ValueError for malformed times or a non-positive duration. An empty
    or inverted window yields no slots.
    """
    if duration is None or duration <= 0:
        raise ValueError(f"Session duration must be positive, got {duration!r}")

    start_minutes = minutes_of_day(parse_time(start))
    end_minutes = minutes_of_day(parse_time(end))
    weekday = day_of_week(target_date)

    slots: list[CandidateSlot] = []
    current = start_minutes
    while current + duration <= end_minutes:
        slots.append(
            CandidateSlot(
                date=target_date,
                day_of_week=weekday,
                start_time=time_from_minutes(current),
                end_time=time_from_minutes(current + duration),
                session_duration=duration,
                session_type=session_type,
                is_override=is_override,
            )
        )
        current += duration
    return slots


def _slots_for_day(
    day: DayAvailability, session_settings: SessionSettings, target_date: date
) -> list[CandidateSlot]:
    hours = day.general_hours
    if hours is not None and hours.start and hours.end:
        duration = hours.session_duration or session_settings.session_duration
        return generate_window(target_date, hours.start, hours.end, duration)

    slots: list[CandidateSlot] = []
    for template in day.time_slots:
        if template.type not in BOOKABLE_SLOT_TYPES:
            continue
        duration = template.duration or session_settings.session_duration
        slots.extend(generate_window(target_date, template.start, template.end, duration))
    return slots


def generate_slots(schedule: WeeklySchedule, target_date: date) -> list[CandidateSlot]:
    """
    Candidate slots for target_date from the weekly schedule.

    Disabled or missing days produce nothing. Malformed schedule data never
    raises: the day degrades to no slots and a warning is logged so the loss
    of availability is visible to operators.
    """
    weekday = day_of_week(target_date)
    day = schedule.day(weekday)
    if day is None or not day.enabled:
        return []

    try:
        slots = _slots_for_day(day, schedule.session_settings, target_date)
    except (ValueError, TypeError) as e:
        logger.warning(
            "Availability degraded to no slots for %s (%s): %s",
            target_date.isoformat(),
            day_name(weekday),
            e,
        )
        return []

    slots.sort(key=lambda s: s.start_time)
    return slots
