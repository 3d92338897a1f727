"""
Schedule normalization

Availability is stored in two shapes: the weekly JSON document written by the
availability editor (camelCase, named days) and the older per-day template
rows (Sunday-first day_of_week). Both are turned into one WeeklySchedule here
so slot generation has a single input model.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .timeutils import day_index
from .types import (
    DEFAULT_SESSION_DURATION,
    DayAvailability,
    GeneralHours,
    SessionSettings,
    TimeSlotTemplate,
    WeeklySchedule,
)

logger = logging.getLogger(__name__)

# Monday to Friday enabled, no hours configured
_DEFAULT_ENABLED_DAYS = (1, 2, 3, 4, 5)


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _get(row: Any, field: str, default: Any = None) -> Any:
    if isinstance(row, Mapping):
        return row.get(field, default)
    return getattr(row, field, default)


def default_schedule(session_duration: int = DEFAULT_SESSION_DURATION, timezone: str = "UTC") -> WeeklySchedule:
    return WeeklySchedule(
        days={i: DayAvailability(enabled=i in _DEFAULT_ENABLED_DAYS) for i in range(7)},
        session_settings=SessionSettings(session_duration=session_duration),
        timezone=timezone,
    )


def _session_settings(data: Mapping[str, Any] | None, fallback_duration: int) -> SessionSettings:
    if not data:
        return SessionSettings(session_duration=fallback_duration)
    defaults = SessionSettings()
    return SessionSettings(
        session_duration=_pick(data, "sessionDuration", "session_duration", default=fallback_duration),
        advance_booking_days=_pick(data, "advanceBookingDays", "advance_booking_days", default=defaults.advance_booking_days),
    )


def _time_slot(data: Mapping[str, Any]) -> TimeSlotTemplate | None:
    start = _pick(data, "start", "start_time")
    end = _pick(data, "end", "end_time")
    if not start or not end:
        return None
    if _pick(data, "isAvailable", "is_available", default=True) is False:
        return None
    return TimeSlotTemplate(
        start=start,
        end=end,
        type=_pick(data, "type", "session_type", default="available"),
        duration=_pick(data, "duration", "session_duration"),
    )


def _day_from_document(data: Mapping[str, Any]) -> DayAvailability:
    general = _pick(data, "generalHours", "general_hours")
    custom_slots = _pick(data, "customSlots", "custom_slots", default=[])
    time_slots = _pick(data, "timeSlots", "time_slots", default=[])

    # Custom slots set by the therapist replace the day's general hours.
    if custom_slots:
        general = None
        time_slots = custom_slots

    general_hours = None
    if general:
        general_hours = GeneralHours(
            start=_pick(general, "start", "start_time"),
            end=_pick(general, "end", "end_time"),
            session_duration=_pick(general, "sessionDuration", "session_duration"),
        )

    return DayAvailability(
        enabled=bool(_pick(data, "enabled", default=False)),
        general_hours=general_hours,
        time_slots=[slot for slot in (_time_slot(s) for s in time_slots) if slot is not None],
    )


def schedule_from_document(
    document: Mapping[str, Any],
    fallback_duration: int = DEFAULT_SESSION_DURATION,
    fallback_timezone: str = "UTC",
) -> WeeklySchedule:
    """Build a WeeklySchedule from the stored weekly availability JSON document."""
    standard_hours = _pick(document, "standardHours", "standard_hours", default={})
    days: dict[int, DayAvailability] = {}
    for name, day_data in standard_hours.items():
        try:
            index = day_index(name)
        except ValueError:
            logger.warning("Ignoring unknown day %r in weekly availability", name)
            continue
        if isinstance(day_data, Mapping):
            days[index] = _day_from_document(day_data)

    return WeeklySchedule(
        days=days,
        session_settings=_session_settings(
            _pick(document, "sessionSettings", "session_settings"), fallback_duration
        ),
        timezone=_pick(document, "timezone", default=fallback_timezone),
    )


def schedule_from_templates(
    templates: Iterable[Any],
    fallback_duration: int = DEFAULT_SESSION_DURATION,
    timezone: str = "UTC",
) -> WeeklySchedule:
    """
    Build a WeeklySchedule from legacy availability template rows.

    Rows may be mappings or ORM objects with day_of_week, start_time,
    end_time, session_duration, session_type and is_active. A weekday is
    enabled when it has at least one active row.
    """
    days: dict[int, DayAvailability] = {i: DayAvailability(enabled=False) for i in range(7)}
    for row in templates:
        if _get(row, "is_active", True) is False:
            continue
        index = _get(row, "day_of_week")
        if index is None or not 0 <= int(index) <= 6:
            logger.warning("Ignoring availability template with day_of_week=%r", index)
            continue
        if _get(row, "start_time") is None or _get(row, "end_time") is None:
            logger.warning("Ignoring availability template without start/end time")
            continue
        day = days[int(index)]
        day.enabled = True
        day.time_slots.append(
            TimeSlotTemplate(
                start=_get(row, "start_time"),
                end=_get(row, "end_time"),
                type=_get(row, "session_type") or "individual",
                duration=_get(row, "session_duration"),
            )
        )

    return WeeklySchedule(
        days=days,
        session_settings=SessionSettings(session_duration=fallback_duration),
        timezone=timezone,
    )
