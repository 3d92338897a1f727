"""Wall-clock helpers shared by slot generation and conflict detection.

Days of the week are indexed Sunday-first (0 = Sunday .. 6 = Saturday), the
convention of the stored availability templates. Named-day maps are converted
with day_index / day_name and nowhere else.
"""

import logging
import re
from datetime import date, datetime, time, timedelta

import pytz

logger = logging.getLogger(__name__)

DAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def day_of_week(d: date) -> int:
    """Sunday-first weekday index for a date."""
    return (d.weekday() + 1) % 7


def day_name(index: int) -> str:
    return DAY_NAMES[index % 7]


def day_index(name: str) -> int:
    try:
        return DAY_NAMES.index(name.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown day name: {name!r}") from None


def parse_time(value: time | timedelta | str) -> time:
    """
    Convert a stored time of day to datetime.time.

    Accepts time objects, timedelta since midnight (what some drivers return
    for TIME columns) and "HH:MM" / "HH:MM:SS" strings.
    """
    if isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds())
        if not 0 <= seconds < 24 * 3600:
            raise ValueError(f"Time offset out of range: {value}")
        return (datetime.min + value).time()
    if isinstance(value, str):
        match = _TIME_RE.match(value.strip())
        if not match:
            raise ValueError(f"Invalid time format: {value!r}. Use HH:MM")
        hours, minutes, seconds = int(match[1]), int(match[2]), int(match[3] or 0)
        if hours > 23 or minutes > 59 or seconds > 59:
            raise ValueError(f"Time out of range: {value!r}")
        return time(hours, minutes, seconds)
    raise ValueError(f"Cannot convert {type(value).__name__} to time")


def parse_date(value: date | str) -> date:
    """Parse a strict YYYY-MM-DD calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value.strip()):
        raise ValueError(f"Invalid date format: {value!r}. Use YYYY-MM-DD")
    return date.fromisoformat(value.strip())


def minutes_of_day(t: time) -> int:
    return t.hour * 60 + t.minute


def time_from_minutes(minutes: int) -> time:
    if not 0 <= minutes < 24 * 60:
        raise ValueError(f"Minute offset out of range: {minutes}")
    return time(minutes // 60, minutes % 60)


def format_hhmm(t: time) -> str:
    return t.strftime("%H:%M")


def get_timezone(name: str | None) -> pytz.BaseTzInfo:
    """Resolve an IANA timezone name, falling back to UTC."""
    try:
        return pytz.timezone(name or "UTC")
    except pytz.UnknownTimeZoneError:
        logger.warning("Invalid timezone %r, using UTC", name)
        return pytz.UTC


def to_local_naive(value: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """
    Express a timestamp as naive wall-clock time in tz.

    Slots are computed as naive local times, so timezone-aware session
    timestamps are converted before comparing. Naive values are assumed to be
    local already.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)
