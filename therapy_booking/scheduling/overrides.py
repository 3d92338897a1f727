"""
Date override resolution.

An override either blocks a whole date or replaces that date's generated
slots with slots built from its own custom hours. It never merges with the
weekly slots.
"""

import logging
from collections.abc import Iterable
from datetime import date

from .slots import generate_window
from .types import DEFAULT_SESSION_DURATION, CandidateSlot, Override

logger = logging.getLogger(__name__)


def select_override(overrides: Iterable[Override], target_date: date) -> Override | None:
    """Return the active override for target_date; the last one wins if several exist."""
    selected = None
    for override in overrides:
        if override.is_active and override.override_date == target_date:
            selected = override
    return selected


def is_date_blocked(override: Override | None, target_date: date) -> bool:
    return (
        override is not None
        and override.is_active
        and override.override_date == target_date
        and not override.is_available
    )


def apply_override(
    slots: list[CandidateSlot],
    override: Override | None,
    target_date: date,
    default_duration: int = DEFAULT_SESSION_DURATION,
) -> list[CandidateSlot]:
    if override is None or not override.is_active or override.override_date != target_date:
        return slots

    if not override.is_available:
        return []

    if not override.has_custom_hours:
        return slots

    try:
        return generate_window(
            target_date,
            override.start_time,
            override.end_time,
            override.session_duration or default_duration,
            session_type=override.session_type or "individual",
            is_override=True,
        )
    except (ValueError, TypeError) as e:
        logger.warning(
            "Override for %s has malformed hours, no slots offered: %s",
            target_date.isoformat(),
            e,
        )
        return []
