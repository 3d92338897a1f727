"""
Scheduling core

Pure slot computation and booking checks:
- Slot generation from weekly schedules (slots.py)
- Date overrides (overrides.py)
- Conflict detection against booked sessions (conflicts.py)
- Multi-day pipeline and alternatives (availability.py)
- Booking validation (validation.py)
- Normalization of stored schedule shapes (normalize.py)
"""

from .availability import drop_started_slots, slots_for_date, slots_for_range, suggest_alternatives
from .conflicts import filter_conflicts, find_conflicts, is_blocking, overlaps
from .normalize import default_schedule, schedule_from_document, schedule_from_templates
from .overrides import apply_override, is_date_blocked, select_override
from .slots import generate_slots, generate_window
from .types import (
    BookedSession,
    BookingRequest,
    CandidateSlot,
    DayAvailability,
    GeneralHours,
    Override,
    SessionSettings,
    TimeSlotTemplate,
    ValidationResult,
    WeeklySchedule,
)
from .validation import BookingValidator

__all__ = [
    "BookedSession",
    "BookingRequest",
    "BookingValidator",
    "CandidateSlot",
    "DayAvailability",
    "GeneralHours",
    "Override",
    "SessionSettings",
    "TimeSlotTemplate",
    "ValidationResult",
    "WeeklySchedule",
    "apply_override",
    "default_schedule",
    "drop_started_slots",
    "filter_conflicts",
    "find_conflicts",
    "generate_slots",
    "generate_window",
    "is_blocking",
    "is_date_blocked",
    "overlaps",
    "schedule_from_document",
    "schedule_from_templates",
    "select_override",
    "slots_for_date",
    "slots_for_range",
    "suggest_alternatives",
]
