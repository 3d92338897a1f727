"""
Tests for scheduling/availability.py

The combined generate -> override -> conflict pipeline.
"""

from datetime import UTC, date, datetime

from therapy_booking.scheduling.availability import (
    drop_started_slots,
    slots_for_date,
    slots_for_range,
    suggest_alternatives,
)
from therapy_booking.scheduling.types import Override

from .conftest import MONDAY, SUNDAY, TUESDAY, booked, general_day, make_schedule


class TestSlotsForDate:
    def test_full_day_override_empties_date(self, monday_schedule):
        overrides = [Override(override_date=MONDAY, is_available=False)]

        assert slots_for_date(monday_schedule, MONDAY, overrides) == []

    def test_booked_session_filtered_in_available_mode(self, monday_schedule):
        sessions = [booked(datetime(2026, 10, 19, 10, 30), datetime(2026, 10, 19, 10, 45))]

        result = slots_for_date(monday_schedule, MONDAY, [], sessions)

        assert [s.start_time.hour for s in result] == [9, 11]

    def test_booked_session_marked_in_all_mode(self, monday_schedule):
        sessions = [booked(datetime(2026, 10, 19, 10, 0), datetime(2026, 10, 19, 11, 0), "confirmed")]

        result = slots_for_date(monday_schedule, MONDAY, [], sessions, "all")

        assert [s.booking_status for s in result] == ["available", "booked", "available"]

    def test_conflicts_apply_to_override_slots(self, monday_schedule):
        overrides = [Override(override_date=MONDAY, is_available=True, start_time="14:00", end_time="16:00")]
        sessions = [booked(datetime(2026, 10, 19, 14, 0), datetime(2026, 10, 19, 15, 0))]

        result = slots_for_date(monday_schedule, MONDAY, overrides, sessions)

        assert [(s.start_time.hour, s.is_override) for s in result] == [(15, True)]

    def test_uses_schedule_duration_for_override_hours(self):
        schedule = make_schedule({1: general_day("09:00", "10:00")}, duration=30)
        overrides = [Override(override_date=MONDAY, is_available=True, start_time="13:00", end_time="14:00")]

        result = slots_for_date(schedule, MONDAY, overrides)

        assert [s.session_duration for s in result] == [30, 30]


class TestSlotsForRange:
    def test_ordered_by_date_then_time(self):
        schedule = make_schedule(
            {
                1: general_day("13:00", "15:00", 60),
                2: general_day("09:00", "10:00", 60),
            }
        )

        result = slots_for_range(schedule, SUNDAY, 3)

        assert [(s.date, s.start_time.hour) for s in result] == [
            (MONDAY, 13),
            (MONDAY, 14),
            (TUESDAY, 9),
        ]

    def test_override_only_affects_its_date(self):
        schedule = make_schedule({1: general_day("09:00", "10:00", 60), 2: general_day("09:00", "10:00", 60)})
        overrides = [Override(override_date=MONDAY, is_available=False)]

        result = slots_for_range(schedule, MONDAY, 2, overrides)

        assert [s.date for s in result] == [TUESDAY]

    def test_zero_days_gives_nothing(self, monday_schedule):
        assert slots_for_range(monday_schedule, MONDAY, 0) == []


class TestDropStartedSlots:
    def test_drops_slots_inside_buffer(self, monday_schedule):
        slots = slots_for_date(monday_schedule, MONDAY)
        now = datetime(2026, 10, 19, 9, 40)

        result = drop_started_slots(slots, now, 30)

        assert [s.start_time.hour for s in result] == [11]

    def test_slot_exactly_at_buffer_is_kept(self, monday_schedule):
        slots = slots_for_date(monday_schedule, MONDAY)

        result = drop_started_slots(slots, datetime(2026, 10, 19, 9, 30), 30)

        assert [s.start_time.hour for s in result] == [10, 11]

    def test_aware_now_is_converted_to_schedule_timezone(self, monday_schedule):
        slots = slots_for_date(monday_schedule, MONDAY)
        # 13:00 UTC is 09:00 in New York
        now = datetime(2026, 10, 19, 13, 0, tzinfo=UTC)

        result = drop_started_slots(slots, now, 30, "America/New_York")

        assert [s.start_time.hour for s in result] == [10, 11]


class TestSuggestAlternatives:
    def test_conflicting_suggestions_are_dropped(self):
        start = datetime(2026, 10, 19, 10, 0)
        sessions = [
            booked(datetime(2026, 10, 19, 10, 0), datetime(2026, 10, 19, 11, 0), session_id="a"),
            booked(datetime(2026, 10, 19, 11, 0), datetime(2026, 10, 19, 12, 0), session_id="b"),
        ]

        result = suggest_alternatives(start, 60, sessions)

        assert [s["label"] for s in result] == ["Same time tomorrow (10:00)"]
        assert result[0]["time"] == datetime(2026, 10, 20, 10, 0)

    def test_all_suggestions_when_free(self):
        result = suggest_alternatives(datetime(2026, 10, 19, 10, 0), 30, [])

        assert [s["time"].strftime("%H:%M") for s in result] == ["10:30", "11:00", "10:00"]
        assert result[2]["time"].date() == date(2026, 10, 20)
