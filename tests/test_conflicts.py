"""Tests for the booking conflict validator."""

from datetime import time

import pytest

from barbershop.scheduling.conflicts import validate_booking
from barbershop.scheduling.overlap import overlaps
from barbershop.scheduling.types import (
    BookedInterval,
    DaySchedule,
    InvalidInput,
    RejectionReason,
    ScheduleOverride,
    TimeOff,
)
from conftest import MONDAY, SUNDAY, make_context, standard_day, t


@pytest.fixture
def busy_monday():
    return make_context(MONDAY, bookings=[BookedInterval(t("10:00"), t("10:45"), "confirmed")])


class TestExistingBookings:
    def test_overlapping_start_is_taken(self, busy_monday):
        result = validate_booking(busy_monday, t("10:30"), 30)
        assert not result.ok
        assert result.reason == RejectionReason.slot_taken

    def test_touching_start_is_free(self, busy_monday):
        result = validate_booking(busy_monday, t("10:45"), 30)
        assert result.ok
        assert result.end_time == t("11:15")

    def test_booking_ending_at_existing_start_is_free(self, busy_monday):
        assert validate_booking(busy_monday, t("09:30"), 30).ok

    def test_long_service_running_into_booking(self, busy_monday):
        result = validate_booking(busy_monday, t("09:30"), 45)
        assert result.reason == RejectionReason.slot_taken

    @pytest.mark.parametrize("status", ["cancelled", "no_show", "completed"])
    def test_inactive_bookings_do_not_conflict(self, status):
        context = make_context(MONDAY, bookings=[BookedInterval(t("10:00"), t("10:45"), status)])
        assert validate_booking(context, t("10:00"), 45).ok

    def test_checked_in_conflicts(self):
        context = make_context(MONDAY, bookings=[BookedInterval(t("10:00"), t("10:45"), "checked_in")])
        assert validate_booking(context, t("10:15"), 15).reason == RejectionReason.slot_taken

    def test_buffer_extends_existing_booking(self):
        context = make_context(
            MONDAY,
            weekly={0: standard_day(buffer_minutes=15)},
            bookings=[BookedInterval(t("10:00"), t("10:45"))],
        )
        assert validate_booking(context, t("10:45"), 30).reason == RejectionReason.slot_taken
        assert validate_booking(context, t("11:00"), 30).ok

    def test_buffer_keeps_gap_before_existing_booking(self):
        context = make_context(
            MONDAY,
            weekly={0: standard_day(buffer_minutes=15)},
            bookings=[BookedInterval(t("10:00"), t("10:30"))],
        )
        assert validate_booking(context, t("09:30"), 30).reason == RejectionReason.slot_taken
        result = validate_booking(context, t("09:15"), 30)
        assert result.ok
        assert result.end_time == t("09:45")

    @pytest.mark.parametrize(
        "existing, candidate",
        [
            (("09:30", "10:00"), "10:00"),
            (("10:00", "10:30"), "09:30"),
        ],
    )
    def test_buffer_does_not_depend_on_booking_order(self, existing, candidate):
        context = make_context(
            MONDAY,
            weekly={0: standard_day(buffer_minutes=15)},
            bookings=[BookedInterval(t(existing[0]), t(existing[1]))],
        )
        assert validate_booking(context, t(candidate), 30).reason == RejectionReason.slot_taken


class TestWorkingHours:
    def test_before_open(self):
        result = validate_booking(make_context(MONDAY), t("08:30"), 30)
        assert result.reason == RejectionReason.outside_hours

    def test_running_past_close(self):
        result = validate_booking(make_context(MONDAY), t("17:45"), 30)
        assert result.reason == RejectionReason.outside_hours

    def test_ending_exactly_at_close(self):
        assert validate_booking(make_context(MONDAY), t("17:30"), 30).ok

    def test_running_past_midnight(self):
        weekly = {0: DaySchedule(is_open=True, start=t("18:00"), end=t("23:30"))}
        result = validate_booking(make_context(MONDAY, weekly=weekly), t("23:00"), 120)
        assert result.reason == RejectionReason.outside_hours

    def test_break(self):
        result = validate_booking(make_context(MONDAY), t("11:45"), 30)
        assert result.reason == RejectionReason.on_break

    def test_closed_day(self):
        result = validate_booking(make_context(SUNDAY), t("10:00"), 30)
        assert result.reason == RejectionReason.provider_unavailable

    def test_override_hours_are_used(self):
        override = DaySchedule(is_open=True, start=t("10:00"), end=t("14:00"))
        context = make_context(SUNDAY, overrides=[ScheduleOverride(date=SUNDAY, schedule=override)])
        assert validate_booking(context, t("10:00"), 30).ok
        assert validate_booking(context, t("13:45"), 30).reason == RejectionReason.outside_hours


class TestTimeOff:
    def test_full_day(self):
        context = make_context(MONDAY, time_off=[TimeOff(date=MONDAY, kind="full_day")])
        result = validate_booking(context, t("10:00"), 30)
        assert result.reason == RejectionReason.provider_unavailable

    def test_partial_overlap(self):
        context = make_context(
            MONDAY,
            time_off=[TimeOff(date=MONDAY, kind="partial", start=t("14:00"), end=t("16:00"))],
        )
        assert validate_booking(context, t("13:45"), 30).reason == RejectionReason.provider_unavailable
        assert validate_booking(context, t("13:30"), 30).ok
        assert validate_booking(context, t("16:00"), 30).ok


class TestInvalidInput:
    @pytest.mark.parametrize("duration", [0, -30, None])
    def test_non_positive_duration(self, duration):
        with pytest.raises(InvalidInput):
            validate_booking(make_context(MONDAY), t("10:00"), duration)

    def test_booking_with_reversed_window(self):
        with pytest.raises(InvalidInput):
            BookedInterval(t("11:00"), t("10:00"))

    @pytest.mark.parametrize("start", [time(10, 0, 45), time(10, 0, 0, 500)])
    def test_start_with_seconds_is_invalid(self, start):
        with pytest.raises(InvalidInput):
            validate_booking(make_context(MONDAY), start, 30)

    def test_booking_with_seconds_is_invalid(self):
        with pytest.raises(InvalidInput):
            BookedInterval(t("10:00"), time(10, 30, 15))


def test_accepted_bookings_never_overlap():
    """Greedily book every 15 minutes with mixed durations; nothing accepted may overlap."""
    context = make_context(MONDAY)
    durations = [20, 30, 45, 75]
    accepted = []

    for index, minute in enumerate(range(8 * 60, 19 * 60, 15)):
        start = t(f"{minute // 60:02d}:{minute % 60:02d}")
        result = validate_booking(context, start, durations[index % len(durations)])
        if result.ok:
            booking = BookedInterval(start, result.end_time)
            context.bookings.append(booking)
            accepted.append(booking)

    assert len(accepted) > 1
    for i, a in enumerate(accepted):
        for b in accepted[i + 1:]:
            assert not overlaps(a.start_time, a.end_time, b.start_time, b.end_time)
