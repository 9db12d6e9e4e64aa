# barbershop/scheduling/conflicts.py

import logging
from datetime import time
from typing import List, Tuple

from .overlap import from_minutes, overlaps, to_minutes
from .resolution import EffectiveSchedule, resolve_effective_schedule
from .types import BookingCheck, DayContext, InvalidInput, RejectionReason, require_whole_minutes

logger = logging.getLogger(__name__)


def booked_windows(context: DayContext, buffer_minutes: int = 0) -> List[Tuple[int, int]]:
    """Active bookings as minute windows, each end padded by the buffer.

    Compare them against a candidate whose end is padded by the same buffer,
    so the gap is kept whichever booking was made first.
    """
    return [
        (to_minutes(b.start_time), to_minutes(b.end_time) + buffer_minutes)
        for b in context.active_bookings()
    ]


def check_interval(schedule: EffectiveSchedule, context: DayContext, start: int, end: int) -> BookingCheck:
    """Check a minute window [start, end) against an already resolved schedule."""
    if not schedule.is_open:
        return BookingCheck.rejected(RejectionReason.provider_unavailable)

    if start < to_minutes(schedule.start) or end > to_minutes(schedule.end):
        return BookingCheck.rejected(RejectionReason.outside_hours)

    if schedule.has_break and overlaps(
        start, end, to_minutes(schedule.break_start), to_minutes(schedule.break_end)
    ):
        return BookingCheck.rejected(RejectionReason.on_break)

    for blocked_start, blocked_end in schedule.blocked:
        if overlaps(start, end, to_minutes(blocked_start), to_minutes(blocked_end)):
            return BookingCheck.rejected(RejectionReason.provider_unavailable)

    buffer = schedule.buffer_minutes
    for booked_start, booked_end in booked_windows(context, buffer):
        if overlaps(start, end + buffer, booked_start, booked_end):
            return BookingCheck.rejected(RejectionReason.slot_taken)

    return BookingCheck.accepted(from_minutes(end))


def validate_booking(context: DayContext, start_time: time, duration_minutes: int) -> BookingCheck:
    """Decide whether a booking of ``duration_minutes`` at ``start_time`` is free.

    Expected rejections come back as a BookingCheck with a reason; only
    malformed input raises InvalidInput.
    """
    if duration_minutes is None or duration_minutes <= 0:
        raise InvalidInput("duration_minutes must be positive")
    require_whole_minutes(start_time=start_time)

    schedule = resolve_effective_schedule(context)
    start = to_minutes(start_time)
    result = check_interval(schedule, context, start, start + duration_minutes)

    if not result.ok:
        logger.debug(
            "Provider %s %s %s+%smin rejected: %s",
            context.provider_id, context.date, start_time, duration_minutes, result.reason.value,
        )
    return result
