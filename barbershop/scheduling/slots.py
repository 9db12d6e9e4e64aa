# barbershop/scheduling/slots.py

from datetime import time
from typing import List, Optional

from .conflicts import booked_windows, check_interval
from .overlap import from_minutes, overlaps, to_minutes
from .resolution import resolve_effective_schedule
from .types import DayContext, InvalidInput


DEFAULT_GRANULARITY_MINUTES = 30


def generate_slots(
    context: DayContext,
    granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES,
    duration_minutes: Optional[int] = None,
) -> List[time]:
    """
    Bookable start times for one provider on one date, ascending.

    Algorithm:
        1. Resolve the effective schedule (override / time off / weekly)
        2. Walk starts from open time every granularity_minutes, keeping only
           slots that end at or before close
        3. Drop a start when its granularity window overlaps the break, a
           partial time off window or an active booking, keeping
           buffer_minutes clear on both sides of each booking
        4. If duration_minutes is given, also drop starts the booking
           validator would reject for that full duration

    The result is a hint for the UI; validate_booking is still the gate.
    """
    if granularity_minutes is None or granularity_minutes <= 0:
        raise InvalidInput("granularity_minutes must be positive")
    if duration_minutes is not None and duration_minutes <= 0:
        raise InvalidInput("duration_minutes must be positive")

    schedule = resolve_effective_schedule(context)
    if not schedule.is_open:
        return []

    busy = []
    if schedule.has_break:
        busy.append((to_minutes(schedule.break_start), to_minutes(schedule.break_end)))
    for blocked_start, blocked_end in schedule.blocked:
        busy.append((to_minutes(blocked_start), to_minutes(blocked_end)))
    buffer = schedule.buffer_minutes
    booked = booked_windows(context, buffer)

    close = to_minutes(schedule.end)
    slots = []
    current = to_minutes(schedule.start)
    while current + granularity_minutes <= close:
        slot_end = current + granularity_minutes

        if any(overlaps(current, slot_end, s, e) for s, e in busy) or any(
            overlaps(current, slot_end + buffer, s, e) for s, e in booked
        ):
            current += granularity_minutes
            continue

        if duration_minutes is not None:
            full = check_interval(schedule, context, current, current + duration_minutes)
            if not full.ok:
                current += granularity_minutes
                continue

        slots.append(from_minutes(current))
        current += granularity_minutes

    return slots
