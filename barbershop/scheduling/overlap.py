# barbershop/scheduling/overlap.py

from datetime import time


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    """Half-open interval overlap: [a_start, a_end) vs [b_start, b_end).

    Touching intervals (a_end == b_start) do not overlap.
    Works for anything comparable: minutes, time, datetime.
    """
    return a_start < b_end and b_start < a_end


def to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def from_minutes(minutes: int) -> time:
    if not (0 <= minutes < 24 * 60):
        raise ValueError(f"{minutes} minutes is outside a single day")
    return time(hour=minutes // 60, minute=minutes % 60)
