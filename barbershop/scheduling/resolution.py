# barbershop/scheduling/resolution.py

from dataclasses import dataclass
from datetime import time
from typing import Optional, Tuple

from .types import DayContext, DaySchedule, TimeOffKind


# Where the effective schedule came from
SOURCE_TIME_OFF = "time_off"
SOURCE_OVERRIDE = "override"
SOURCE_WEEKLY = "weekly"
SOURCE_NONE = "none"


@dataclass(frozen=True)
class EffectiveSchedule:
    is_open: bool
    source: str
    start: Optional[time] = None
    end: Optional[time] = None
    break_start: Optional[time] = None
    break_end: Optional[time] = None
    buffer_minutes: int = 0
    # partial time-off windows, half-open
    blocked: Tuple[Tuple[time, time], ...] = ()

    @property
    def has_break(self) -> bool:
        return self.break_start is not None and self.break_end is not None


def _closed(source: str) -> EffectiveSchedule:
    return EffectiveSchedule(is_open=False, source=source)


def _from_day_schedule(schedule: DaySchedule, source: str, blocked) -> EffectiveSchedule:
    if not schedule.is_open:
        return _closed(source)
    return EffectiveSchedule(
        is_open=True,
        source=source,
        start=schedule.start,
        end=schedule.end,
        break_start=schedule.break_start,
        break_end=schedule.break_end,
        buffer_minutes=schedule.buffer_minutes,
        blocked=blocked,
    )


def resolve_effective_schedule(context: DayContext) -> EffectiveSchedule:
    """Resolve one date's working hours. First match wins:

    1. full day time off -> closed
    2. schedule override -> override verbatim (may itself be closed)
    3. weekly entry missing or closed -> closed
    4. weekly entry open -> template hours

    Partial time off windows are attached as ``blocked`` to whichever
    schedule ends up open.
    """
    time_off = context.time_off_for_day()
    if any(t.kind == TimeOffKind.full_day for t in time_off):
        return _closed(SOURCE_TIME_OFF)

    blocked = tuple(
        sorted((t.start, t.end) for t in time_off if t.kind == TimeOffKind.partial)
    )

    override = context.override_for_day()
    if override is not None:
        return _from_day_schedule(override.schedule, SOURCE_OVERRIDE, blocked)

    weekly = context.weekly.get(context.date.weekday())
    if weekly is None:
        return _closed(SOURCE_NONE)
    return _from_day_schedule(weekly, SOURCE_WEEKLY, blocked)
