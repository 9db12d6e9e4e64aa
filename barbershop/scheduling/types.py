# barbershop/scheduling/types.py

from dataclasses import dataclass, field
from datetime import date as Date, time
from enum import Enum
from typing import Dict, List, Optional


class InvalidInput(ValueError):
    """Caller contract violation (bad window, bad duration, unknown id)."""


def require_whole_minutes(**values: Optional[time]) -> None:
    """Raise InvalidInput for any clock time carrying seconds or microseconds."""
    for name, value in values.items():
        if value is not None and (value.second or value.microsecond):
            raise InvalidInput(f"{name} must be a whole minute, got {value.isoformat()}")


class BookingStatus(str, Enum):
    confirmed = "confirmed"
    checked_in = "checked_in"
    completed = "completed"
    cancelled = "cancelled"
    no_show = "no_show"


# Only these statuses occupy the provider's time
ACTIVE_STATUSES = frozenset({BookingStatus.confirmed, BookingStatus.checked_in})


class TimeOffKind(str, Enum):
    full_day = "full_day"
    partial = "partial"


class RejectionReason(str, Enum):
    outside_hours = "OutsideHours"
    on_break = "OnBreak"
    provider_unavailable = "ProviderUnavailable"
    slot_taken = "SlotTaken"


REJECTION_MESSAGES = {
    RejectionReason.outside_hours: "Requested time is outside working hours",
    RejectionReason.on_break: "Requested time overlaps the provider's break",
    RejectionReason.provider_unavailable: "Provider is unavailable at the requested time",
    RejectionReason.slot_taken: "Requested time overlaps an existing booking",
}


@dataclass(frozen=True)
class DaySchedule:
    """One day's working hours. Used for weekly entries and overrides."""

    is_open: bool
    start: Optional[time] = None
    end: Optional[time] = None
    break_start: Optional[time] = None
    break_end: Optional[time] = None
    buffer_minutes: int = 0

    def __post_init__(self):
        if self.buffer_minutes < 0:
            raise InvalidInput("buffer_minutes cannot be negative")
        require_whole_minutes(
            start=self.start, end=self.end, break_start=self.break_start, break_end=self.break_end
        )
        if (self.break_start is None) != (self.break_end is None):
            raise InvalidInput("break_start and break_end must be set together")
        if not self.is_open:
            return
        if self.start is None or self.end is None:
            raise InvalidInput("an open day needs start and end")
        if self.start >= self.end:
            raise InvalidInput("start must be before end")
        if self.has_break and not (self.start <= self.break_start < self.break_end <= self.end):
            raise InvalidInput("break must lie within working hours and start before it ends")

    @property
    def has_break(self) -> bool:
        return self.break_start is not None and self.break_end is not None


@dataclass(frozen=True)
class TimeOff:
    date: Date
    kind: TimeOffKind
    start: Optional[time] = None
    end: Optional[time] = None
    reason: str = ""

    def __post_init__(self):
        object.__setattr__(self, "kind", TimeOffKind(self.kind))
        require_whole_minutes(start=self.start, end=self.end)
        if self.kind == TimeOffKind.partial:
            if self.start is None or self.end is None:
                raise InvalidInput("partial time off needs start and end")
            if self.start >= self.end:
                raise InvalidInput("time off start must be before end")
        elif self.start is not None or self.end is not None:
            raise InvalidInput("full day time off cannot carry start/end")


@dataclass(frozen=True)
class ScheduleOverride:
    date: Date
    schedule: DaySchedule
    reason: str = ""


@dataclass(frozen=True)
class BookedInterval:
    """An existing booking as seen by the engine."""

    start_time: time
    end_time: time
    status: BookingStatus = BookingStatus.confirmed
    booking_id: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "status", BookingStatus(self.status))
        require_whole_minutes(start_time=self.start_time, end_time=self.end_time)
        if self.start_time >= self.end_time:
            raise InvalidInput("booking start_time must be before end_time")

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


@dataclass
class DayContext:
    """Rows the caller loaded for one provider on one date.

    weekly is keyed by weekday (0=Monday ... 6=Sunday). overrides and
    time_off may contain rows for other dates; the engine only looks at
    entries matching ``date``. bookings are the provider's bookings on
    ``date`` in any status.
    """

    provider_id: int
    date: Date
    weekly: Dict[int, DaySchedule] = field(default_factory=dict)
    overrides: List[ScheduleOverride] = field(default_factory=list)
    time_off: List[TimeOff] = field(default_factory=list)
    bookings: List[BookedInterval] = field(default_factory=list)

    def override_for_day(self) -> Optional[ScheduleOverride]:
        matches = [o for o in self.overrides if o.date == self.date]
        if len(matches) > 1:
            raise InvalidInput(f"more than one schedule override for {self.date}")
        return matches[0] if matches else None

    def time_off_for_day(self) -> List[TimeOff]:
        return [t for t in self.time_off if t.date == self.date]

    def active_bookings(self) -> List[BookedInterval]:
        return [b for b in self.bookings if b.is_active]


@dataclass(frozen=True)
class BookingCheck:
    """Tagged result of validate_booking: accepted with end_time, or rejected with reason."""

    reason: Optional[RejectionReason] = None
    end_time: Optional[time] = None

    @classmethod
    def accepted(cls, end_time: time) -> "BookingCheck":
        return cls(reason=None, end_time=end_time)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "BookingCheck":
        return cls(reason=reason, end_time=None)

    @property
    def ok(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> str:
        if self.reason is None:
            return "Accepted"
        return REJECTION_MESSAGES[self.reason]
