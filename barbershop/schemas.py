# barbershop/schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import date, time
from typing import List, Optional

from barbershop.policy import Role as UserRole
from barbershop.scheduling.types import (
    BookingStatus,
    DaySchedule,
    TimeOff,
    TimeOffKind,
    require_whole_minutes,
)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: Optional[str] = None
    role: UserRole


class UserCreate(BaseModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
    full_name: Optional[str] = None
    role: UserRole = UserRole.customer


class ServicePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    duration_minutes: int
    price: float
    deposit_required: bool
    deposit_amount: Optional[float] = None


class DayScheduleIn(BaseModel):
    is_open: bool = True
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_start: Optional[time] = None
    break_end: Optional[time] = None
    buffer_minutes: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_hours(self):
        # DaySchedule raises InvalidInput (a ValueError) on bad windows
        self.to_day_schedule()
        return self

    def to_day_schedule(self) -> DaySchedule:
        return DaySchedule(
            is_open=self.is_open,
            start=self.start_time,
            end=self.end_time,
            break_start=self.break_start,
            break_end=self.break_end,
            buffer_minutes=self.buffer_minutes,
        )


class WeeklySchedulePublic(DayScheduleIn):
    model_config = ConfigDict(from_attributes=True)

    weekday: int


class OverrideIn(DayScheduleIn):
    reason: str = ""


class OverridePublic(OverrideIn):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: date


class TimeOffCreate(BaseModel):
    date: date
    kind: TimeOffKind
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    reason: str = ""

    @model_validator(mode="after")
    def _check_window(self):
        TimeOff(
            date=self.date,
            kind=self.kind,
            start=self.start_time,
            end=self.end_time,
            reason=self.reason,
        )
        return self


class TimeOffPublic(TimeOffCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class AvailabilityResponse(BaseModel):
    provider_id: int
    date: date
    granularity_minutes: int
    service_id: Optional[int] = None
    available_starts: List[str]


class BookingCreate(BaseModel):
    date: date
    start_time: time
    service_id: int
    notes: Optional[str] = None

    @field_validator("start_time")
    @classmethod
    def _whole_minute(cls, value: time) -> time:
        require_whole_minutes(start_time=value)
        return value


class BookingPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    provider_id: int
    customer_id: int
    service_id: int
    date: date
    start_time: time
    end_time: time
    status: BookingStatus
    payment_status: str
    total_amount: float
    deposit_amount: Optional[float] = None
    notes: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
