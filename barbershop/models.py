# barbershop/models.py

from typing import Optional
from datetime import datetime, date as Date, time

from sqlalchemy import Index, UniqueConstraint, text
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    full_name: Optional[str] = None
    role: str  # admin, provider or customer


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    duration_minutes: int
    price: float
    deposit_required: bool = False
    deposit_amount: Optional[float] = None
    is_active: bool = True


class WeeklySchedule(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("provider_id", "weekday", name="uq_provider_weekday"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    provider_id: int = Field(foreign_key="user.id", index=True)
    weekday: int  # 0=Mon ... 6=Sun
    is_open: bool = True
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_start: Optional[time] = None
    break_end: Optional[time] = None
    buffer_minutes: int = 0


class ScheduleOverride(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("provider_id", "date", name="uq_provider_override_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    provider_id: int = Field(foreign_key="user.id", index=True)
    date: Date = Field(index=True)
    is_open: bool = True
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_start: Optional[time] = None
    break_end: Optional[time] = None
    buffer_minutes: int = 0
    reason: str = ""


class TimeOff(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    provider_id: int = Field(foreign_key="user.id", index=True)
    date: Date = Field(index=True)
    kind: str  # "full_day" or "partial"
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    reason: str = ""


class Booking(SQLModel, table=True):
    # Two active bookings can never share a start; overlap beyond that is
    # re-checked inside the insert transaction
    __table_args__ = (
        Index(
            "uq_active_booking_start",
            "provider_id", "date", "start_time",
            unique=True,
            sqlite_where=text("status IN ('confirmed', 'checked_in')"),
            postgresql_where=text("status IN ('confirmed', 'checked_in')"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    provider_id: int = Field(foreign_key="user.id", index=True)
    customer_id: int = Field(foreign_key="user.id", index=True)
    service_id: int = Field(foreign_key="service.id")

    date: Date = Field(index=True)
    start_time: time
    end_time: time
    status: str = "confirmed"
    payment_status: str = "paid"
    total_amount: float = 0.0
    deposit_amount: Optional[float] = None
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
