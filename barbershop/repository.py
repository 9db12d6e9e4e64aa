# barbershop/repository.py

from datetime import date as Date

from sqlmodel import Session, select

from barbershop.models import (
    Booking,
    ScheduleOverride as ScheduleOverrideModel,
    TimeOff as TimeOffModel,
    WeeklySchedule as WeeklyScheduleModel,
)
from barbershop.scheduling.types import (
    BookedInterval,
    DayContext,
    DaySchedule,
    ScheduleOverride,
    TimeOff,
)


def _day_schedule(row) -> DaySchedule:
    return DaySchedule(
        is_open=row.is_open,
        start=row.start_time,
        end=row.end_time,
        break_start=row.break_start,
        break_end=row.break_end,
        buffer_minutes=row.buffer_minutes,
    )


def load_day_context(session: Session, provider_id: int, day: Date) -> DayContext:
    """Load every row the scheduling engine needs for one provider and date."""
    weekly_rows = session.exec(
        select(WeeklyScheduleModel)
        .where(WeeklyScheduleModel.provider_id == provider_id)
    ).all()

    override_rows = session.exec(
        select(ScheduleOverrideModel)
        .where(ScheduleOverrideModel.provider_id == provider_id)
        .where(ScheduleOverrideModel.date == day)
    ).all()

    time_off_rows = session.exec(
        select(TimeOffModel)
        .where(TimeOffModel.provider_id == provider_id)
        .where(TimeOffModel.date == day)
    ).all()

    booking_rows = session.exec(
        select(Booking)
        .where(Booking.provider_id == provider_id)
        .where(Booking.date == day)
    ).all()

    return DayContext(
        provider_id=provider_id,
        date=day,
        weekly={row.weekday: _day_schedule(row) for row in weekly_rows},
        overrides=[
            ScheduleOverride(date=row.date, schedule=_day_schedule(row), reason=row.reason)
            for row in override_rows
        ],
        time_off=[
            TimeOff(
                date=row.date,
                kind=row.kind,
                start=row.start_time,
                end=row.end_time,
                reason=row.reason,
            )
            for row in time_off_rows
        ],
        bookings=[
            BookedInterval(
                start_time=row.start_time,
                end_time=row.end_time,
                status=row.status,
                booking_id=row.id,
            )
            for row in booking_rows
        ],
    )
