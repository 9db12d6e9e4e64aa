# barbershop/routers/providers_routes.py

import logging
from datetime import date as Date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlmodel import Session, select

from barbershop.auth import get_current_user
from barbershop.config import settings
from barbershop.db import get_session
from barbershop.deps import get_provider_or_404, get_service_or_404, require_capability
from barbershop.models import (
    ScheduleOverride as ScheduleOverrideModel,
    TimeOff as TimeOffModel,
    User,
    WeeklySchedule as WeeklyScheduleModel,
)
from barbershop.policy import Capability, Role
from barbershop.repository import load_day_context
from barbershop.scheduling.slots import generate_slots
from barbershop.schemas import (
    AvailabilityResponse,
    DayScheduleIn,
    OverrideIn,
    OverridePublic,
    TimeOffCreate,
    TimeOffPublic,
    UserPublic,
    WeeklySchedulePublic,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/providers",
    tags=["providers"],
)


@router.get("", response_model=List[UserPublic])
def list_providers(session: Session = Depends(get_session)):
    return session.exec(
        select(User).where(User.role == Role.provider.value).order_by(User.id)
    ).all()


# --- weekly schedule ---

@router.put("/{provider_id}/schedule/{weekday}", response_model=WeeklySchedulePublic)
def put_weekly_schedule(
    provider_id: int,
    schedule: DayScheduleIn,
    weekday: int = Path(ge=0, le=6),
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_capability(current_user, Capability.manage_schedule, provider_id)
    get_provider_or_404(session, provider_id)

    # DB upsert: one entry per provider + weekday
    db_schedule = session.exec(
        select(WeeklyScheduleModel)
        .where(WeeklyScheduleModel.provider_id == provider_id)
        .where(WeeklyScheduleModel.weekday == weekday)
    ).first()
    if db_schedule is None:
        db_schedule = WeeklyScheduleModel(provider_id=provider_id, weekday=weekday)

    for field, value in schedule.model_dump().items():
        setattr(db_schedule, field, value)

    session.add(db_schedule)
    session.commit()
    session.refresh(db_schedule)
    logger.info("Provider %s weekday %s schedule updated", provider_id, weekday)
    return db_schedule


@router.get("/{provider_id}/schedule", response_model=List[WeeklySchedulePublic])
def get_weekly_schedule(
    provider_id: int,
    session: Session = Depends(get_session),
):
    get_provider_or_404(session, provider_id)
    return session.exec(
        select(WeeklyScheduleModel)
        .where(WeeklyScheduleModel.provider_id == provider_id)
        .order_by(WeeklyScheduleModel.weekday)
    ).all()


# --- time off ---

@router.post("/{provider_id}/time-off", response_model=TimeOffPublic, status_code=201)
def add_time_off(
    provider_id: int,
    time_off: TimeOffCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_capability(current_user, Capability.manage_schedule, provider_id)
    get_provider_or_404(session, provider_id)

    db_time_off = TimeOffModel(
        provider_id=provider_id,
        date=time_off.date,
        kind=time_off.kind.value,
        start_time=time_off.start_time,
        end_time=time_off.end_time,
        reason=time_off.reason,
    )
    session.add(db_time_off)
    session.commit()
    session.refresh(db_time_off)
    logger.info("Provider %s time off added for %s (%s)", provider_id, time_off.date, time_off.kind.value)
    return db_time_off


@router.get("/{provider_id}/time-off", response_model=List[TimeOffPublic])
def list_time_off(
    provider_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_capability(current_user, Capability.manage_schedule, provider_id)
    return session.exec(
        select(TimeOffModel)
        .where(TimeOffModel.provider_id == provider_id)
        .order_by(TimeOffModel.date)
    ).all()


@router.delete("/{provider_id}/time-off/{time_off_id}", status_code=204)
def delete_time_off(
    provider_id: int,
    time_off_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_capability(current_user, Capability.manage_schedule, provider_id)
    db_time_off = session.get(TimeOffModel, time_off_id)
    if db_time_off is None or db_time_off.provider_id != provider_id:
        raise HTTPException(status_code=404, detail="Time off not found")
    session.delete(db_time_off)
    session.commit()


# --- date overrides ---

def _get_override(session: Session, provider_id: int, day: Date) -> Optional[ScheduleOverrideModel]:
    return session.exec(
        select(ScheduleOverrideModel)
        .where(ScheduleOverrideModel.provider_id == provider_id)
        .where(ScheduleOverrideModel.date == day)
    ).first()


@router.put("/{provider_id}/overrides/{day}", response_model=OverridePublic)
def put_override(
    provider_id: int,
    day: Date,
    override: OverrideIn,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_capability(current_user, Capability.manage_schedule, provider_id)
    get_provider_or_404(session, provider_id)

    db_override = _get_override(session, provider_id, day)
    if db_override is None:
        db_override = ScheduleOverrideModel(provider_id=provider_id, date=day)

    for field, value in override.model_dump().items():
        setattr(db_override, field, value)

    session.add(db_override)
    session.commit()
    session.refresh(db_override)
    logger.info("Provider %s override set for %s", provider_id, day)
    return db_override


@router.get("/{provider_id}/overrides", response_model=List[OverridePublic])
def list_overrides(
    provider_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_capability(current_user, Capability.manage_schedule, provider_id)
    return session.exec(
        select(ScheduleOverrideModel)
        .where(ScheduleOverrideModel.provider_id == provider_id)
        .order_by(ScheduleOverrideModel.date)
    ).all()


@router.delete("/{provider_id}/overrides/{day}", status_code=204)
def delete_override(
    provider_id: int,
    day: Date,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_capability(current_user, Capability.manage_schedule, provider_id)
    db_override = _get_override(session, provider_id, day)
    if db_override is None:
        raise HTTPException(status_code=404, detail="Override not found")
    session.delete(db_override)
    session.commit()


# --- availability ---

@router.get("/{provider_id}/availability", response_model=AvailabilityResponse)
def provider_availability(
    provider_id: int,
    date: Date,
    service_id: Optional[int] = None,
    session: Session = Depends(get_session),
):
    get_provider_or_404(session, provider_id)

    duration = None
    if service_id is not None:
        duration = get_service_or_404(session, service_id).duration_minutes

    context = load_day_context(session, provider_id, date)
    slots = generate_slots(
        context,
        granularity_minutes=settings.slot_minutes,
        duration_minutes=duration,
    )

    return {
        "provider_id": provider_id,
        "date": date,
        "granularity_minutes": settings.slot_minutes,
        "service_id": service_id,
        "available_starts": [slot.strftime("%H:%M") for slot in slots],
    }
