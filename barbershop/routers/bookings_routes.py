# barbershop/routers/bookings_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barbershop.auth import get_current_user
from barbershop.booking_service import BookingRejected, create_booking, update_booking_status
from barbershop.db import get_session
from barbershop.deps import get_provider_or_404, get_service_or_404, require_capability
from barbershop.lifecycle import IllegalTransition
from barbershop.models import Booking
from barbershop.policy import Capability, can
from barbershop.scheduling.types import BookingStatus
from barbershop.schemas import BookingCreate, BookingPublic, BookingStatusUpdate

router = APIRouter(
    tags=["bookings"],
)


@router.post("/providers/{provider_id}/bookings", response_model=BookingPublic, status_code=201)
def book_provider(
    provider_id: int,
    booking: BookingCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_capability(current_user, Capability.create_booking)

    # 1) Validate provider and service
    get_provider_or_404(session, provider_id)
    service = get_service_or_404(session, booking.service_id)

    # 2) Validate and persist in one transaction
    try:
        db_booking = create_booking(
            session,
            provider_id=provider_id,
            customer_id=current_user["id"],
            service=service,
            day=booking.date,
            start_time=booking.start_time,
            notes=booking.notes,
        )
    except BookingRejected as exc:
        raise HTTPException(
            status_code=409,
            detail={"reason": exc.reason.value, "message": exc.check.message},
        )

    return db_booking


@router.get("/providers/{provider_id}/bookings", response_model=List[BookingPublic])
def list_provider_bookings(
    provider_id: int,
    on_date: Optional[date] = None,
    status: Optional[BookingStatus] = None,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_capability(current_user, Capability.view_provider_bookings, provider_id)

    stmt = select(Booking).where(Booking.provider_id == provider_id)
    if on_date is not None:
        stmt = stmt.where(Booking.date == on_date)
    if status is not None:
        stmt = stmt.where(Booking.status == status.value)
    stmt = stmt.order_by(Booking.date, Booking.start_time)

    return session.exec(stmt).all()


@router.get("/customers/me/bookings", response_model=List[BookingPublic])
def list_my_bookings(
    status: Optional[BookingStatus] = None,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    stmt = select(Booking).where(Booking.customer_id == current_user["id"])
    if status is not None:
        stmt = stmt.where(Booking.status == status.value)
    stmt = stmt.order_by(Booking.date, Booking.start_time)

    return session.exec(stmt).all()


@router.patch("/bookings/{booking_id}/status", response_model=BookingPublic)
def change_booking_status(
    booking_id: int,
    update: BookingStatusUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    # 1) Find the booking in DB
    target = session.get(Booking, booking_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    # 2) Authorization: provider/admin for any transition, customer may only cancel their own
    allowed = can(current_user, Capability.update_booking_status, target.provider_id)
    if not allowed and update.status == BookingStatus.cancelled:
        allowed = (
            can(current_user, Capability.cancel_own_booking)
            and current_user["id"] == target.customer_id
        )
    if not allowed:
        raise HTTPException(status_code=403, detail="Forbidden")

    # 3) Transition and persist
    try:
        return update_booking_status(session, target, update.status)
    except IllegalTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
