# barbershop/booking_service.py

import logging
from datetime import date as Date, time
from typing import Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Session

from barbershop.lifecycle import transition
from barbershop.models import Booking, Service
from barbershop.repository import load_day_context
from barbershop.scheduling.conflicts import validate_booking
from barbershop.scheduling.types import BookingCheck, BookingStatus, RejectionReason

logger = logging.getLogger(__name__)


class BookingRejected(Exception):
    def __init__(self, check: BookingCheck):
        self.check = check
        super().__init__(check.message)

    @property
    def reason(self) -> RejectionReason:
        return self.check.reason


def _recheck_excluding(session: Session, booking: Booking, duration_minutes: int) -> BookingCheck:
    """Run the validator again against the latest state, ignoring ``booking`` itself."""
    context = load_day_context(session, booking.provider_id, booking.date)
    context.bookings = [b for b in context.bookings if b.booking_id != booking.id]
    return validate_booking(context, booking.start_time, duration_minutes)


def create_booking(
    session: Session,
    provider_id: int,
    customer_id: int,
    service: Service,
    day: Date,
    start_time: time,
    notes: Optional[str] = None,
) -> Booking:
    """
    Validate and persist a new confirmed booking in one transaction.

    Steps:
        1. Load the day's schedule rows and bookings, run validate_booking
        2. Insert and flush the new row (takes the write lock)
        3. Re-run validate_booking against the now-current rows, excluding
           the new one; roll back if another booking got there first
        4. Commit

    Raises BookingRejected with the rejection reason.
    """
    context = load_day_context(session, provider_id, day)
    check = validate_booking(context, start_time, service.duration_minutes)
    if not check.ok:
        logger.info(
            "Booking rejected for provider %s on %s at %s: %s",
            provider_id, day, start_time, check.reason.value,
        )
        raise BookingRejected(check)

    booking = Booking(
        provider_id=provider_id,
        customer_id=customer_id,
        service_id=service.id,
        date=day,
        start_time=start_time,
        end_time=check.end_time,
        status=BookingStatus.confirmed.value,
        payment_status="pending" if service.deposit_required else "paid",
        total_amount=service.price,
        deposit_amount=service.deposit_amount if service.deposit_required else None,
        notes=notes,
    )
    session.add(booking)

    try:
        session.flush()
        recheck = _recheck_excluding(session, booking, service.duration_minutes)
        if not recheck.ok:
            session.rollback()
            logger.warning(
                "Booking for provider %s on %s at %s lost a race: %s",
                provider_id, day, start_time, recheck.reason.value,
            )
            raise BookingRejected(recheck)
        session.commit()
    except (IntegrityError, OperationalError):
        session.rollback()
        logger.warning(
            "Booking for provider %s on %s at %s rejected by the database",
            provider_id, day, start_time,
        )
        raise BookingRejected(BookingCheck.rejected(RejectionReason.slot_taken))

    session.refresh(booking)
    logger.info(
        "Booking %s confirmed: provider %s on %s %s-%s",
        booking.id, provider_id, day, booking.start_time, booking.end_time,
    )
    return booking


def update_booking_status(session: Session, booking: Booking, requested: BookingStatus) -> Booking:
    """Apply a lifecycle transition; raises IllegalTransition when not allowed."""
    previous = booking.status
    booking.status = transition(previous, requested).value
    session.add(booking)
    session.commit()
    session.refresh(booking)
    logger.info("Booking %s moved from %s to %s", booking.id, previous, booking.status)
    return booking
