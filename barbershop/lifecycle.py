# barbershop/lifecycle.py

from barbershop.scheduling.types import BookingStatus


ALLOWED_TRANSITIONS = {
    BookingStatus.confirmed: {BookingStatus.checked_in, BookingStatus.cancelled, BookingStatus.no_show},
    BookingStatus.checked_in: {BookingStatus.completed, BookingStatus.cancelled},
    BookingStatus.completed: set(),
    BookingStatus.cancelled: set(),
    BookingStatus.no_show: set(),
}


class IllegalTransition(Exception):
    def __init__(self, current: BookingStatus, requested: BookingStatus):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move booking from {current.value} to {requested.value}")


def can_transition(current, requested) -> bool:
    return BookingStatus(requested) in ALLOWED_TRANSITIONS[BookingStatus(current)]


def transition(current, requested) -> BookingStatus:
    current = BookingStatus(current)
    requested = BookingStatus(requested)
    if not can_transition(current, requested):
        raise IllegalTransition(current, requested)
    return requested
