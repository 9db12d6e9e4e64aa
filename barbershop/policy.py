# barbershop/policy.py

from enum import Enum
from typing import Optional


class Role(str, Enum):
    admin = "admin"
    provider = "provider"
    customer = "customer"


class Capability(str, Enum):
    manage_schedule = "manage_schedule"
    view_provider_bookings = "view_provider_bookings"
    create_booking = "create_booking"
    update_booking_status = "update_booking_status"
    cancel_own_booking = "cancel_own_booking"


# Capabilities that only apply to the provider's own id
_PROVIDER_SCOPED = {
    Capability.manage_schedule,
    Capability.view_provider_bookings,
    Capability.update_booking_status,
}

_ROLE_CAPABILITIES = {
    Role.admin: set(Capability),
    Role.provider: _PROVIDER_SCOPED | {Capability.create_booking},
    Role.customer: {Capability.create_booking, Capability.cancel_own_booking},
}


def can(user: dict, capability: Capability, provider_id: Optional[int] = None) -> bool:
    """Single place that answers "may this user do this?".

    ``user`` is the dict returned by get_current_user. Providers only get
    provider-scoped capabilities for their own provider id.
    """
    try:
        role = Role(user["role"])
    except (KeyError, ValueError):
        return False

    if capability not in _ROLE_CAPABILITIES[role]:
        return False
    if role == Role.provider and capability in _PROVIDER_SCOPED:
        return provider_id is not None and user.get("id") == provider_id
    return True
