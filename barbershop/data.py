# barbershop/data.py

import logging

from sqlmodel import Session, select

from barbershop.models import Service

logger = logging.getLogger(__name__)

# name -> (duration minutes, price, deposit)
DEFAULT_SERVICES = {
    "Classic Haircut": (30, 40.00, None),
    "Precision Fade": (45, 55.00, 20.00),
    "Beard Trim": (20, 25.00, None),
    "The Full Service": (75, 95.00, 30.00),
    "Hair Color & Cut": (120, 150.00, 50.00),
    "Classic Straight Razor Shave": (45, 60.00, None),
}


def seed_services(session: Session) -> int:
    """Insert the default catalog if the service table is empty."""
    if session.exec(select(Service)).first() is not None:
        return 0

    for name, (duration, price, deposit) in DEFAULT_SERVICES.items():
        session.add(
            Service(
                name=name,
                duration_minutes=duration,
                price=price,
                deposit_required=deposit is not None,
                deposit_amount=deposit,
            )
        )
    session.commit()
    logger.info("Seeded %d default services", len(DEFAULT_SERVICES))
    return len(DEFAULT_SERVICES)
