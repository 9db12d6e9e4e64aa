# barbershop/deps.py

from typing import Optional

from fastapi import HTTPException
from sqlmodel import Session

from barbershop.models import Service, User
from barbershop.policy import Capability, Role, can


def require_capability(user: dict, capability: Capability, provider_id: Optional[int] = None):
    if not can(user, capability, provider_id):
        raise HTTPException(status_code=403, detail="Forbidden")


def get_provider_or_404(session: Session, provider_id: int) -> User:
    provider = session.get(User, provider_id)
    if provider is None or provider.role != Role.provider.value:
        raise HTTPException(status_code=404, detail="Provider not found")
    return provider


def get_service_or_404(session: Session, service_id: int) -> Service:
    service = session.get(Service, service_id)
    if service is None or not service.is_active:
        raise HTTPException(status_code=404, detail="Service not found")
    return service
