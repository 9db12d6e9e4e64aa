"""Shared test fixtures and helpers."""

from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select

from barbershop.auth import create_access_token
from barbershop.data import seed_services
from barbershop.db import get_session
from barbershop.main import app
from barbershop.models import Service, User
from barbershop.scheduling.types import DayContext, DaySchedule

# 2030-01-07 is a Monday
MONDAY = date(2030, 1, 7)
SUNDAY = date(2030, 1, 6)


def t(value: str) -> time:
    hour, minute = value.split(":")
    return time(int(hour), int(minute))


def standard_day(**overrides) -> DaySchedule:
    """09:00-18:00 with a 12:00-13:00 break, no buffer."""
    fields = dict(
        is_open=True,
        start=t("09:00"),
        end=t("18:00"),
        break_start=t("12:00"),
        break_end=t("13:00"),
        buffer_minutes=0,
    )
    fields.update(overrides)
    return DaySchedule(**fields)


def make_context(day: date = MONDAY, **kwargs) -> DayContext:
    """Monday-Saturday open on the standard day, Sunday closed."""
    weekly = kwargs.pop("weekly", None)
    if weekly is None:
        weekly = {weekday: standard_day() for weekday in range(6)}
        weekly[6] = DaySchedule(is_open=False)
    return DayContext(provider_id=1, date=day, weekly=weekly, **kwargs)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def services(session):
    seed_services(session)
    return {s.name: s for s in session.exec(select(Service)).all()}


def make_user(session: Session, email: str, role: str):
    """Create a user directly and return (user, auth headers)."""
    user = User(email=email, password_hash="not-used", role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    token = create_access_token({"sub": email})
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def provider(session):
    return make_user(session, "barber@shop.test", "provider")


@pytest.fixture
def other_provider(session):
    return make_user(session, "other@shop.test", "provider")


@pytest.fixture
def customer(session):
    return make_user(session, "client@shop.test", "customer")


@pytest.fixture
def admin(session):
    return make_user(session, "admin@shop.test", "admin")
