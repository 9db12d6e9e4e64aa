# barbershop/db.py

from typing import Optional

from sqlmodel import SQLModel, Session, create_engine

from barbershop.config import settings


def isolation_level_for(url: str, configured: Optional[str] = None) -> Optional[str]:
    # SQLite serializes writers itself; other servers need SERIALIZABLE so
    # the post-insert overlap recheck sees concurrent bookings
    if configured:
        return configured
    if url.startswith("sqlite"):
        return None
    return "SERIALIZABLE"


def build_engine(url: str = settings.database_url, **kwargs):
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False  # required for SQLite + FastAPI
    isolation_level = isolation_level_for(url, settings.database_isolation_level)
    if isolation_level:
        kwargs.setdefault("isolation_level", isolation_level)
    return create_engine(
        url,
        echo=settings.database_echo,
        connect_args=connect_args,
        **kwargs,
    )


# Engine = connection to the database
engine = build_engine()


def create_db_and_tables(bind=None):
    # models must be imported so their tables are registered on the metadata
    from barbershop import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
