# barbershop/config.py

import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Barbershop Booking API"

    # SQLite database (file-based)
    database_url: str = "sqlite:///./barbershop.db"
    # None means SERIALIZABLE on server databases and the driver default on SQLite
    database_isolation_level: Optional[str] = None
    database_echo: bool = False

    # JWT Auth
    secret_key: str = "change-me-later"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # Availability grid
    slot_minutes: int = 30

    seed_services: bool = True
    log_level: str = "INFO"

    @field_validator("slot_minutes", "access_token_expire_minutes")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


settings = Settings()
