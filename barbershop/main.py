# barbershop/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session

from barbershop.config import configure_logging, settings
from barbershop.data import seed_services
from barbershop.db import create_db_and_tables, engine
from barbershop.routers import auth_routes, bookings_routes, providers_routes, services_routes, users_routes
from barbershop.scheduling.types import InvalidInput

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    create_db_and_tables()
    if settings.seed_services:
        with Session(engine) as session:
            seed_services(session)
    logger.info("%s started", settings.app_name)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.include_router(auth_routes.router)
app.include_router(users_routes.router)
app.include_router(services_routes.router)
app.include_router(providers_routes.router)
app.include_router(bookings_routes.router)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/health")
def health_check():
    return {"status": "ok"}
