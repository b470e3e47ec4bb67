# barberflow/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session

from barberflow.config import settings
from barberflow.data import seed_defaults
from barberflow.db import create_db_and_tables, engine
from barberflow.errors import SchedulingError
from barberflow.logging_config import setup_logging
from barberflow.routers import (
    appointments_routes,
    auth_routes,
    clients_routes,
    services_routes,
    settings_routes,
    staff_routes,
    transactions_routes,
    users_routes,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    create_db_and_tables()
    if settings.SEED_DEFAULTS:
        with Session(engine) as session:
            seed_defaults(session)
    logger.info("BarberFlow API ready")
    yield


app = FastAPI(title="BarberFlow", lifespan=lifespan)


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    else:
        logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, type(exc).__name__, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": type(exc).__name__},
    )


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(auth_routes.router)
app.include_router(users_routes.router)
app.include_router(staff_routes.router)
app.include_router(services_routes.router)
app.include_router(clients_routes.router)
app.include_router(appointments_routes.router)
app.include_router(settings_routes.router)
app.include_router(transactions_routes.router)
