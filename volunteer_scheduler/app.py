# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from volunteer_scheduler.api.v1.endpoints import auth, notifications, reports, schedules, volunteers
from volunteer_scheduler.config import settings
from volunteer_scheduler.db.database import get_db
from volunteer_scheduler.exceptions import (
    ScheduleConflictError,
    SchedulerError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    logger.info("Volunteer scheduler starting up. Database migrations are managed by Alembic.")
    yield
    logger.info("Volunteer scheduler shutting down.")


app = FastAPI(
    title="Volunteer Scheduler API",
    description="Admin API for managing volunteers, their shifts and staff notifications.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api/v1")
app.include_router(volunteers.router, prefix="/api/v1")
app.include_router(schedules.router, prefix="/api/v1")
app.include_router(notifications.router, prefix="/api/v1")
app.include_router(reports.router, prefix="/api/v1")


@app.exception_handler(SchedulerError)
async def scheduler_error_handler(request: Request, exc: SchedulerError):
    body = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        body["fields"] = exc.fields
    elif isinstance(exc, ScheduleConflictError):
        body["conflicting_schedule_id"] = exc.conflicting_schedule_id
    elif isinstance(exc, StorageError):
        logger.error("Storage error on %s %s: %r", request.method, request.url.path, exc.original)
        if settings.is_development and exc.original is not None:
            body["detail"] = f"{exc.message}: {exc.original}"
    return JSONResponse(status_code=exc.status_code, content=body)


def _error_details(exc: RequestValidationError) -> list:
    return [{"loc": list(error.get("loc", ())), "msg": error.get("msg")} for error in exc.errors()]


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    fields = []
    for error in exc.errors():
        # Report the top-level field, whatever nested item failed
        names = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "header")]
        if names and names[0] not in fields:
            fields.append(names[0])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "fields": fields, "errors": _error_details(exc)},
    )


@app.get("/")
async def read_root():
    return {"message": "Welcome to the Volunteer Scheduler API!"}


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.exception("Health check failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database connection failed",
        ) from e
    return {"status": "ok", "database_connection": "successful"}
