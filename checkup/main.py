"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from checkup.config import get_settings
from checkup.db.engine import engine
from checkup.db.auth_engine import auth_engine
from checkup.errors import CheckupError, FieldError, PersistenceError, ValidationError
from checkup.models import Base, AuthBase
from checkup.api.router import api_router

logger = logging.getLogger(__name__)


async def create_all() -> None:
    async with auth_engine.begin() as conn:
        await conn.run_sync(AuthBase.metadata.create_all)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    await create_all()
    yield
    await engine.dispose()
    await auth_engine.dispose()


app = FastAPI(
    title="Office Health Check-up",
    description="Monthly office facility inspections with per-reporter review for administrators.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(CheckupError)
async def checkup_error_handler(request: Request, exc: CheckupError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        FieldError(".".join(str(p) for p in e["loc"]), e["msg"], e["type"])
        for e in exc.errors()
    ]
    return JSONResponse(status_code=400, content=ValidationError(errors).to_response())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    err = PersistenceError()
    return JSONResponse(status_code=err.status_code, content=err.to_response())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    err = CheckupError()
    return JSONResponse(status_code=err.status_code, content=err.to_response())


app.include_router(api_router)
