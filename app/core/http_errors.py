# app/core/http_errors.py
"""
Handlers globais de exceções para a API.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.errors import AppError, InvalidArgument, StoreError
from app.core.logging import get_request_id_or

log = logging.getLogger("pfl.http_errors")

GENERIC_STORE_MESSAGE = "Internal server error"


def store_error_payload(exc: Exception) -> dict:
    body = StoreError(GENERIC_STORE_MESSAGE).payload()
    if not settings.is_production:
        body["error"] = {"name": type(exc).__name__, "message": str(exc)}
    return body


def init_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError):
        if exc.http_status >= 500:
            log.error("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.detail)
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.payload(),
            headers={"X-Request-ID": get_request_id_or()},
        )

    @app.exception_handler(SQLAlchemyError)
    async def _store_error(request: Request, exc: SQLAlchemyError):
        log.exception("Store failure on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=StoreError.http_status,
            content=store_error_payload(exc),
            headers={"X-Request-ID": get_request_id_or()},
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        # JSON mal formado ou schema pydantic inválido -> mesmo envelope dos filtros
        first = (exc.errors() or [{}])[0]
        loc = [str(p) for p in first.get("loc", ()) if p != "body"]
        err = InvalidArgument(first.get("msg", "Invalid request"), field=".".join(loc) or None)
        return JSONResponse(
            status_code=err.http_status,
            content=err.payload(),
            headers={"X-Request-ID": get_request_id_or()},
        )
