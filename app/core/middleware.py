# app/core/middleware.py
"""
Middleware HTTP: request id por pedido e uma linha de log à entrada e à saída.
"""

import logging
import time
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.errors import AppError
from app.core.logging import set_request_id

log = logging.getLogger("pfl.http")

# pesquisas acima disto aparecem como [SLOW]
SLOW_REQUEST_MS = 1500


def _log_outcome(method: str, target: str, status: int, elapsed_ms: float) -> None:
    if status >= 500:
        level, suffix = logging.ERROR, ""
    elif status >= 400:
        level, suffix = logging.WARNING, ""
    elif elapsed_ms > SLOW_REQUEST_MS:
        level, suffix = logging.WARNING, " [SLOW]"
    else:
        level, suffix = logging.INFO, ""
    log.log(level, "<- %s %s -> %s %.0fms%s", method, target, status, elapsed_ms, suffix)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        set_request_id(rid)

        # a query string faz parte da pesquisa no GET /filters/profiles
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        t0 = time.perf_counter()
        log.info("-> %s %s", request.method, target)
        try:
            try:
                response = await call_next(request)
            except AppError as e:
                response = JSONResponse(status_code=e.http_status, content=e.payload())

            response.headers["X-Request-ID"] = rid
            _log_outcome(
                request.method, target, response.status_code, (time.perf_counter() - t0) * 1000
            )
            return response
        finally:
            set_request_id(None)
