# apps/api_main.py
from __future__ import annotations

from datetime import UTC, datetime

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

# Routes
from app.api.v1.attribute_groups import router as attribute_groups_router
from app.api.v1.filters import router as filters_router

# Others
from app.core.config import settings
from app.core.http_errors import init_error_handlers
from app.core.logging import setup_logging
from app.core.middleware import RequestContextMiddleware

setup_logging()


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
app.add_middleware(RequestContextMiddleware)

init_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r".*",  # aceita qualquer origem
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    allow_credentials=True,  # ecoa o Origin em vez de '*'
    max_age=86400,
)


@app.on_event("startup")
async def on_startup():
    app.state.started_at = datetime.now(UTC)
    from app.models import create_db_and_tables

    create_db_and_tables()


@app.get("/api/v1/health", tags=["system"])
def health():
    return {"status": "ok", "version": settings.APP_VERSION, "env": settings.ENV}


# routers
app.include_router(filters_router, prefix="/api/v1")
app.include_router(attribute_groups_router, prefix="/api/v1")
