"""Expose the La Meca dashboard FastAPI app and its CORS configuration."""

import logging
import os
import re
from contextlib import asynccontextmanager
from typing import Iterable

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .migrations import run_database_migrations
from .routers import (
    auth_router,
    clothing_router,
    dashboard_router,
    events_router,
    food_router,
    imports_router,
    sectors_router,
    sports_router,
    tenants_router,
)
from .security import SessionIdentity, require_session

LOGGER = logging.getLogger(__name__)

LOCAL_DEVELOPMENT_ORIGINS = {
    "http://localhost:3000",
    "http://localhost:5173",
}
LOCALHOST_ORIGIN_REGEX = r"https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$"

DEFAULT_ALLOWED_ORIGINS = {
    *LOCAL_DEVELOPMENT_ORIGINS,
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
    "http://localhost:4173",
    "http://127.0.0.1:4173",
}


def _normalize_origin(origin: str) -> str | None:
    stripped = origin.strip()
    if not stripped:
        return None
    return stripped.rstrip("/")


def _read_allowed_origins(raw_origins: Iterable[str]) -> list[str]:
    normalized = {_normalize_origin(origin) for origin in raw_origins}
    return sorted({origin for origin in normalized if origin})


def _split_raw_origins(raw_value: str) -> list[str]:
    """Split a raw origin string using commas or whitespace as separators."""

    return [origin for origin in re.split(r"[\s,]+", raw_value) if origin]


def _resolve_allowed_origins() -> list[str]:
    raw_value = os.getenv("BACKEND_ALLOWED_ORIGINS")
    if raw_value:
        origins = _read_allowed_origins(_split_raw_origins(raw_value))
    else:
        origins = _read_allowed_origins(DEFAULT_ALLOWED_ORIGINS)
    return _read_allowed_origins([*origins, *LOCAL_DEVELOPMENT_ORIGINS])


def _read_bool_env(name: str, default: bool = True) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def ensure_database_is_ready() -> None:
    """Apply pending database migrations when the service starts."""

    if not _read_bool_env("ENABLE_STARTUP_MIGRATIONS", True):
        LOGGER.info("Startup migrations disabled via ENABLE_STARTUP_MIGRATIONS")
        return
    LOGGER.info("Ensuring database schema is up to date before serving requests")
    run_database_migrations()


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_database_is_ready()
    yield


app = FastAPI(title="La Meca CDA Dashboard API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_resolve_allowed_origins(),
    allow_origin_regex=LOCALHOST_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
app.include_router(sectors_router, prefix="/sectors", tags=["sectors"])
app.include_router(sports_router, prefix="/sports", tags=["sports"])
app.include_router(food_router, prefix="/food", tags=["food"])
app.include_router(clothing_router, prefix="/clothing", tags=["clothing"])
app.include_router(tenants_router, prefix="/tenants", tags=["tenants"])
app.include_router(events_router, prefix="/events", tags=["events"])
app.include_router(imports_router, tags=["imports"])


@app.get("/", tags=["health"])
def read_root() -> dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}


@app.get("/auth/me", tags=["auth"])
def read_session(identity: SessionIdentity = Depends(require_session)) -> dict[str, str]:
    return {"username": identity.username}
