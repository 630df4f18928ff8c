"""Routers package."""

from .auth import router as auth_router
from .clothing import router as clothing_router
from .dashboard import router as dashboard_router
from .events import router as events_router
from .food import router as food_router
from .imports import router as imports_router
from .sectors import router as sectors_router
from .sports import router as sports_router
from .tenants import router as tenants_router

__all__ = [
    "auth_router",
    "clothing_router",
    "dashboard_router",
    "events_router",
    "food_router",
    "imports_router",
    "sectors_router",
    "sports_router",
    "tenants_router",
]
