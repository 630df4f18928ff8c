"""Expose SQLAlchemy models for convenient imports."""

from .clothing import ClothingStat
from .event import Event, EventMonthlyIncome
from .food import FoodStat
from .sports import SPORT_DISCIPLINES, SportStat, normalize_sport
from .tenant import Tenant, TenantMonthlyIncome

__all__ = [
    "ClothingStat",
    "Event",
    "EventMonthlyIncome",
    "FoodStat",
    "SPORT_DISCIPLINES",
    "SportStat",
    "normalize_sport",
    "Tenant",
    "TenantMonthlyIncome",
]
