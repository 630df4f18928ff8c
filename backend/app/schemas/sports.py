"""Pydantic schemas for court rental figures."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.sports import SPORT_DISCIPLINES, normalize_sport
from .common import PaginatedResponse, PeriodFields


def _validate_sport(value: str) -> str:
    normalized = normalize_sport(value)
    if normalized not in SPORT_DISCIPLINES:
        raise ValueError(f"sport must be one of: {', '.join(SPORT_DISCIPLINES)}")
    return normalized


class SportStatBase(PeriodFields):
    sport: str = Field(..., description="Discipline: padel_indoor, padel_outdoor or futbol")
    courts_rented: int = Field(default=0, ge=0, description="Court bookings in the month")
    total_income: Decimal = Field(..., ge=0, description="Income from court rentals")

    @field_validator("sport")
    @classmethod
    def _normalize_sport(cls, value: str) -> str:
        return _validate_sport(value)


class SportStatCreate(SportStatBase):
    """Schema used to create or upsert a discipline row."""

    pass


class SportStatUpdate(BaseModel):
    sport: Optional[str] = None
    courts_rented: Optional[int] = Field(default=None, ge=0)
    total_income: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("sport")
    @classmethod
    def _normalize_sport(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _validate_sport(value)


class SportStatRead(SportStatBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("sport", mode="before")
    @classmethod
    def _normalize_sport(cls, value: str) -> str:
        return normalize_sport(value)


class SportStatBatch(BaseModel):
    """Rows for several disciplines saved in one request."""

    items: List[SportStatCreate] = Field(..., min_length=1)


class SportStatListResponse(PaginatedResponse[SportStatRead]):
    """Paginated sports rows."""
