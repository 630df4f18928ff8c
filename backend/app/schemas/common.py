"""Shapes shared by the monthly figure schemas."""

from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PeriodFields(BaseModel):
    """Calendar month a row of figures belongs to."""

    year: int = Field(..., ge=2000, description="Calendar year of the figures")
    month: int = Field(..., ge=1, le=12, description="Calendar month (1-12)")


class PaginatedResponse(BaseModel, Generic[T]):
    items: Sequence[T]
    total: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)
    skip: int = Field(..., ge=0)


class ExistenceResponse(PeriodFields):
    """Whether figures were already loaded for a month."""

    exists: bool
