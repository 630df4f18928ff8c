from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PaginatedResponse, PeriodFields


class FoodStatBase(PeriodFields):
    total_income: Decimal = Field(..., ge=0, description="Restaurant sales")
    total_expense: Decimal = Field(..., ge=0, description="Total restaurant costs")
    raw_materials_expense: Decimal = Field(default=Decimal("0"), ge=0)
    salaries_expense: Decimal = Field(default=Decimal("0"), ge=0)
    taxes_expense: Decimal = Field(default=Decimal("0"), ge=0)
    other_expense: Decimal = Field(default=Decimal("0"), ge=0)


class FoodStatCreate(FoodStatBase):
    pass


class FoodStatUpdate(BaseModel):
    total_income: Optional[Decimal] = Field(default=None, ge=0)
    total_expense: Optional[Decimal] = Field(default=None, ge=0)
    raw_materials_expense: Optional[Decimal] = Field(default=None, ge=0)
    salaries_expense: Optional[Decimal] = Field(default=None, ge=0)
    taxes_expense: Optional[Decimal] = Field(default=None, ge=0)
    other_expense: Optional[Decimal] = Field(default=None, ge=0)


class FoodStatRead(FoodStatBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class FoodStatListResponse(PaginatedResponse[FoodStatRead]):
    pass
