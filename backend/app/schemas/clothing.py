from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PaginatedResponse, PeriodFields


class ClothingStatBase(PeriodFields):
    total_income: Decimal = Field(..., ge=0, description="Clothing sales")


class ClothingStatCreate(ClothingStatBase):
    pass


class ClothingStatUpdate(BaseModel):
    total_income: Decimal = Field(..., ge=0)


class ClothingStatRead(ClothingStatBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClothingStatListResponse(PaginatedResponse[ClothingStatRead]):
    pass
