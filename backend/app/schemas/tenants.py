"""Schemas for tenants and the rent they pay each month."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PeriodFields


class TenantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)


class TenantRead(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return str(value)


class TenantListResponse(BaseModel):
    items: List[TenantRead]


class TenantIncomeUpsert(PeriodFields):
    tenant_id: str = Field(..., description="Identifier of the tenant paying the rent")
    total_income: Decimal = Field(..., ge=0)


class TenantIncomeRead(BaseModel):
    id: str
    tenant_id: str
    tenant_name: Optional[str] = None
    year: int
    month: int
    total_income: Decimal


class TenantIncomeListResponse(BaseModel):
    items: List[TenantIncomeRead]
