"""Schemas for events and their monthly income."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PeriodFields


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)


class EventRead(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return str(value)


class EventListResponse(BaseModel):
    items: List[EventRead]


class EventIncomeUpsert(PeriodFields):
    event_id: str = Field(..., description="Identifier of the event")
    total_income: Decimal = Field(..., ge=0)


class EventIncomeRead(BaseModel):
    id: str
    event_id: str
    event_name: Optional[str] = None
    year: int
    month: int
    total_income: Decimal


class EventIncomeListResponse(BaseModel):
    items: List[EventIncomeRead]
