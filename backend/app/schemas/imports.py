"""Payload accepted by the spreadsheet import endpoint."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SportImportItem(BaseModel):
    year: int = Field(..., ge=2000)
    month: int = Field(..., ge=1, le=12)
    sport: Literal["padel_indoor", "padel_outdoor", "futbol"]
    total_income: Decimal = Field(..., ge=0)
    courts_rented: int = Field(..., ge=0)

    model_config = ConfigDict(strict=False)


class FinanceImportRequest(BaseModel):
    data_indoor: SportImportItem = Field(..., alias="dataIndoor")
    data_outdoor: SportImportItem = Field(..., alias="dataOutdoor")
    data_futbol: SportImportItem = Field(..., alias="dataFutbol")

    model_config = ConfigDict(populate_by_name=True)

    def items(self) -> list[SportImportItem]:
        return [self.data_indoor, self.data_outdoor, self.data_futbol]


class FinanceImportResponse(BaseModel):
    success: bool = True
    message: str
    imported: int
