"""Response models for the aggregated dashboard views."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AggregationMeta(BaseModel):
    """Outcome of the fanned-out reads behind a response."""

    status: str = Field(..., description="ok, degraded or failed")
    failed_sectors: List[str] = Field(default_factory=list)


class OverviewSnapshotRead(BaseModel):
    period_key: str
    year: int
    month: int
    name: str = Field(..., description="Short month label, e.g. 'jun'")
    sports: Decimal = Decimal("0")
    food: Decimal = Decimal("0")
    clothing: Decimal = Decimal("0")
    tenants: Decimal = Decimal("0")
    events: Decimal = Decimal("0")
    total: Decimal = Decimal("0")


class OverviewResponse(AggregationMeta):
    data: OverviewSnapshotRead
    previous: Optional[OverviewSnapshotRead] = None
    variances: Optional[Dict[str, Decimal]] = None


class EvolutionResponse(AggregationMeta):
    range: int = Field(..., ge=1)
    items: List[OverviewSnapshotRead]


class DashboardSummaryResponse(BaseModel):
    overview: OverviewResponse
    evolution: EvolutionResponse
    cached: bool = False


class MonthReportResponse(AggregationMeta):
    period_key: str
    year: int
    month: int
    month_name: str
    summary: OverviewSnapshotRead
    sectors: Dict[str, List[Dict[str, Any]]]


class VarianceResponse(BaseModel):
    current: Decimal
    previous: Decimal
    allow_negative: bool
    percentage: Decimal


class MemberBreakdownRead(BaseModel):
    member: str
    income: Decimal
    expense: Decimal
    net: Decimal
    units: int


class ExpenseShareRead(BaseModel):
    key: str
    label: str
    amount: Decimal
    percentage: Decimal


class SectorSummaryResponse(AggregationMeta):
    sector: str
    period_key: str
    income: Decimal
    expense: Decimal
    net: Decimal
    previous_net: Decimal
    variation: Decimal
    units: int
    members: List[MemberBreakdownRead] = Field(default_factory=list)
    expense_breakdown: List[ExpenseShareRead] = Field(default_factory=list)


class SectorEvolutionEntryRead(BaseModel):
    period_key: str
    year: int
    month: int
    name: str
    income: Decimal
    expense: Decimal
    net: Decimal
    units: int
    members: Dict[str, Decimal] = Field(default_factory=dict)


class SectorEvolutionResponse(AggregationMeta):
    sector: str
    range: int
    items: List[SectorEvolutionEntryRead]


class YearEvolutionResponse(AggregationMeta):
    year: int
    items: List[OverviewSnapshotRead]


class SectorYearEvolutionResponse(AggregationMeta):
    sector: str
    year: int
    items: List[SectorEvolutionEntryRead]
