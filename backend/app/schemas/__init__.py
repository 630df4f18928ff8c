"""Expose Pydantic schemas for convenient imports."""

from .auth import LoginRequest, LoginResponse
from .clothing import (
    ClothingStatBase,
    ClothingStatCreate,
    ClothingStatListResponse,
    ClothingStatRead,
    ClothingStatUpdate,
)
from .common import ExistenceResponse, PaginatedResponse, PeriodFields
from .dashboard import (
    AggregationMeta,
    DashboardSummaryResponse,
    EvolutionResponse,
    ExpenseShareRead,
    MemberBreakdownRead,
    MonthReportResponse,
    OverviewResponse,
    OverviewSnapshotRead,
    SectorEvolutionEntryRead,
    SectorEvolutionResponse,
    SectorSummaryResponse,
    SectorYearEvolutionResponse,
    VarianceResponse,
    YearEvolutionResponse,
)
from .events import (
    EventCreate,
    EventIncomeListResponse,
    EventIncomeRead,
    EventIncomeUpsert,
    EventListResponse,
    EventRead,
)
from .food import FoodStatBase, FoodStatCreate, FoodStatListResponse, FoodStatRead, FoodStatUpdate
from .imports import FinanceImportRequest, FinanceImportResponse, SportImportItem
from .sports import (
    SportStatBase,
    SportStatBatch,
    SportStatCreate,
    SportStatListResponse,
    SportStatRead,
    SportStatUpdate,
)
from .tenants import (
    TenantCreate,
    TenantIncomeListResponse,
    TenantIncomeRead,
    TenantIncomeUpsert,
    TenantListResponse,
    TenantRead,
)

__all__ = [
    "AggregationMeta",
    "ClothingStatBase",
    "ClothingStatCreate",
    "ClothingStatListResponse",
    "ClothingStatRead",
    "ClothingStatUpdate",
    "DashboardSummaryResponse",
    "EvolutionResponse",
    "EventCreate",
    "EventIncomeListResponse",
    "EventIncomeRead",
    "EventIncomeUpsert",
    "EventListResponse",
    "EventRead",
    "ExistenceResponse",
    "ExpenseShareRead",
    "FinanceImportRequest",
    "FinanceImportResponse",
    "FoodStatBase",
    "FoodStatCreate",
    "FoodStatListResponse",
    "FoodStatRead",
    "FoodStatUpdate",
    "LoginRequest",
    "LoginResponse",
    "MemberBreakdownRead",
    "MonthReportResponse",
    "OverviewResponse",
    "OverviewSnapshotRead",
    "PaginatedResponse",
    "PeriodFields",
    "SectorEvolutionEntryRead",
    "SectorEvolutionResponse",
    "SectorSummaryResponse",
    "SectorYearEvolutionResponse",
    "SportImportItem",
    "SportStatBase",
    "SportStatBatch",
    "SportStatCreate",
    "SportStatListResponse",
    "SportStatRead",
    "SportStatUpdate",
    "TenantCreate",
    "TenantIncomeListResponse",
    "TenantIncomeRead",
    "TenantIncomeUpsert",
    "TenantListResponse",
    "TenantRead",
    "VarianceResponse",
    "YearEvolutionResponse",
]
