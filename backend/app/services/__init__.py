"""Service layer encapsulating business logic for API routers."""

from .aggregation import (
    AggregationResult,
    AggregationService,
    AggregationStatus,
    EvolutionEntry,
    MonthReport,
    OverviewComparison,
    OverviewSnapshot,
)
from .errors import DuplicateRecordError, ManagementServiceError, RecordNotFoundError
from .finance_import import FinanceImportService
from .gateway import SectorGateway, SqlAlchemySectorGateway
from .members import EventService, TenantService
from .periods import PeriodKey, trailing_window
from .sector_dashboards import SectorDashboardService
from .sectors import Sector, SectorRecord
from .stats import ClothingStatsService, FoodStatsService, SportsStatsService
from .variance import compute_variance

__all__ = [
    "AggregationResult",
    "AggregationService",
    "AggregationStatus",
    "ClothingStatsService",
    "DuplicateRecordError",
    "EventService",
    "EvolutionEntry",
    "FinanceImportService",
    "FoodStatsService",
    "ManagementServiceError",
    "MonthReport",
    "OverviewComparison",
    "OverviewSnapshot",
    "PeriodKey",
    "RecordNotFoundError",
    "Sector",
    "SectorDashboardService",
    "SectorGateway",
    "SectorRecord",
    "SportsStatsService",
    "SqlAlchemySectorGateway",
    "TenantService",
    "compute_variance",
    "trailing_window",
]
