"""Monthly aggregation, evolution series and report assembly across sectors."""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Awaitable, Dict, Generic, Hashable, List, Mapping, Sequence, Tuple, TypeVar

from .gateway import SectorGateway
from .periods import PeriodKey, calendar_year, trailing_window
from .sectors import (
    ALL_SECTORS,
    SECTOR_DESCRIPTORS,
    ZERO,
    Sector,
    SectorRecord,
    sum_by_period,
    sum_records,
)
from .variance import compute_variance

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


class AggregationStatus(str, enum.Enum):
    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass
class AggregationResult(Generic[T]):
    """Well-typed outcome returned instead of raising persistence errors.

    ``data`` is always usable: sectors whose read failed contribute zero (or
    an empty list) and are named in ``errors``.
    """

    data: T
    status: AggregationStatus = AggregationStatus.OK
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status is not AggregationStatus.FAILED

    @property
    def degraded(self) -> bool:
        return self.status is not AggregationStatus.OK

    @property
    def failed_sectors(self) -> List[str]:
        return list(self.errors)


@dataclass(frozen=True)
class OverviewSnapshot:
    period: PeriodKey
    sports: Decimal = ZERO
    food: Decimal = ZERO
    clothing: Decimal = ZERO
    tenants: Decimal = ZERO
    events: Decimal = ZERO

    @classmethod
    def from_totals(cls, period: PeriodKey, totals: Mapping[Sector, Decimal]):
        return cls(period, **{sector.value: totals.get(sector, ZERO) for sector in ALL_SECTORS})

    @property
    def total(self) -> Decimal:
        return sum(self.sector_totals().values(), ZERO)

    def amount(self, sector: Sector | str) -> Decimal:
        return getattr(self, Sector(sector).value)

    def sector_totals(self) -> Dict[Sector, Decimal]:
        return {sector: self.amount(sector) for sector in ALL_SECTORS}


@dataclass(frozen=True)
class EvolutionEntry(OverviewSnapshot):
    """One month of the evolution series."""

    @property
    def label(self) -> str:
        return self.period.label


@dataclass(frozen=True)
class OverviewComparison:
    current: OverviewSnapshot
    previous: OverviewSnapshot
    variances: Dict[str, Decimal]


@dataclass(frozen=True)
class MonthReport:
    period: PeriodKey
    sectors: Dict[Sector, List[SectorRecord]]
    summary: OverviewSnapshot


def resolve_status(errors: Mapping[str, str], attempted: int) -> AggregationStatus:
    if not errors:
        return AggregationStatus.OK
    if len(errors) >= attempted:
        return AggregationStatus.FAILED
    return AggregationStatus.DEGRADED


async def fan_out(calls: Mapping[K, Awaitable[T]]) -> Tuple[Dict[K, T], Dict[K, str]]:
    """Await every call concurrently and split the outcomes into values and errors.

    All calls are joined; one failure never cancels the others.
    """

    keys = list(calls)
    outcomes = await asyncio.gather(*(calls[key] for key in keys), return_exceptions=True)

    values: Dict[K, T] = {}
    errors: Dict[K, str] = {}
    for key, outcome in zip(keys, outcomes):
        if isinstance(outcome, Exception):
            label = getattr(key, "value", key)
            LOGGER.warning("Read for %s failed: %s", label, outcome, exc_info=outcome)
            errors[key] = str(outcome) or outcome.__class__.__name__
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            values[key] = outcome
    return values, errors


def _error_labels(errors: Mapping[Sector, str]) -> Dict[str, str]:
    return {sector.value: message for sector, message in errors.items()}


async def _evolution_series(
    gateway: SectorGateway,
    periods: Sequence[PeriodKey],
) -> AggregationResult[List[EvolutionEntry]]:
    """One range read per sector over ``periods``, reduced to a dense ascending series."""

    start, end = periods[0], periods[-1]
    records, errors = await fan_out(
        {
            sector: gateway.read_sector_records_range(sector, start, end)
            for sector in ALL_SECTORS
        }
    )

    per_sector = {
        sector: sum_by_period(SECTOR_DESCRIPTORS[sector], records.get(sector, []))
        for sector in ALL_SECTORS
    }
    entries = [
        EvolutionEntry.from_totals(
            period,
            {sector: per_sector[sector].get(period, ZERO) for sector in ALL_SECTORS},
        )
        for period in periods
    ]
    entries.sort(key=lambda entry: entry.period)

    status = resolve_status(errors, len(ALL_SECTORS))
    return AggregationResult(entries, status, _error_labels(errors))


class AggregationService:
    """Turns raw sector rows into overview, evolution and report structures."""

    @staticmethod
    async def overview(gateway: SectorGateway, period: PeriodKey) -> AggregationResult[OverviewSnapshot]:
        records, errors = await fan_out(
            {sector: gateway.read_sector_records(sector, period) for sector in ALL_SECTORS}
        )
        totals = {
            sector: sum_records(SECTOR_DESCRIPTORS[sector], records.get(sector, []))
            for sector in ALL_SECTORS
        }
        snapshot = OverviewSnapshot.from_totals(period, totals)
        status = resolve_status(errors, len(ALL_SECTORS))
        if errors:
            LOGGER.warning(
                "Overview for %s is %s; failed sectors: %s",
                period,
                status.value,
                sorted(sector.value for sector in errors),
            )
        return AggregationResult(snapshot, status, _error_labels(errors))

    @staticmethod
    async def overview_with_variance(
        gateway: SectorGateway,
        period: PeriodKey,
    ) -> AggregationResult[OverviewComparison]:
        current, previous = await asyncio.gather(
            AggregationService.overview(gateway, period),
            AggregationService.overview(gateway, period.previous()),
        )

        variances: Dict[str, Decimal] = {}
        for sector in ALL_SECTORS:
            variances[sector.value] = compute_variance(
                current.data.amount(sector),
                previous.data.amount(sector),
                SECTOR_DESCRIPTORS[sector].allow_negative,
            )
        variances["total"] = compute_variance(current.data.total, previous.data.total, True)

        # Previous-month failures degrade the comparison, never fail it
        status = current.status
        if previous.errors and status is AggregationStatus.OK:
            status = AggregationStatus.DEGRADED
        errors = dict(current.errors)
        errors.update({f"previous:{sector}": message for sector, message in previous.errors.items()})
        comparison = OverviewComparison(current.data, previous.data, variances)
        return AggregationResult(comparison, status, errors)

    @staticmethod
    async def evolution(
        gateway: SectorGateway,
        window: int,
        *,
        today: date | None = None,
    ) -> AggregationResult[List[EvolutionEntry]]:
        """Return exactly ``window`` months ending at the current month, oldest first."""

        return await _evolution_series(gateway, trailing_window(window, today))

    @staticmethod
    async def year_evolution(gateway: SectorGateway, year: int) -> AggregationResult[List[EvolutionEntry]]:
        """Return the twelve months of ``year``, January first, zero-filled."""

        return await _evolution_series(gateway, calendar_year(year))

    @staticmethod
    async def full_report(gateway: SectorGateway, period: PeriodKey) -> AggregationResult[MonthReport]:
        records, errors = await fan_out(
            {sector: gateway.read_sector_records(sector, period) for sector in ALL_SECTORS}
        )
        sectors = {sector: list(records.get(sector, [])) for sector in ALL_SECTORS}
        summary = OverviewSnapshot.from_totals(
            period,
            {sector: sum_records(SECTOR_DESCRIPTORS[sector], rows) for sector, rows in sectors.items()},
        )
        report = MonthReport(period=period, sectors=sectors, summary=summary)
        return AggregationResult(report, resolve_status(errors, len(ALL_SECTORS)), _error_labels(errors))

    @staticmethod
    def variance(current: Decimal, previous: Decimal, allow_negative: bool = False) -> Decimal:
        return compute_variance(current, previous, allow_negative)
