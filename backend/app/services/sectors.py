"""Business sectors and the generic reducer that turns their rows into totals."""

from __future__ import annotations

import enum
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..models.sports import SPORT_DISCIPLINES
from .periods import PeriodKey

ZERO = Decimal("0")


class Sector(str, enum.Enum):
    """Revenue lines of the complex, in display order."""

    SPORTS = "sports"
    FOOD = "food"
    CLOTHING = "clothing"
    TENANTS = "tenants"
    EVENTS = "events"


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    return Decimal(str(value or 0))


@dataclass(frozen=True)
class SectorRecord:
    """One stored row of a sector, reduced to the measures the aggregator needs."""

    sector: Sector
    period: PeriodKey
    income: Decimal
    expense: Optional[Decimal] = None
    units: Optional[int] = None
    member: Optional[str] = None
    record_id: Optional[str] = None
    detail: Mapping[str, Any] = field(default_factory=dict)

    @property
    def net(self) -> Decimal:
        if self.expense is None:
            return self.income
        return self.income - self.expense


@dataclass(frozen=True)
class SectorDescriptor:
    """Static description of how a sector is summed and compared.

    ``has_expense`` marks sectors whose net amount is income minus expense;
    those totals can go negative, so variance divides by the absolute
    previous value (``allow_negative``).
    """

    sector: Sector
    label: str
    has_expense: bool = False
    fixed_members: Tuple[str, ...] = ()
    dynamic_members: bool = False

    @property
    def allow_negative(self) -> bool:
        return self.has_expense

    def net_amount(self, record: SectorRecord) -> Decimal:
        if self.has_expense:
            return record.income - (record.expense or ZERO)
        return record.income


SECTOR_DESCRIPTORS: Dict[Sector, SectorDescriptor] = {
    Sector.SPORTS: SectorDescriptor(
        Sector.SPORTS,
        label="Deportes",
        fixed_members=SPORT_DISCIPLINES,
    ),
    Sector.FOOD: SectorDescriptor(Sector.FOOD, label="Gastronomía", has_expense=True),
    Sector.CLOTHING: SectorDescriptor(Sector.CLOTHING, label="Indumentaria"),
    Sector.TENANTS: SectorDescriptor(Sector.TENANTS, label="Inquilinos", dynamic_members=True),
    Sector.EVENTS: SectorDescriptor(Sector.EVENTS, label="Eventos", dynamic_members=True),
}

ALL_SECTORS: Tuple[Sector, ...] = tuple(Sector)


def get_descriptor(sector: Sector | str) -> SectorDescriptor:
    return SECTOR_DESCRIPTORS[Sector(sector)]


def sum_records(descriptor: SectorDescriptor, records: Iterable[SectorRecord]) -> Decimal:
    """Sum the net amount of ``records`` for one sector."""

    return sum((descriptor.net_amount(record) for record in records), ZERO)


def group_by_period(records: Iterable[SectorRecord]) -> Dict[PeriodKey, List[SectorRecord]]:
    grouped: Dict[PeriodKey, List[SectorRecord]] = defaultdict(list)
    for record in records:
        grouped[record.period].append(record)
    return grouped


def sum_by_period(
    descriptor: SectorDescriptor,
    records: Iterable[SectorRecord],
) -> Dict[PeriodKey, Decimal]:
    """Group ``records`` by ``(year, month)`` and reduce each bucket to its net total."""

    return {
        period: sum_records(descriptor, bucket)
        for period, bucket in group_by_period(records).items()
    }
