"""Per-sector KPIs: monthly summary with trend and per-sector evolution."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from .aggregation import AggregationResult, AggregationStatus, fan_out
from .gateway import SectorGateway
from .periods import PeriodKey, calendar_year, trailing_window
from .sectors import (
    ZERO,
    Sector,
    SectorDescriptor,
    SectorRecord,
    get_descriptor,
    group_by_period,
    sum_records,
    to_decimal,
)
from .variance import compute_variance

FOOD_EXPENSE_FIELDS = (
    ("raw_materials", "Materia Prima", "raw_materials_expense"),
    ("salaries", "Sueldos", "salaries_expense"),
    ("taxes", "Impuestos", "taxes_expense"),
    ("other", "Otros", "other_expense"),
)


@dataclass(frozen=True)
class MemberBreakdown:
    member: str
    income: Decimal = ZERO
    expense: Decimal = ZERO
    units: int = 0

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class ExpenseShare:
    key: str
    label: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class SectorMonthSummary:
    sector: Sector
    period: PeriodKey
    income: Decimal
    expense: Decimal
    net: Decimal
    previous_net: Decimal
    variation: Decimal
    units: int
    members: List[MemberBreakdown] = field(default_factory=list)
    expense_breakdown: List[ExpenseShare] = field(default_factory=list)


@dataclass(frozen=True)
class SectorEvolutionEntry:
    period: PeriodKey
    income: Decimal
    expense: Decimal
    net: Decimal
    units: int
    members: Dict[str, Decimal] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.period.label


def _ordered_members(known: Iterable[str], records: Iterable[SectorRecord]) -> List[str]:
    ordered = list(dict.fromkeys(known))
    extras = sorted({record.member for record in records if record.member and record.member not in ordered})
    return ordered + extras


def _member_breakdown(
    descriptor: SectorDescriptor,
    members: List[str],
    records: List[SectorRecord],
) -> List[MemberBreakdown]:
    income: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    expense: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    units: Dict[str, int] = defaultdict(int)
    for record in records:
        if not record.member:
            continue
        income[record.member] += record.income
        if descriptor.has_expense:
            expense[record.member] += record.expense or ZERO
        units[record.member] += record.units or 0
    return [
        MemberBreakdown(member=name, income=income[name], expense=expense[name], units=units[name])
        for name in members
    ]


def _expense_breakdown(records: List[SectorRecord], total_expense: Decimal) -> List[ExpenseShare]:
    divisor = total_expense if total_expense > ZERO else Decimal("1")
    shares = []
    for key, label, column in FOOD_EXPENSE_FIELDS:
        amount = sum((to_decimal(record.detail.get(column)) for record in records), ZERO)
        percentage = (amount / divisor * Decimal("100")).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        shares.append(ExpenseShare(key=key, label=label, amount=amount, percentage=percentage))
    return shares


async def _sector_series(
    descriptor: SectorDescriptor,
    gateway: SectorGateway,
    periods: Sequence[PeriodKey],
) -> AggregationResult[List[SectorEvolutionEntry]]:
    results, errors = await fan_out(
        {
            descriptor.sector: gateway.read_sector_records_range(
                descriptor.sector, periods[0], periods[-1]
            )
        }
    )
    grouped = group_by_period(results.get(descriptor.sector, []))

    entries = []
    for period in periods:
        bucket = grouped.get(period, [])
        member_totals: Dict[str, Decimal] = {name: ZERO for name in descriptor.fixed_members}
        for record in bucket:
            if record.member:
                member_totals[record.member] = member_totals.get(record.member, ZERO) + descriptor.net_amount(record)
        entries.append(
            SectorEvolutionEntry(
                period=period,
                income=sum((record.income for record in bucket), ZERO),
                expense=sum((record.expense or ZERO for record in bucket), ZERO),
                net=sum_records(descriptor, bucket),
                units=sum(record.units or 0 for record in bucket),
                members=member_totals,
            )
        )
    entries.sort(key=lambda entry: entry.period)

    status = AggregationStatus.FAILED if errors else AggregationStatus.OK
    return AggregationResult(entries, status, {sector.value: msg for sector, msg in errors.items()})


class SectorDashboardService:
    """KPIs shown on each sector page."""

    @staticmethod
    async def month_summary(
        gateway: SectorGateway,
        sector: Sector | str,
        period: PeriodKey,
    ) -> AggregationResult[SectorMonthSummary]:
        descriptor = get_descriptor(sector)
        results, errors = await fan_out(
            {
                "current": gateway.read_sector_records(descriptor.sector, period),
                "previous": gateway.read_sector_records(descriptor.sector, period.previous()),
                "members": gateway.read_sector_members(descriptor.sector),
            }
        )
        current: List[SectorRecord] = results.get("current", [])
        previous: List[SectorRecord] = results.get("previous", [])
        known_members: List[str] = results.get("members", list(descriptor.fixed_members))

        income = sum((record.income for record in current), ZERO)
        expense = sum((record.expense or ZERO for record in current), ZERO) if descriptor.has_expense else ZERO
        net = sum_records(descriptor, current)
        previous_net = sum_records(descriptor, previous)

        members: List[MemberBreakdown] = []
        if descriptor.fixed_members or descriptor.dynamic_members:
            members = _member_breakdown(descriptor, _ordered_members(known_members, current), current)

        expense_breakdown: List[ExpenseShare] = []
        if descriptor.sector is Sector.FOOD:
            expense_breakdown = _expense_breakdown(current, expense)

        summary = SectorMonthSummary(
            sector=descriptor.sector,
            period=period,
            income=income,
            expense=expense,
            net=net,
            previous_net=previous_net,
            variation=compute_variance(net, previous_net, descriptor.allow_negative),
            units=sum(record.units or 0 for record in current),
            members=members,
            expense_breakdown=expense_breakdown,
        )

        if "current" in errors:
            status = AggregationStatus.FAILED
        elif errors:
            status = AggregationStatus.DEGRADED
        else:
            status = AggregationStatus.OK
        return AggregationResult(summary, status, {f"{descriptor.sector.value}:{key}": msg for key, msg in errors.items()})

    @staticmethod
    async def sector_evolution(
        gateway: SectorGateway,
        sector: Sector | str,
        window: int,
        *,
        today: Optional[date] = None,
    ) -> AggregationResult[List[SectorEvolutionEntry]]:
        return await _sector_series(get_descriptor(sector), gateway, trailing_window(window, today))

    @staticmethod
    async def sector_year_evolution(
        gateway: SectorGateway,
        sector: Sector | str,
        year: int,
    ) -> AggregationResult[List[SectorEvolutionEntry]]:
        """Twelve months of one sector for a calendar year, January first."""

        return await _sector_series(get_descriptor(sector), gateway, calendar_year(year))
