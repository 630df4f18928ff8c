from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal

from backend.app.services import AggregationStatus, PeriodKey, Sector, SectorDashboardService
from backend.tests.fakes import FakeGateway, make_record

JUNE = PeriodKey(2025, 6)


def test_sports_summary_breaks_down_every_discipline():
    gateway = FakeGateway(
        [
            make_record(Sector.SPORTS, 2025, 6, "3000", units=40, member="padel_indoor"),
            make_record(Sector.SPORTS, 2025, 6, "2000", units=25, member="futbol"),
            make_record(Sector.SPORTS, 2025, 5, "4000", units=50, member="padel_indoor"),
        ]
    )

    result = asyncio.run(SectorDashboardService.month_summary(gateway, "sports", JUNE))

    summary = result.data
    assert result.status is AggregationStatus.OK
    assert summary.net == Decimal("5000")
    assert summary.previous_net == Decimal("4000")
    assert summary.variation == Decimal("25.00")
    assert summary.units == 65
    assert [member.member for member in summary.members] == ["padel_indoor", "padel_outdoor", "futbol"]
    outdoor = summary.members[1]
    assert outdoor.income == Decimal("0")
    assert outdoor.units == 0
    assert summary.expense_breakdown == []


def test_food_summary_includes_expense_shares():
    detail = {
        "raw_materials_expense": Decimal("2000"),
        "salaries_expense": Decimal("1000"),
        "taxes_expense": Decimal("600"),
        "other_expense": Decimal("400"),
    }
    gateway = FakeGateway([make_record(Sector.FOOD, 2025, 6, "10000", expense="4000", detail=detail)])

    result = asyncio.run(SectorDashboardService.month_summary(gateway, Sector.FOOD, JUNE))

    summary = result.data
    assert summary.income == Decimal("10000")
    assert summary.expense == Decimal("4000")
    assert summary.net == Decimal("6000")
    assert summary.variation == Decimal("100.00")
    shares = {share.key: share.percentage for share in summary.expense_breakdown}
    assert shares == {
        "raw_materials": Decimal("50.00"),
        "salaries": Decimal("25.00"),
        "taxes": Decimal("15.00"),
        "other": Decimal("10.00"),
    }


def test_expense_shares_round_half_up():
    detail = {"raw_materials_expense": Decimal("10"), "other_expense": Decimal("7990")}
    gateway = FakeGateway([make_record(Sector.FOOD, 2025, 6, "9000", expense="8000", detail=detail)])

    result = asyncio.run(SectorDashboardService.month_summary(gateway, Sector.FOOD, JUNE))

    shares = {share.key: share.percentage for share in result.data.expense_breakdown}
    # 10 / 8000 is exactly 0.125 percent
    assert shares["raw_materials"] == Decimal("0.13")
    assert shares["other"] == Decimal("99.88")

def test_food_summary_without_expenses_reports_zero_shares():
    gateway = FakeGateway([make_record(Sector.FOOD, 2025, 6, "500", expense="0")])

    result = asyncio.run(SectorDashboardService.month_summary(gateway, Sector.FOOD, JUNE))

    assert all(share.percentage == Decimal("0.00") for share in result.data.expense_breakdown)


def test_tenant_summary_lists_members_without_income():
    gateway = FakeGateway(
        [make_record(Sector.TENANTS, 2025, 6, "800", member="Kiosco")],
        members={Sector.TENANTS: ["Gimnasio", "Kiosco"]},
    )

    result = asyncio.run(SectorDashboardService.month_summary(gateway, Sector.TENANTS, JUNE))

    incomes = {member.member: member.income for member in result.data.members}
    assert incomes == {"Gimnasio": Decimal("0"), "Kiosco": Decimal("800")}


def test_summary_fails_when_current_month_cannot_be_read():
    gateway = FakeGateway(failing=[Sector.FOOD])

    result = asyncio.run(SectorDashboardService.month_summary(gateway, Sector.FOOD, JUNE))

    assert result.status is AggregationStatus.FAILED
    assert "food:current" in result.errors
    assert result.data.net == Decimal("0")


def test_sector_evolution_groups_members_per_month():
    gateway = FakeGateway(
        [
            make_record(Sector.TENANTS, 2025, 5, "800", member="Kiosco"),
            make_record(Sector.TENANTS, 2025, 6, "500", member="Gimnasio"),
        ]
    )

    result = asyncio.run(
        SectorDashboardService.sector_evolution(gateway, Sector.TENANTS, 3, today=date(2025, 6, 1))
    )

    entries = result.data
    assert [entry.period.key for entry in entries] == ["2025-04", "2025-05", "2025-06"]
    assert entries[0].members == {}
    assert entries[1].members == {"Kiosco": Decimal("800")}
    assert entries[2].net == Decimal("500")


def test_sports_evolution_keeps_every_discipline():
    gateway = FakeGateway([make_record(Sector.SPORTS, 2025, 6, "900", units=9, member="futbol")])

    result = asyncio.run(
        SectorDashboardService.sector_evolution(gateway, Sector.SPORTS, 1, today=date(2025, 6, 1))
    )

    (entry,) = result.data
    assert entry.members == {
        "padel_indoor": Decimal("0"),
        "padel_outdoor": Decimal("0"),
        "futbol": Decimal("900"),
    }
    assert entry.units == 9


def test_sector_year_evolution_is_dense_for_the_calendar_year():
    gateway = FakeGateway(
        [
            make_record(Sector.EVENTS, 2024, 7, "2500", member="Torneo de verano"),
            make_record(Sector.EVENTS, 2025, 7, "999", member="Torneo de verano"),
        ]
    )

    result = asyncio.run(SectorDashboardService.sector_year_evolution(gateway, "events", 2024))

    entries = result.data
    assert result.status is AggregationStatus.OK
    assert [entry.period.month for entry in entries] == list(range(1, 13))
    assert entries[6].members == {"Torneo de verano": Decimal("2500")}
    assert sum((entry.net for entry in entries), Decimal("0")) == Decimal("2500")
