from __future__ import annotations

import asyncio
from decimal import Decimal

from backend.app import models
from backend.app.services import PeriodKey, Sector, SqlAlchemySectorGateway


def _seed(db_session):
    kiosco = models.Tenant(name="Kiosco")
    gimnasio = models.Tenant(name="Gimnasio")
    torneo = models.Event(name="Torneo de verano")
    db_session.add_all([kiosco, gimnasio, torneo])
    db_session.flush()
    db_session.add_all(
        [
            models.SportStat(year=2024, month=12, sport="Padel Indoor", courts_rented=30, total_income=Decimal("1500")),
            models.SportStat(year=2025, month=1, sport="futbol", courts_rented=12, total_income=Decimal("900")),
            models.SportStat(year=2025, month=3, sport="futbol", courts_rented=5, total_income=Decimal("300")),
            models.FoodStat(year=2025, month=1, total_income=Decimal("4000"), total_expense=Decimal("4500")),
            models.TenantMonthlyIncome(tenant_id=kiosco.id, year=2025, month=1, total_income=Decimal("700")),
            models.EventMonthlyIncome(event_id=torneo.id, year=2025, month=1, total_income=Decimal("2500")),
        ]
    )
    db_session.commit()


def test_reads_rows_of_one_period(db_session, session_factory):
    _seed(db_session)
    gateway = SqlAlchemySectorGateway(session_factory)

    sports = asyncio.run(gateway.read_sector_records(Sector.SPORTS, PeriodKey(2025, 1)))
    food = asyncio.run(gateway.read_sector_records(Sector.FOOD, PeriodKey(2025, 1)))
    tenants = asyncio.run(gateway.read_sector_records(Sector.TENANTS, PeriodKey(2025, 1)))

    assert [(record.member, record.income, record.units) for record in sports] == [
        ("futbol", Decimal("900.00"), 12)
    ]
    assert food[0].net == Decimal("-500.00")
    assert tenants[0].member == "Kiosco"
    assert tenants[0].detail["tenant_name"] == "Kiosco"


def test_range_read_crosses_year_boundary(db_session, session_factory):
    _seed(db_session)
    gateway = SqlAlchemySectorGateway(session_factory)

    records = asyncio.run(
        gateway.read_sector_records_range(Sector.SPORTS, PeriodKey(2024, 12), PeriodKey(2025, 2))
    )

    assert [record.period for record in records] == [PeriodKey(2024, 12), PeriodKey(2025, 1)]
    assert records[0].member == "padel_indoor"


def test_members_per_sector(db_session, session_factory):
    _seed(db_session)
    gateway = SqlAlchemySectorGateway(session_factory)

    assert asyncio.run(gateway.read_sector_members(Sector.TENANTS)) == ["Gimnasio", "Kiosco"]
    assert asyncio.run(gateway.read_sector_members(Sector.EVENTS)) == ["Torneo de verano"]
    assert asyncio.run(gateway.read_sector_members(Sector.SPORTS)) == ["padel_indoor", "padel_outdoor", "futbol"]
    assert asyncio.run(gateway.read_sector_members(Sector.CLOTHING)) == []


def test_out_of_range_month_reads_nothing(db_session, session_factory):
    _seed(db_session)
    gateway = SqlAlchemySectorGateway(session_factory)

    assert asyncio.run(gateway.read_sector_records(Sector.SPORTS, PeriodKey(2025, 13))) == []
