"""Read access to per-sector monthly rows.

The aggregation services only talk to a :class:`SectorGateway`. The SQLAlchemy
implementation opens a fresh session for every call and runs the blocking
query in a worker thread, so concurrent reads fanned out with
``asyncio.gather`` never share a session.
"""

from __future__ import annotations

import abc
import asyncio
import logging
from typing import Any, Callable, Dict, List

from sqlalchemy.orm import Session, joinedload

from .. import models
from ..database import SessionFactory
from .periods import PeriodKey
from .sectors import SECTOR_DESCRIPTORS, Sector, SectorRecord, to_decimal

LOGGER = logging.getLogger(__name__)


class SectorGateway(abc.ABC):
    """Capability contract consumed by the aggregation core."""

    @abc.abstractmethod
    async def read_sector_records(self, sector: Sector, period: PeriodKey) -> List[SectorRecord]:
        """Return every row of ``sector`` stored for ``period``."""

    @abc.abstractmethod
    async def read_sector_records_range(
        self,
        sector: Sector,
        start: PeriodKey,
        end: PeriodKey,
    ) -> List[SectorRecord]:
        """Return every row of ``sector`` between ``start`` and ``end`` inclusive."""

    @abc.abstractmethod
    async def read_sector_members(self, sector: Sector) -> List[str]:
        """Return the names rows of ``sector`` can be attributed to."""


def _sports_record(row: models.SportStat) -> SectorRecord:
    sport = models.normalize_sport(row.sport)
    return SectorRecord(
        sector=Sector.SPORTS,
        period=PeriodKey(row.year, row.month),
        income=to_decimal(row.total_income),
        units=int(row.courts_rented or 0),
        member=sport,
        record_id=str(row.id),
        detail={
            "id": row.id,
            "year": row.year,
            "month": row.month,
            "sport": row.sport,
            "courts_rented": int(row.courts_rented or 0),
            "total_income": to_decimal(row.total_income),
        },
    )


def _food_record(row: models.FoodStat) -> SectorRecord:
    return SectorRecord(
        sector=Sector.FOOD,
        period=PeriodKey(row.year, row.month),
        income=to_decimal(row.total_income),
        expense=to_decimal(row.total_expense),
        record_id=str(row.id),
        detail={
            "id": row.id,
            "year": row.year,
            "month": row.month,
            "total_income": to_decimal(row.total_income),
            "total_expense": to_decimal(row.total_expense),
            "raw_materials_expense": to_decimal(row.raw_materials_expense),
            "salaries_expense": to_decimal(row.salaries_expense),
            "taxes_expense": to_decimal(row.taxes_expense),
            "other_expense": to_decimal(row.other_expense),
        },
    )


def _clothing_record(row: models.ClothingStat) -> SectorRecord:
    return SectorRecord(
        sector=Sector.CLOTHING,
        period=PeriodKey(row.year, row.month),
        income=to_decimal(row.total_income),
        record_id=str(row.id),
        detail={
            "id": row.id,
            "year": row.year,
            "month": row.month,
            "total_income": to_decimal(row.total_income),
        },
    )


def _tenant_record(row: models.TenantMonthlyIncome) -> SectorRecord:
    name = row.tenant.name if row.tenant is not None else None
    return SectorRecord(
        sector=Sector.TENANTS,
        period=PeriodKey(row.year, row.month),
        income=to_decimal(row.total_income),
        member=name,
        record_id=str(row.id),
        detail={
            "id": str(row.id),
            "tenant_id": str(row.tenant_id),
            "tenant_name": name,
            "year": row.year,
            "month": row.month,
            "total_income": to_decimal(row.total_income),
        },
    )


def _event_record(row: models.EventMonthlyIncome) -> SectorRecord:
    name = row.event.name if row.event is not None else None
    return SectorRecord(
        sector=Sector.EVENTS,
        period=PeriodKey(row.year, row.month),
        income=to_decimal(row.total_income),
        member=name,
        record_id=str(row.id),
        detail={
            "id": str(row.id),
            "event_id": str(row.event_id),
            "event_name": name,
            "year": row.year,
            "month": row.month,
            "total_income": to_decimal(row.total_income),
        },
    )


_SECTOR_SOURCES: Dict[Sector, tuple[Any, Callable[[Any], SectorRecord]]] = {
    Sector.SPORTS: (models.SportStat, _sports_record),
    Sector.FOOD: (models.FoodStat, _food_record),
    Sector.CLOTHING: (models.ClothingStat, _clothing_record),
    Sector.TENANTS: (models.TenantMonthlyIncome, _tenant_record),
    Sector.EVENTS: (models.EventMonthlyIncome, _event_record),
}

_MEMBER_MODELS: Dict[Sector, Any] = {
    Sector.TENANTS: models.Tenant,
    Sector.EVENTS: models.Event,
}


class SqlAlchemySectorGateway(SectorGateway):
    """Gateway backed by the relational store."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def read_sector_records(self, sector: Sector, period: PeriodKey) -> List[SectorRecord]:
        return await asyncio.to_thread(self._query_records, Sector(sector), period, period)

    async def read_sector_records_range(
        self,
        sector: Sector,
        start: PeriodKey,
        end: PeriodKey,
    ) -> List[SectorRecord]:
        return await asyncio.to_thread(self._query_records, Sector(sector), start, end)

    async def read_sector_members(self, sector: Sector) -> List[str]:
        sector = Sector(sector)
        descriptor = SECTOR_DESCRIPTORS[sector]
        if descriptor.fixed_members:
            return list(descriptor.fixed_members)
        if sector not in _MEMBER_MODELS:
            return []
        return await asyncio.to_thread(self._query_members, sector)

    def _query_records(self, sector: Sector, start: PeriodKey, end: PeriodKey) -> List[SectorRecord]:
        model, to_record = _SECTOR_SOURCES[sector]
        session: Session = self._session_factory()
        try:
            query = session.query(model)
            if sector is Sector.TENANTS:
                query = query.options(joinedload(models.TenantMonthlyIncome.tenant))
            elif sector is Sector.EVENTS:
                query = query.options(joinedload(models.EventMonthlyIncome.event))

            if start == end:
                query = query.filter(model.year == start.year, model.month == start.month)
            else:
                ordinal = model.year * 12 + model.month - 1
                query = query.filter(ordinal >= start.ordinal, ordinal <= end.ordinal)

            rows = query.order_by(model.year, model.month).all()
            LOGGER.debug("Read %s %s rows between %s and %s", len(rows), sector.value, start, end)
            return [to_record(row) for row in rows]
        finally:
            session.close()

    def _query_members(self, sector: Sector) -> List[str]:
        model = _MEMBER_MODELS[sector]
        session: Session = self._session_factory()
        try:
            return [name for (name,) in session.query(model.name).order_by(model.name).all()]
        finally:
            session.close()
