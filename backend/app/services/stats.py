"""Management operations for sports, food and clothing monthly rows."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models, schemas
from .errors import DuplicateRecordError, ManagementServiceError

LOGGER = logging.getLogger(__name__)


def _commit(db: Session, failure_message: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateRecordError(failure_message) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        LOGGER.exception("Database error: %s", failure_message)
        raise ManagementServiceError(failure_message) from exc


def _paginate(query, order_by, skip: int, limit: int) -> Tuple[list, int]:
    total = query.count()
    items = query.order_by(*order_by).offset(max(skip, 0)).limit(max(limit, 1)).all()
    return items, total


class SportsStatsService:
    """CRUD and upserts for court rental rows."""

    @staticmethod
    def list_stats(
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Tuple[Iterable[models.SportStat], int]:
        query = db.query(models.SportStat)
        if year is not None:
            query = query.filter(models.SportStat.year == year)
        if month is not None:
            query = query.filter(models.SportStat.month == month)
        return _paginate(
            query,
            (models.SportStat.year.desc(), models.SportStat.month.desc(), models.SportStat.sport),
            skip,
            limit,
        )

    @staticmethod
    def get_stat(db: Session, stat_id: int) -> Optional[models.SportStat]:
        return db.query(models.SportStat).filter(models.SportStat.id == stat_id).first()

    @staticmethod
    def exists_for_period(db: Session, year: int, month: int) -> bool:
        return (
            db.query(models.SportStat.id)
            .filter(models.SportStat.year == year, models.SportStat.month == month)
            .first()
            is not None
        )

    @staticmethod
    def upsert_stats(
        db: Session,
        items: Iterable[schemas.SportStatCreate | schemas.SportImportItem],
    ) -> List[models.SportStat]:
        """Insert or update one row per ``(year, month, sport)``.

        All rows are written in a single transaction.
        """

        saved: List[models.SportStat] = []
        for item in items:
            sport = models.normalize_sport(item.sport)
            record = (
                db.query(models.SportStat)
                .filter(
                    models.SportStat.year == item.year,
                    models.SportStat.month == item.month,
                    models.SportStat.sport == sport,
                )
                .first()
            )
            if record is None:
                record = models.SportStat(year=item.year, month=item.month, sport=sport)
                db.add(record)
            record.courts_rented = item.courts_rented
            record.total_income = item.total_income
            db.flush()
            saved.append(record)

        _commit(db, "No se pudieron guardar los datos de deportes.")
        for record in saved:
            db.refresh(record)
        LOGGER.info("Saved %s sports rows", len(saved))
        return saved

    @staticmethod
    def update_stat(
        db: Session,
        stat: models.SportStat,
        data: schemas.SportStatUpdate,
    ) -> models.SportStat:
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(stat, field, value)
        _commit(db, "Ya existe un registro para ese deporte y período.")
        db.refresh(stat)
        return stat

    @staticmethod
    def delete_stat(db: Session, stat: models.SportStat) -> None:
        db.delete(stat)
        _commit(db, "No se pudo eliminar el registro.")


class FoodStatsService:
    """CRUD for the monthly restaurant balance."""

    @staticmethod
    def list_stats(
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        year: Optional[int] = None,
    ) -> Tuple[Iterable[models.FoodStat], int]:
        query = db.query(models.FoodStat)
        if year is not None:
            query = query.filter(models.FoodStat.year == year)
        return _paginate(query, (models.FoodStat.year.desc(), models.FoodStat.month.desc()), skip, limit)

    @staticmethod
    def get_stat(db: Session, stat_id: int) -> Optional[models.FoodStat]:
        return db.query(models.FoodStat).filter(models.FoodStat.id == stat_id).first()

    @staticmethod
    def get_for_period(db: Session, year: int, month: int) -> Optional[models.FoodStat]:
        return (
            db.query(models.FoodStat)
            .filter(models.FoodStat.year == year, models.FoodStat.month == month)
            .first()
        )

    @staticmethod
    def exists_for_period(db: Session, year: int, month: int) -> bool:
        return FoodStatsService.get_for_period(db, year, month) is not None

    @staticmethod
    def create_stat(db: Session, data: schemas.FoodStatCreate) -> models.FoodStat:
        if FoodStatsService.exists_for_period(db, data.year, data.month):
            raise DuplicateRecordError("Ya existen datos de gastronomía para ese período.")
        stat = models.FoodStat(**data.model_dump())
        db.add(stat)
        _commit(db, "No se pudieron guardar los datos de gastronomía.")
        db.refresh(stat)
        return stat

    @staticmethod
    def update_stat(db: Session, stat: models.FoodStat, data: schemas.FoodStatUpdate) -> models.FoodStat:
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(stat, field, value)
        _commit(db, "No se pudo actualizar el registro.")
        db.refresh(stat)
        return stat

    @staticmethod
    def delete_stat(db: Session, stat: models.FoodStat) -> None:
        db.delete(stat)
        _commit(db, "No se pudo eliminar el registro.")


class ClothingStatsService:
    """CRUD for clothing sales."""

    @staticmethod
    def list_stats(
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Tuple[Iterable[models.ClothingStat], int]:
        query = db.query(models.ClothingStat)
        if year is not None:
            query = query.filter(models.ClothingStat.year == year)
        if month is not None:
            query = query.filter(models.ClothingStat.month == month)
        return _paginate(
            query,
            (models.ClothingStat.year.desc(), models.ClothingStat.month.desc()),
            skip,
            limit,
        )

    @staticmethod
    def get_stat(db: Session, stat_id: int) -> Optional[models.ClothingStat]:
        return db.query(models.ClothingStat).filter(models.ClothingStat.id == stat_id).first()

    @staticmethod
    def create_stat(db: Session, data: schemas.ClothingStatCreate) -> models.ClothingStat:
        exists = (
            db.query(models.ClothingStat.id)
            .filter(models.ClothingStat.year == data.year, models.ClothingStat.month == data.month)
            .first()
        )
        if exists is not None:
            raise DuplicateRecordError("Ya existen ventas de indumentaria para ese período.")
        stat = models.ClothingStat(**data.model_dump())
        db.add(stat)
        _commit(db, "No se pudieron guardar las ventas de indumentaria.")
        db.refresh(stat)
        return stat

    @staticmethod
    def update_stat(
        db: Session,
        stat: models.ClothingStat,
        data: schemas.ClothingStatUpdate,
    ) -> models.ClothingStat:
        stat.total_income = data.total_income
        _commit(db, "No se pudo actualizar el registro.")
        db.refresh(stat)
        return stat

    @staticmethod
    def delete_stat(db: Session, stat: models.ClothingStat) -> None:
        db.delete(stat)
        _commit(db, "No se pudo eliminar el registro.")
