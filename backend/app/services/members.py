"""Tenants and events: named members with one income row per month."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .. import models
from ..db_types import canonical_uuid
from .errors import DuplicateRecordError, ManagementServiceError, RecordNotFoundError

LOGGER = logging.getLogger(__name__)


def _normalize_id(value: str) -> Optional[str]:
    try:
        return str(canonical_uuid(value))
    except (TypeError, ValueError):
        return None


class MemberIncomeService:
    """Shared behaviour for member tables with a monthly income child table.

    Subclasses bind the member model, the income model and the name of the
    foreign key column linking them.
    """

    member_model: Any = None
    income_model: Any = None
    member_key: str = ""
    member_label: str = ""

    @classmethod
    def _member_column(cls):
        return getattr(cls.income_model, cls.member_key)

    @classmethod
    def _parent_relationship(cls):
        return getattr(cls.income_model, cls.member_key.replace("_id", ""))

    @classmethod
    def list_members(cls, db: Session) -> List[Any]:
        return db.query(cls.member_model).order_by(cls.member_model.name).all()

    @classmethod
    def get_member(cls, db: Session, member_id: str) -> Optional[Any]:
        normalized = _normalize_id(member_id)
        if normalized is None:
            return None
        return db.query(cls.member_model).filter(cls.member_model.id == normalized).first()

    @classmethod
    def create_member(cls, db: Session, name: str) -> Any:
        cleaned = name.strip()
        if not cleaned:
            raise ValueError("El nombre no puede estar vacío.")
        existing = db.query(cls.member_model).filter(cls.member_model.name == cleaned).first()
        if existing is not None:
            raise DuplicateRecordError(f"Ya existe un {cls.member_label} llamado '{cleaned}'.")

        member = cls.member_model(name=cleaned)
        db.add(member)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DuplicateRecordError(f"Ya existe un {cls.member_label} llamado '{cleaned}'.") from exc
        except SQLAlchemyError as exc:
            db.rollback()
            LOGGER.exception("Unable to create %s %s", cls.member_label, cleaned)
            raise ManagementServiceError(f"No se pudo crear el {cls.member_label}.") from exc
        db.refresh(member)
        LOGGER.info("Created %s %s", cls.member_label, cleaned)
        return member

    @classmethod
    def delete_member(cls, db: Session, member: Any) -> None:
        """Delete a member together with its income rows."""

        db.delete(member)
        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise ManagementServiceError(f"No se pudo eliminar el {cls.member_label}.") from exc

    @classmethod
    def list_incomes(
        cls,
        db: Session,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        member_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        query = db.query(cls.income_model).options(joinedload(cls._parent_relationship()))
        if year is not None:
            query = query.filter(cls.income_model.year == year)
        if month is not None:
            query = query.filter(cls.income_model.month == month)
        if member_id is not None:
            normalized = _normalize_id(member_id)
            if normalized is None:
                return []
            query = query.filter(cls._member_column() == normalized)
        rows = query.order_by(cls.income_model.year.desc(), cls.income_model.month.desc()).all()
        return [cls.to_read(row) for row in rows]

    @classmethod
    def upsert_income(
        cls,
        db: Session,
        member_id: str,
        year: int,
        month: int,
        total_income: Decimal,
    ) -> Dict[str, Any]:
        """Insert or replace the income of one member for one month."""

        member = cls.get_member(db, member_id)
        if member is None:
            raise RecordNotFoundError(f"{cls.member_label.capitalize()} no encontrado.")

        record = (
            db.query(cls.income_model)
            .filter(
                cls._member_column() == member.id,
                cls.income_model.year == year,
                cls.income_model.month == month,
            )
            .first()
        )
        if record is None:
            record = cls.income_model(year=year, month=month)
            setattr(record, cls.member_key, member.id)
            db.add(record)
        record.total_income = total_income

        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            LOGGER.exception("Unable to save %s income for %s-%02d", cls.member_label, year, month)
            raise ManagementServiceError("No se pudo guardar el ingreso.") from exc
        db.refresh(record)
        return cls.to_read(record)

    @classmethod
    def delete_income(cls, db: Session, income_id: str) -> None:
        normalized = _normalize_id(income_id)
        record = None
        if normalized is not None:
            record = db.query(cls.income_model).filter(cls.income_model.id == normalized).first()
        if record is None:
            raise RecordNotFoundError("Ingreso no encontrado.")
        db.delete(record)
        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise ManagementServiceError("No se pudo eliminar el ingreso.") from exc

    @classmethod
    def to_read(cls, row: Any) -> Dict[str, Any]:
        parent = getattr(row, cls.member_key.replace("_id", ""))
        prefix = cls.member_key.replace("_id", "")
        return {
            "id": str(row.id),
            cls.member_key: str(getattr(row, cls.member_key)),
            f"{prefix}_name": parent.name if parent is not None else None,
            "year": row.year,
            "month": row.month,
            "total_income": row.total_income,
        }


class TenantService(MemberIncomeService):
    member_model = models.Tenant
    income_model = models.TenantMonthlyIncome
    member_key = "tenant_id"
    member_label = "inquilino"


class EventService(MemberIncomeService):
    member_model = models.Event
    income_model = models.EventMonthlyIncome
    member_key = "event_id"
    member_label = "evento"
