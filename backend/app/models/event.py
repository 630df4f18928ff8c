"""SQLAlchemy models for events hosted at the complex."""

from __future__ import annotations

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID


class Event(Base):
    """A recurring event line (tournaments, parties, camps...)."""

    __tablename__ = "events"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(150), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    incomes = relationship(
        "EventMonthlyIncome",
        back_populates="event",
        cascade="all, delete-orphan",
    )


class EventMonthlyIncome(Base):
    __tablename__ = "event_monthly_income"
    __table_args__ = (
        UniqueConstraint("event_id", "year", "month", name="uq_event_monthly_income_period"),
    )

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    event_id = Column(GUID(), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    total_income = Column(Numeric(14, 2), nullable=False, default=0)

    event = relationship("Event", back_populates="incomes")


Index("event_monthly_income_period_idx", EventMonthlyIncome.year, EventMonthlyIncome.month)
