"""SQLAlchemy models for tenants and their monthly rent."""

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


class Tenant(Base):
    """A business renting space inside the complex."""

    __tablename__ = "tenants"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(150), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    incomes = relationship(
        "TenantMonthlyIncome",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )


class TenantMonthlyIncome(Base):
    """Rent collected from one tenant in one month."""

    __tablename__ = "tenant_monthly_income"
    __table_args__ = (
        UniqueConstraint("tenant_id", "year", "month", name="uq_tenant_monthly_income_period"),
    )

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(GUID(), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    total_income = Column(Numeric(14, 2), nullable=False, default=0)

    tenant = relationship("Tenant", back_populates="incomes")


Index("tenant_monthly_income_period_idx", TenantMonthlyIncome.year, TenantMonthlyIncome.month)
