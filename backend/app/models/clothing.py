"""SQLAlchemy model for clothing sales."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, Numeric, func

from ..database import Base


class ClothingStat(Base):
    """Income from clothing sales in one month."""

    __tablename__ = "clothing_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    total_income = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


Index("clothing_stats_period_idx", ClothingStat.year, ClothingStat.month)
