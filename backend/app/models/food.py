"""SQLAlchemy model for the food & beverage monthly balance."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, Numeric, func

from ..database import Base


class FoodStat(Base):
    """Sales and costs of the restaurant for one month.

    ``total_expense`` is the figure used for the net amount. The itemised
    columns are optional and only feed the expense breakdown.
    """

    __tablename__ = "food_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    total_income = Column(Numeric(14, 2), nullable=False, default=0)
    total_expense = Column(Numeric(14, 2), nullable=False, default=0)
    raw_materials_expense = Column(Numeric(14, 2), nullable=False, default=0)
    salaries_expense = Column(Numeric(14, 2), nullable=False, default=0)
    taxes_expense = Column(Numeric(14, 2), nullable=False, default=0)
    other_expense = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


Index("food_stats_period_idx", FoodStat.year, FoodStat.month)
