"""SQLAlchemy model for monthly court rental figures."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, Numeric, String, UniqueConstraint, func

from ..database import Base

SPORT_DISCIPLINES = ("padel_indoor", "padel_outdoor", "futbol")


def normalize_sport(value: str | None) -> str:
    """Return the canonical discipline key (``"Padel Indoor"`` -> ``"padel_indoor"``)."""

    return (value or "").strip().lower().replace(" ", "_")


class SportStat(Base):
    """Courts rented and income for one discipline in one month."""

    __tablename__ = "sports_stats"
    __table_args__ = (
        UniqueConstraint("year", "month", "sport", name="uq_sports_stats_period_sport"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    sport = Column(String(50), nullable=False)
    courts_rented = Column(Integer, nullable=False, default=0)
    total_income = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


Index("sports_stats_period_idx", SportStat.year, SportStat.month)
