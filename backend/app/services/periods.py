"""Calendar helpers for monthly aggregation buckets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

MONTH_NAMES = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)

# Same abbreviations the es-ES locale produces for the short month format.
MONTH_SHORT_NAMES = (
    "ene",
    "feb",
    "mar",
    "abr",
    "may",
    "jun",
    "jul",
    "ago",
    "sept",
    "oct",
    "nov",
    "dic",
)


@dataclass(frozen=True, order=True)
class PeriodKey:
    """A ``(year, month)`` bucket.

    Months are not range-checked: a period such as ``(2025, 13)`` is a valid
    key that simply never matches stored rows. Only the calendar helpers
    (:meth:`shift`, :meth:`previous`, labels) assume ``1 <= month <= 12``.
    """

    year: int
    month: int

    @classmethod
    def from_date(cls, value: date) -> "PeriodKey":
        return cls(value.year, value.month)

    @classmethod
    def current(cls, today: date | None = None) -> "PeriodKey":
        return cls.from_date(today or date.today())

    @classmethod
    def parse(cls, period_key: str) -> "PeriodKey":
        """Parse a ``YYYY-MM`` string."""

        if not period_key:
            raise ValueError("period_key is required")
        try:
            year_str, month_str = period_key.split("-", maxsplit=1)
            return cls(int(year_str), int(month_str))
        except ValueError as exc:
            raise ValueError("Invalid period key format, expected YYYY-MM") from exc

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def ordinal(self) -> int:
        return self.year * 12 + (self.month - 1)

    @property
    def label(self) -> str:
        if 1 <= self.month <= 12:
            return MONTH_SHORT_NAMES[self.month - 1]
        return self.key

    @property
    def month_name(self) -> str:
        if 1 <= self.month <= 12:
            return MONTH_NAMES[self.month - 1]
        return str(self.month)

    def shift(self, months: int) -> "PeriodKey":
        """Return the period ``months`` away, crossing year boundaries."""

        year, month_index = divmod(self.ordinal + months, 12)
        return PeriodKey(year, month_index + 1)

    def previous(self) -> "PeriodKey":
        return self.shift(-1)

    def __str__(self) -> str:
        return self.key


def trailing_window(size: int, today: date | None = None) -> List[PeriodKey]:
    """Return ``size`` consecutive periods ending at the current month, oldest first."""

    if size < 1:
        raise ValueError("window size must be a positive integer")
    end = PeriodKey.current(today)
    return [end.shift(-offset) for offset in range(size - 1, -1, -1)]


def calendar_year(year: int) -> List[PeriodKey]:
    """Return the twelve periods of ``year``, January first."""

    return [PeriodKey(year, month) for month in range(1, 13)]
