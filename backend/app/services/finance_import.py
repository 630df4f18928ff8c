"""Import of the monthly sports sheet uploaded from the dashboard."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from .. import models, schemas
from .stats import SportsStatsService

LOGGER = logging.getLogger(__name__)


class FinanceImportService:
    """Stores the three discipline rows of an uploaded sheet."""

    @staticmethod
    def import_sports(db: Session, payload: schemas.FinanceImportRequest) -> List[models.SportStat]:
        items = payload.items()
        periods = {(item.year, item.month) for item in items}
        if len(periods) > 1:
            LOGGER.warning("Import payload mixes periods: %s", sorted(periods))
        saved = SportsStatsService.upsert_stats(db, items)
        LOGGER.info("Imported %s sports rows for %s", len(saved), ", ".join(f"{y}-{m:02d}" for y, m in sorted(periods)))
        return saved
