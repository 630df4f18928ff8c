"""Router receiving the monthly sports sheet."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from .. import schemas
from ..dashboard_cache import DashboardCache
from ..database import get_db
from ..security import require_session
from ..services import FinanceImportService, ManagementServiceError

LOGGER = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_session)])


@router.post("/import-finances", response_model=schemas.FinanceImportResponse)
def import_finances(
    payload: Optional[Any] = Body(None),
    db: Session = Depends(get_db),
) -> schemas.FinanceImportResponse:
    """Upsert the indoor padel, outdoor padel and football rows in one transaction."""

    try:
        request = schemas.FinanceImportRequest.model_validate(payload)
    except ValidationError as exc:
        LOGGER.info("Rejected finance import: %s", exc.error_count())
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Datos inválidos") from exc

    try:
        saved = FinanceImportService.import_sports(db, request)
    except ManagementServiceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al insertar los datos",
        ) from exc

    DashboardCache.invalidate()
    return schemas.FinanceImportResponse(message="Datos importados correctamente", imported=len(saved))
