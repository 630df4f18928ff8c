"""Router exposing court rental figures."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..dashboard_cache import DashboardCache
from ..database import get_db
from ..dependencies import http_error_from
from ..security import require_session
from ..services import ManagementServiceError, SportsStatsService

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/", response_model=schemas.SportStatListResponse)
def list_sports_stats(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
) -> schemas.SportStatListResponse:
    """Return rows ordered from the most recent period."""

    items, total = SportsStatsService.list_stats(db, skip=skip, limit=limit, year=year, month=month)
    return schemas.SportStatListResponse(
        items=[schemas.SportStatRead.model_validate(item) for item in items],
        total=total,
        limit=limit,
        skip=skip,
    )


@router.get("/exists", response_model=schemas.ExistenceResponse)
def sports_period_exists(
    year: int = Query(...),
    month: int = Query(...),
    db: Session = Depends(get_db),
) -> schemas.ExistenceResponse:
    exists = SportsStatsService.exists_for_period(db, year, month)
    return schemas.ExistenceResponse(year=year, month=month, exists=exists)


@router.post("/", response_model=List[schemas.SportStatRead], status_code=status.HTTP_201_CREATED)
def save_sports_stats(
    payload: schemas.SportStatBatch,
    db: Session = Depends(get_db),
) -> List[schemas.SportStatRead]:
    """Insert or update the rows of several disciplines at once."""

    try:
        saved = SportsStatsService.upsert_stats(db, payload.items)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return [schemas.SportStatRead.model_validate(item) for item in saved]


@router.put("/{stat_id}", response_model=schemas.SportStatRead)
def update_sports_stat(
    stat_id: int,
    payload: schemas.SportStatUpdate,
    db: Session = Depends(get_db),
) -> schemas.SportStatRead:
    stat = SportsStatsService.get_stat(db, stat_id)
    if stat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro no encontrado")
    try:
        updated = SportsStatsService.update_stat(db, stat, payload)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return schemas.SportStatRead.model_validate(updated)


@router.delete("/{stat_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sports_stat(stat_id: int, db: Session = Depends(get_db)) -> None:
    stat = SportsStatsService.get_stat(db, stat_id)
    if stat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro no encontrado")
    try:
        SportsStatsService.delete_stat(db, stat)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
