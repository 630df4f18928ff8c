"""Router exposing clothing sales."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..dashboard_cache import DashboardCache
from ..database import get_db
from ..dependencies import http_error_from
from ..security import require_session
from ..services import ClothingStatsService, ManagementServiceError

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/", response_model=schemas.ClothingStatListResponse)
def list_clothing_stats(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
) -> schemas.ClothingStatListResponse:
    items, total = ClothingStatsService.list_stats(db, skip=skip, limit=limit, year=year, month=month)
    return schemas.ClothingStatListResponse(
        items=[schemas.ClothingStatRead.model_validate(item) for item in items],
        total=total,
        limit=limit,
        skip=skip,
    )


@router.post("/", response_model=schemas.ClothingStatRead, status_code=status.HTTP_201_CREATED)
def create_clothing_stat(
    payload: schemas.ClothingStatCreate,
    db: Session = Depends(get_db),
) -> schemas.ClothingStatRead:
    try:
        stat = ClothingStatsService.create_stat(db, payload)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return schemas.ClothingStatRead.model_validate(stat)


@router.put("/{stat_id}", response_model=schemas.ClothingStatRead)
def update_clothing_stat(
    stat_id: int,
    payload: schemas.ClothingStatUpdate,
    db: Session = Depends(get_db),
) -> schemas.ClothingStatRead:
    stat = ClothingStatsService.get_stat(db, stat_id)
    if stat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro no encontrado")
    try:
        updated = ClothingStatsService.update_stat(db, stat, payload)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return schemas.ClothingStatRead.model_validate(updated)


@router.delete("/{stat_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_clothing_stat(stat_id: int, db: Session = Depends(get_db)) -> None:
    stat = ClothingStatsService.get_stat(db, stat_id)
    if stat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro no encontrado")
    try:
        ClothingStatsService.delete_stat(db, stat)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
