"""Router exposing the restaurant balance."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..dashboard_cache import DashboardCache
from ..database import get_db
from ..dependencies import http_error_from
from ..security import require_session
from ..services import FoodStatsService, ManagementServiceError

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/", response_model=schemas.FoodStatListResponse)
def list_food_stats(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    year: Optional[int] = Query(None),
) -> schemas.FoodStatListResponse:
    items, total = FoodStatsService.list_stats(db, skip=skip, limit=limit, year=year)
    return schemas.FoodStatListResponse(
        items=[schemas.FoodStatRead.model_validate(item) for item in items],
        total=total,
        limit=limit,
        skip=skip,
    )


@router.get("/exists", response_model=schemas.ExistenceResponse)
def food_period_exists(
    year: int = Query(...),
    month: int = Query(...),
    db: Session = Depends(get_db),
) -> schemas.ExistenceResponse:
    exists = FoodStatsService.exists_for_period(db, year, month)
    return schemas.ExistenceResponse(year=year, month=month, exists=exists)


@router.get("/period", response_model=schemas.FoodStatRead)
def get_food_stat_for_period(
    year: int = Query(...),
    month: int = Query(...),
    db: Session = Depends(get_db),
) -> schemas.FoodStatRead:
    stat = FoodStatsService.get_for_period(db, year, month)
    if stat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sin datos para ese período")
    return schemas.FoodStatRead.model_validate(stat)


@router.post("/", response_model=schemas.FoodStatRead, status_code=status.HTTP_201_CREATED)
def create_food_stat(payload: schemas.FoodStatCreate, db: Session = Depends(get_db)) -> schemas.FoodStatRead:
    try:
        stat = FoodStatsService.create_stat(db, payload)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return schemas.FoodStatRead.model_validate(stat)


@router.put("/{stat_id}", response_model=schemas.FoodStatRead)
def update_food_stat(
    stat_id: int,
    payload: schemas.FoodStatUpdate,
    db: Session = Depends(get_db),
) -> schemas.FoodStatRead:
    stat = FoodStatsService.get_stat(db, stat_id)
    if stat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro no encontrado")
    try:
        updated = FoodStatsService.update_stat(db, stat, payload)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return schemas.FoodStatRead.model_validate(updated)


@router.delete("/{stat_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_food_stat(stat_id: int, db: Session = Depends(get_db)) -> None:
    stat = FoodStatsService.get_stat(db, stat_id)
    if stat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro no encontrado")
    try:
        FoodStatsService.delete_stat(db, stat)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
