"""Router exposing events and their monthly income."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..dashboard_cache import DashboardCache
from ..database import get_db
from ..dependencies import http_error_from
from ..security import require_session
from ..services import EventService, ManagementServiceError

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/", response_model=schemas.EventListResponse)
def list_events(db: Session = Depends(get_db)) -> schemas.EventListResponse:
    events = EventService.list_members(db)
    return schemas.EventListResponse(items=[schemas.EventRead.model_validate(item) for item in events])


@router.post("/", response_model=schemas.EventRead, status_code=status.HTTP_201_CREATED)
def create_event(payload: schemas.EventCreate, db: Session = Depends(get_db)) -> schemas.EventRead:
    try:
        event = EventService.create_member(db, payload.name)
    except (ValueError, ManagementServiceError) as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return schemas.EventRead.model_validate(event)


@router.get("/incomes", response_model=schemas.EventIncomeListResponse)
def list_event_incomes(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    event_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> schemas.EventIncomeListResponse:
    """Return income rows from the most recent period, with the event name."""

    rows = EventService.list_incomes(db, year=year, month=month, member_id=event_id)
    return schemas.EventIncomeListResponse(items=[schemas.EventIncomeRead(**row) for row in rows])


@router.put("/incomes", response_model=schemas.EventIncomeRead)
def upsert_event_income(
    payload: schemas.EventIncomeUpsert,
    db: Session = Depends(get_db),
) -> schemas.EventIncomeRead:
    try:
        row = EventService.upsert_income(
            db,
            payload.event_id,
            payload.year,
            payload.month,
            payload.total_income,
        )
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return schemas.EventIncomeRead(**row)


@router.delete("/incomes/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event_income(income_id: str, db: Session = Depends(get_db)) -> None:
    try:
        EventService.delete_income(db, income_id)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, db: Session = Depends(get_db)) -> None:
    """Delete an event and every income row recorded for it."""

    event = EventService.get_member(db, event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Evento no encontrado")
    try:
        EventService.delete_member(db, event)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
