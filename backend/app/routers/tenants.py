"""Router exposing tenants and the rent they pay."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..dashboard_cache import DashboardCache
from ..database import get_db
from ..dependencies import http_error_from
from ..security import require_session
from ..services import ManagementServiceError, TenantService

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/", response_model=schemas.TenantListResponse)
def list_tenants(db: Session = Depends(get_db)) -> schemas.TenantListResponse:
    tenants = TenantService.list_members(db)
    return schemas.TenantListResponse(items=[schemas.TenantRead.model_validate(item) for item in tenants])


@router.post("/", response_model=schemas.TenantRead, status_code=status.HTTP_201_CREATED)
def create_tenant(payload: schemas.TenantCreate, db: Session = Depends(get_db)) -> schemas.TenantRead:
    try:
        tenant = TenantService.create_member(db, payload.name)
    except (ValueError, ManagementServiceError) as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return schemas.TenantRead.model_validate(tenant)


@router.get("/incomes", response_model=schemas.TenantIncomeListResponse)
def list_tenant_incomes(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    tenant_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> schemas.TenantIncomeListResponse:
    """Return rent rows from the most recent period, with the tenant name."""

    rows = TenantService.list_incomes(db, year=year, month=month, member_id=tenant_id)
    return schemas.TenantIncomeListResponse(items=[schemas.TenantIncomeRead(**row) for row in rows])


@router.put("/incomes", response_model=schemas.TenantIncomeRead)
def upsert_tenant_income(
    payload: schemas.TenantIncomeUpsert,
    db: Session = Depends(get_db),
) -> schemas.TenantIncomeRead:
    try:
        row = TenantService.upsert_income(
            db,
            payload.tenant_id,
            payload.year,
            payload.month,
            payload.total_income,
        )
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
    return schemas.TenantIncomeRead(**row)


@router.delete("/incomes/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tenant_income(income_id: str, db: Session = Depends(get_db)) -> None:
    try:
        TenantService.delete_income(db, income_id)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tenant(tenant_id: str, db: Session = Depends(get_db)) -> None:
    """Delete a tenant and every rent row recorded for it."""

    tenant = TenantService.get_member(db, tenant_id)
    if tenant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inquilino no encontrado")
    try:
        TenantService.delete_member(db, tenant)
    except ManagementServiceError as exc:
        raise http_error_from(exc) from exc
    DashboardCache.invalidate()
