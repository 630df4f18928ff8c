"""Router exposing the per-sector dashboard pages."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from .. import schemas
from ..dependencies import get_sector_gateway, resolve_period
from ..security import require_session
from ..services import Sector, SectorDashboardService, SectorGateway

router = APIRouter(dependencies=[Depends(require_session)])


def _parse_sector(raw: str) -> Sector:
    try:
        return Sector(raw.strip().lower())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sector desconocido: {raw}",
        ) from exc


@router.get("/{sector}/summary", response_model=schemas.SectorSummaryResponse)
async def get_sector_summary(
    sector: str = Path(..., description="sports, food, clothing, tenants or events"),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    gateway: SectorGateway = Depends(get_sector_gateway),
) -> schemas.SectorSummaryResponse:
    """Monthly KPIs of one sector compared with the previous month."""

    resolved = _parse_sector(sector)
    period = resolve_period(year, month, date.today())
    result = await SectorDashboardService.month_summary(gateway, resolved, period)
    summary = result.data
    return schemas.SectorSummaryResponse(
        status=result.status.value,
        failed_sectors=result.failed_sectors,
        sector=summary.sector.value,
        period_key=summary.period.key,
        income=summary.income,
        expense=summary.expense,
        net=summary.net,
        previous_net=summary.previous_net,
        variation=summary.variation,
        units=summary.units,
        members=[
            schemas.MemberBreakdownRead(
                member=item.member,
                income=item.income,
                expense=item.expense,
                net=item.net,
                units=item.units,
            )
            for item in summary.members
        ],
        expense_breakdown=[
            schemas.ExpenseShareRead(
                key=share.key,
                label=share.label,
                amount=share.amount,
                percentage=share.percentage,
            )
            for share in summary.expense_breakdown
        ],
    )


def _evolution_items(result) -> list[schemas.SectorEvolutionEntryRead]:
    return [
        schemas.SectorEvolutionEntryRead(
            period_key=entry.period.key,
            year=entry.period.year,
            month=entry.period.month,
            name=entry.label,
            income=entry.income,
            expense=entry.expense,
            net=entry.net,
            units=entry.units,
            members=entry.members,
        )
        for entry in result.data
    ]


@router.get("/{sector}/evolution", response_model=schemas.SectorEvolutionResponse)
async def get_sector_evolution(
    sector: str = Path(...),
    window: int = Query(12, alias="range", ge=1, le=120),
    gateway: SectorGateway = Depends(get_sector_gateway),
) -> schemas.SectorEvolutionResponse:
    resolved = _parse_sector(sector)
    result = await SectorDashboardService.sector_evolution(gateway, resolved, window, today=date.today())
    return schemas.SectorEvolutionResponse(
        status=result.status.value,
        failed_sectors=result.failed_sectors,
        sector=resolved.value,
        range=window,
        items=_evolution_items(result),
    )


@router.get("/{sector}/evolution/year", response_model=schemas.SectorYearEvolutionResponse)
async def get_sector_year_evolution(
    sector: str = Path(...),
    year: Optional[int] = Query(None, description="Calendar year, defaults to the current one"),
    gateway: SectorGateway = Depends(get_sector_gateway),
) -> schemas.SectorYearEvolutionResponse:
    resolved = _parse_sector(sector)
    target_year = year if year is not None else date.today().year
    result = await SectorDashboardService.sector_year_evolution(gateway, resolved, target_year)
    return schemas.SectorYearEvolutionResponse(
        status=result.status.value,
        failed_sectors=result.failed_sectors,
        sector=resolved.value,
        year=target_year,
        items=_evolution_items(result),
    )
