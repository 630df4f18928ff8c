"""Router exposing the aggregated dashboard views."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from .. import schemas
from ..dashboard_cache import DashboardCache
from ..dependencies import get_sector_gateway, resolve_period
from ..security import require_session
from ..services import AggregationService, PeriodKey, SectorGateway
from ..services.aggregation import AggregationResult, OverviewSnapshot
from ..services.report_export import render_report_csv
from ..services.variance import build_variance

LOGGER = logging.getLogger(__name__)

DEFAULT_EVOLUTION_RANGE = 12

router = APIRouter(dependencies=[Depends(require_session)])


def snapshot_to_schema(snapshot: OverviewSnapshot) -> schemas.OverviewSnapshotRead:
    return schemas.OverviewSnapshotRead(
        period_key=snapshot.period.key,
        year=snapshot.period.year,
        month=snapshot.period.month,
        name=snapshot.period.label,
        sports=snapshot.sports,
        food=snapshot.food,
        clothing=snapshot.clothing,
        tenants=snapshot.tenants,
        events=snapshot.events,
        total=snapshot.total,
    )


async def _build_overview(
    gateway: SectorGateway,
    period: PeriodKey,
    include_variance: bool,
) -> schemas.OverviewResponse:
    if not include_variance:
        result = await AggregationService.overview(gateway, period)
        return schemas.OverviewResponse(
            status=result.status.value,
            failed_sectors=result.failed_sectors,
            data=snapshot_to_schema(result.data),
        )

    comparison = await AggregationService.overview_with_variance(gateway, period)
    return schemas.OverviewResponse(
        status=comparison.status.value,
        failed_sectors=comparison.failed_sectors,
        data=snapshot_to_schema(comparison.data.current),
        previous=snapshot_to_schema(comparison.data.previous),
        variances=comparison.data.variances,
    )


def _evolution_response(result: AggregationResult, window: int) -> schemas.EvolutionResponse:
    return schemas.EvolutionResponse(
        status=result.status.value,
        failed_sectors=result.failed_sectors,
        range=window,
        items=[snapshot_to_schema(entry) for entry in result.data],
    )


@router.get("/overview", response_model=schemas.OverviewResponse)
async def get_overview(
    year: Optional[int] = Query(None, description="Calendar year, defaults to the current one"),
    month: Optional[int] = Query(None, description="Calendar month, defaults to the current one"),
    include_variance: bool = Query(False, description="Also compare against the previous month"),
    gateway: SectorGateway = Depends(get_sector_gateway),
) -> schemas.OverviewResponse:
    """Return the per-sector totals of one month."""

    period = resolve_period(year, month, date.today())
    return await _build_overview(gateway, period, include_variance)


@router.get("/evolution", response_model=schemas.EvolutionResponse)
async def get_evolution(
    window: int = Query(DEFAULT_EVOLUTION_RANGE, alias="range", ge=1, le=120),
    gateway: SectorGateway = Depends(get_sector_gateway),
) -> schemas.EvolutionResponse:
    """Return the last ``range`` months ending at the current month, oldest first."""

    result = await AggregationService.evolution(gateway, window, today=date.today())
    return _evolution_response(result, window)


@router.get("/evolution/year", response_model=schemas.YearEvolutionResponse)
async def get_year_evolution(
    year: Optional[int] = Query(None, description="Calendar year, defaults to the current one"),
    gateway: SectorGateway = Depends(get_sector_gateway),
) -> schemas.YearEvolutionResponse:
    """Return January to December of ``year``, months without rows as zeros."""

    resolved = year if year is not None else date.today().year
    result = await AggregationService.year_evolution(gateway, resolved)
    return schemas.YearEvolutionResponse(
        status=result.status.value,
        failed_sectors=result.failed_sectors,
        year=resolved,
        items=[snapshot_to_schema(entry) for entry in result.data],
    )


@router.get("/summary", response_model=schemas.DashboardSummaryResponse)
async def get_summary(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    window: int = Query(DEFAULT_EVOLUTION_RANGE, alias="range", ge=1, le=120),
    refresh: bool = Query(False, description="Ignore the cached payload"),
    gateway: SectorGateway = Depends(get_sector_gateway),
) -> schemas.DashboardSummaryResponse:
    """Overview with variance plus evolution, memoized until the next write."""

    today = date.today()
    period = resolve_period(year, month, today)
    cache_key = (period.key, window, PeriodKey.from_date(today).key)

    if refresh:
        DashboardCache.invalidate()
    else:
        cached = DashboardCache.get(cache_key)
        if cached is not None:
            return cached.model_copy(update={"cached": True})

    overview = await _build_overview(gateway, period, include_variance=True)
    evolution = _evolution_response(
        await AggregationService.evolution(gateway, window, today=today),
        window,
    )
    payload = schemas.DashboardSummaryResponse(overview=overview, evolution=evolution, cached=False)

    if overview.status == "ok" and evolution.status == "ok":
        DashboardCache.store(cache_key, payload)
    else:
        LOGGER.info("Not caching dashboard summary for %s: partial data", period)
    return payload


@router.post("/refresh", status_code=status.HTTP_204_NO_CONTENT)
def refresh_dashboard() -> Response:
    DashboardCache.invalidate()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/report", response_model=schemas.MonthReportResponse)
async def get_month_report(
    year: int = Query(..., description="Calendar year"),
    month: int = Query(..., description="Calendar month"),
    gateway: SectorGateway = Depends(get_sector_gateway),
) -> schemas.MonthReportResponse:
    """Return the raw rows of every sector for one month plus the summary totals."""

    result = await AggregationService.full_report(gateway, PeriodKey(year, month))
    report = result.data
    return schemas.MonthReportResponse(
        status=result.status.value,
        failed_sectors=result.failed_sectors,
        period_key=report.period.key,
        year=report.period.year,
        month=report.period.month,
        month_name=report.period.month_name,
        summary=snapshot_to_schema(report.summary),
        sectors={
            sector.value: [dict(record.detail) for record in records]
            for sector, records in report.sectors.items()
        },
    )


@router.get("/report.csv")
async def export_month_report(
    year: int = Query(..., description="Calendar year"),
    month: int = Query(..., description="Calendar month"),
    gateway: SectorGateway = Depends(get_sector_gateway),
) -> Response:
    result = await AggregationService.full_report(gateway, PeriodKey(year, month))
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No se pudo leer ningún sector para el reporte.",
        )
    filename = f"reporte-{result.data.period.key}.csv"
    return Response(
        content=render_report_csv(result.data),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Aggregation-Status": result.status.value,
        },
    )


@router.get("/variance", response_model=schemas.VarianceResponse)
def get_variance(
    current: Decimal = Query(..., description="Current period amount"),
    previous: Decimal = Query(..., description="Previous period amount"),
    allow_negative: bool = Query(False, description="Divide by |previous| for sectors that can go negative"),
) -> schemas.VarianceResponse:
    result = build_variance(current, previous, allow_negative)
    return schemas.VarianceResponse(
        current=result.current,
        previous=result.previous,
        allow_negative=allow_negative,
        percentage=result.percentage,
    )
