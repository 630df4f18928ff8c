"""CLI utility to print the monthly overview and export the report as CSV."""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from ..database import get_session_factory
from ..services import AggregationService, PeriodKey, SqlAlchemySectorGateway
from ..services.report_export import write_report_csv
from ..services.sectors import ALL_SECTORS, SECTOR_DESCRIPTORS

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    today = date.today()
    parser = argparse.ArgumentParser(
        description="Muestra el resumen mensual por sector y exporta el reporte en CSV."
    )
    parser.add_argument("--year", type=int, default=today.year, help="Año del reporte.")
    parser.add_argument("--month", type=int, default=today.month, help="Mes del reporte (1-12).")
    parser.add_argument("--csv", type=Path, default=None, help="Ruta del archivo CSV a generar.")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Muestra las consultas realizadas por cada sector.",
    )
    return parser.parse_args(argv)


async def _collect(period: PeriodKey):
    gateway = SqlAlchemySectorGateway(get_session_factory())
    return await asyncio.gather(
        AggregationService.overview_with_variance(gateway, period),
        AggregationService.full_report(gateway, period),
    )


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    period = PeriodKey(args.year, args.month)
    comparison, report = asyncio.run(_collect(period))

    current = comparison.data.current
    LOGGER.info("Resumen de %s %s", period.month_name, period.year)
    for sector in ALL_SECTORS:
        LOGGER.info(
            "%s: %s (%s%%)",
            SECTOR_DESCRIPTORS[sector].label,
            current.amount(sector),
            comparison.data.variances[sector.value],
        )
    LOGGER.info("Total: %s (%s%%)", current.total, comparison.data.variances["total"])

    if comparison.errors:
        LOGGER.warning("Sectores sin datos por error: %s", ", ".join(sorted(comparison.errors)))

    if args.csv is not None:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        with args.csv.open("w", newline="", encoding="utf-8") as handle:
            write_report_csv(report.data, handle)
        LOGGER.info("Reporte exportado en %s", args.csv)

    return 0 if comparison.success and report.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
