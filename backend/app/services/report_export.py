"""CSV rendering of the monthly report."""

from __future__ import annotations

import csv
import io
from typing import Dict, List, TextIO

from .aggregation import MonthReport
from .sectors import ALL_SECTORS, SECTOR_DESCRIPTORS

REPORT_FIELDS = ["sector", "period", "member", "income", "expense", "net", "units"]


def report_rows(report: MonthReport) -> List[Dict[str, str]]:
    rows = []
    for sector in ALL_SECTORS:
        descriptor = SECTOR_DESCRIPTORS[sector]
        for record in report.sectors.get(sector, []):
            rows.append(
                {
                    "sector": sector.value,
                    "period": record.period.key,
                    "member": record.member or "",
                    "income": str(record.income),
                    "expense": str(record.expense) if descriptor.has_expense and record.expense is not None else "",
                    "net": str(descriptor.net_amount(record)),
                    "units": "" if record.units is None else str(record.units),
                }
            )
    return rows


def write_report_csv(report: MonthReport, stream: TextIO) -> None:
    """Write the summary block followed by one line per stored record."""

    writer = csv.writer(stream)
    writer.writerow(["Reporte", report.period.key, report.period.month_name])
    writer.writerow(["sector", "total"])
    for sector in ALL_SECTORS:
        writer.writerow([SECTOR_DESCRIPTORS[sector].label, str(report.summary.amount(sector))])
    writer.writerow(["Total", str(report.summary.total)])
    writer.writerow([])

    detail = csv.DictWriter(stream, fieldnames=REPORT_FIELDS)
    detail.writeheader()
    detail.writerows(report_rows(report))


def render_report_csv(report: MonthReport) -> str:
    buffer = io.StringIO()
    write_report_csv(report, buffer)
    return buffer.getvalue()
