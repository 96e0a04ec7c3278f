from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List

from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import format_epoch_ms, require_iso_date
from ..core.exceptions import ValidationError
from ..designations.service import normalize_designation


@dataclass(frozen=True)
class CsvReport:
    filename: str
    content: str


def to_csv(fieldnames: List[str], rows: Iterable[dict]) -> str:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue()


class ExportService:
    """CSV reports over one date of the ledger, limited to the given areas."""

    DETAILED_FIELDS = ["date", "area", "designation", "present", "confirmed", "updated_at", "updated_by"]
    AREA_SUMMARY_FIELDS = ["date", "area", "present_total", "rows_total", "rows_confirmed", "status", "last_updated"]
    DESIGNATION_SUMMARY_FIELDS = ["date", "designation", "present_total", "total_rows", "areas_count"]

    def __init__(self, ledger: AttendanceLedger):
        self._ledger = ledger

    def detailed_rows(self, date_str: str, areas: Iterable[str]) -> List[dict]:
        rows = []
        for area in areas:
            for row in self._ledger.get_area(date_str, area).rows:
                rows.append(
                    {
                        "date": date_str,
                        "area": area,
                        "designation": row.designation_label,
                        "present": "" if row.present is None else row.present,
                        "confirmed": "true" if row.confirmed else "false",
                        "updated_at": format_epoch_ms(row.updated_at),
                        "updated_by": row.updated_by or "",
                    }
                )
        return rows

    def area_summary_rows(self, date_str: str, areas: Iterable[str]) -> List[dict]:
        rows = []
        for area in areas:
            totals = self._ledger.area_totals(date_str, area)
            rows.append(
                {
                    "date": date_str,
                    "area": area,
                    "present_total": totals.total,
                    "rows_total": totals.row_count,
                    "rows_confirmed": totals.confirmed_count,
                    "status": self._ledger.area_status(date_str, area).value,
                    "last_updated": format_epoch_ms(self._ledger.area_last_updated(date_str, area)),
                }
            )
        return rows

    def designation_summary_rows(self, date_str: str, areas: Iterable[str]) -> List[dict]:
        """One line per designation across areas, in first-seen order.

        `total_rows` counts rows that have a present count.
        """
        summary: Dict[str, dict] = {}
        for area in areas:
            for row in self._ledger.get_area(date_str, area).rows:
                key = normalize_designation(row.designation_key or row.designation_label)
                entry = summary.setdefault(
                    key, {"designation": row.designation_label, "total": 0, "counted": 0, "areas": []}
                )
                if row.present is not None:
                    entry["total"] += row.present
                    entry["counted"] += 1
                if area not in entry["areas"]:
                    entry["areas"].append(area)

        return [
            {
                "date": date_str,
                "designation": entry["designation"],
                "present_total": entry["total"],
                "total_rows": entry["counted"],
                "areas_count": len(entry["areas"]),
            }
            for entry in summary.values()
        ]

    def report(self, name: str, date_str: str, areas: Iterable[str]) -> CsvReport:
        reports: Dict[str, tuple[List[str], Callable[[str, Iterable[str]], List[dict]], str]] = {
            "detailed": (self.DETAILED_FIELDS, self.detailed_rows, "headcount_detailed"),
            "area-summary": (self.AREA_SUMMARY_FIELDS, self.area_summary_rows, "headcount_area_summary"),
            "designation-summary": (
                self.DESIGNATION_SUMMARY_FIELDS,
                self.designation_summary_rows,
                "headcount_designation_summary",
            ),
        }
        if name not in reports:
            raise ValidationError(f"Unknown report: {name}")
        date_str = require_iso_date(date_str)
        fields, build, prefix = reports[name]
        return CsvReport(filename=f"{prefix}_{date_str}.csv", content=to_csv(fields, build(date_str, list(areas))))
