from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from .encoding import encode_display, sum_decimal_hours


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class HoursReportService:
    """Builds worked-hours reports.

    Totals come from `working_hours_decimal` only. Adding display labels
    ("8.32" + "8.39") would be wrong because minutes do not carry at 60.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def build_hours_report(
        self,
        *,
        start: date,
        end: date,
        worker_id: Optional[int] = None,
        location_id: Optional[int] = None,
    ) -> ReportData:
        query_rows = self._attendance.get_report_rows(
            start_date=start, end_date=end, worker_id=worker_id, location_id=location_id
        )

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            rec = r.record
            out_rows.append(
                {
                    "worker_id": r.worker_id,
                    "full_name": r.full_name,
                    "email": r.email,
                    "location": r.location_name,
                    "date": rec.civil_date.strftime("%Y-%m-%d"),
                    "clock_in": rec.clock_in or "",
                    "clock_out": rec.clock_out or "",
                    "break_start": ", ".join(b.start for b in rec.breaks if b.start),
                    "break_end": ", ".join(b.end for b in rec.breaks if b.end),
                    "break_minutes": rec.break_minutes,
                    "working_hours": rec.working_hours_display,
                    "working_hours_decimal": round(rec.working_hours_decimal, 2),
                    "status": rec.status.value,
                }
            )

            s = summary_map.get(r.worker_id)
            if not s:
                s = {
                    "worker_id": r.worker_id,
                    "full_name": r.full_name,
                    "email": r.email,
                    "days": 0,
                    "decimals": [],
                }
                summary_map[r.worker_id] = s
            s["days"] += 1
            s["decimals"].append(rec.working_hours_decimal)

        summary = []
        for s in summary_map.values():
            total = sum_decimal_hours(s["decimals"])
            summary.append(
                {
                    "worker_id": s["worker_id"],
                    "full_name": s["full_name"],
                    "email": s["email"],
                    "days": s["days"],
                    "total_hours_decimal": round(total, 2),
                    "total_hours": encode_display(round(total * 60)),
                }
            )

        summary.sort(key=lambda x: x["total_hours_decimal"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)
