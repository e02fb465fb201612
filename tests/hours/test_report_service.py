from __future__ import annotations

import io
from datetime import date

import pandas as pd

from src.timeclock.timeclock.attendance.model import AttendanceRecord, AttendanceReportRow, BreakSlot
from src.timeclock.timeclock.core.enums import RecordStatus
from src.timeclock.timeclock.hours.encoding import encode_decimal, encode_display
from src.timeclock.timeclock.hours.export import export_hours_xlsx
from src.timeclock.timeclock.hours.report_service import HoursReportService


class FakeAttendanceRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_args = None

    def get_report_rows(self, *, start_date: date, end_date: date, worker_id=None, location_id=None):
        self.last_args = {
            "start_date": start_date,
            "end_date": end_date,
            "worker_id": worker_id,
            "location_id": location_id,
        }
        return self._rows


def _row(worker_id: int, day: int, net_minutes: int, name: str = "A") -> AttendanceReportRow:
    return AttendanceReportRow(
        worker_id=worker_id,
        full_name=name,
        email=f"{name.lower()}@example.com",
        location_name="Head Office (Sydney CBD)",
        record=AttendanceRecord(
            attendance_id=day,
            worker_id=worker_id,
            location_id=10,
            civil_date=date(2025, 3, day),
            clock_in="08:00",
            clock_out="17:00",
            breaks=(BreakSlot("12:00", "12:30"), BreakSlot(), BreakSlot()),
            break_minutes=30,
            working_hours_display=encode_display(net_minutes),
            working_hours_decimal=encode_decimal(net_minutes),
            status=RecordStatus.COMPLETED,
        ),
    )


def test_summary_totals_use_decimal_hours():
    # 8h32 + 8h39 = 17h11 (17.18 decimal), not 16.71
    rows = [_row(1, 5, 8 * 60 + 32), _row(1, 6, 8 * 60 + 39)]

    report = HoursReportService(FakeAttendanceRepo(rows)).build_hours_report(
        start=date(2025, 3, 1), end=date(2025, 3, 31)
    )

    summary = report.summary[0]
    assert summary["days"] == 2
    assert summary["total_hours_decimal"] == 17.18
    assert summary["total_hours"] == "17.11"
    assert [r["working_hours"] for r in report.rows] == ["8.32", "8.39"]
    assert report.rows[0]["break_start"] == "12:00"


def test_summary_sorted_by_total_hours():
    rows = [_row(1, 5, 300, "A"), _row(2, 5, 500, "B")]

    report = HoursReportService(FakeAttendanceRepo(rows)).build_hours_report(
        start=date(2025, 3, 1), end=date(2025, 3, 31)
    )

    assert [s["worker_id"] for s in report.summary] == [2, 1]


def test_report_forwards_filters():
    repo = FakeAttendanceRepo([])

    HoursReportService(repo).build_hours_report(
        start=date(2025, 3, 1), end=date(2025, 3, 31), worker_id=7, location_id=10
    )

    assert repo.last_args["worker_id"] == 7
    assert repo.last_args["location_id"] == 10


def test_excel_export_keeps_display_as_text():
    rows = [_row(1, 5, 8 * 60 + 30)]
    report = HoursReportService(FakeAttendanceRepo(rows)).build_hours_report(
        start=date(2025, 3, 1), end=date(2025, 3, 31)
    )

    content = export_hours_xlsx(report)
    sheets = pd.read_excel(io.BytesIO(content), sheet_name=None, dtype={"Work Hours (h.mm)": str})

    assert set(sheets) == {"Attendance Records", "Summary"}
    records = sheets["Attendance Records"]
    assert records.loc[0, "Work Hours (h.mm)"] == "8.30"
    assert records.loc[0, "Work Hours (decimal)"] == 8.5
    assert sheets["Summary"].loc[0, "Total (decimal)"] == 8.5
