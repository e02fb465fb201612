from __future__ import annotations

import io

import pandas as pd

from .report_service import ReportData

ROW_COLUMNS = {
    "full_name": "Name",
    "email": "Email",
    "location": "Location",
    "date": "Date",
    "clock_in": "Clock In",
    "clock_out": "Clock Out",
    "break_start": "Break Start",
    "break_end": "Break End",
    "break_minutes": "Break Time (min)",
    "working_hours": "Work Hours (h.mm)",
    "working_hours_decimal": "Work Hours (decimal)",
}

SUMMARY_COLUMNS = {
    "full_name": "Name",
    "email": "Email",
    "days": "Days",
    "total_hours": "Total (h.mm)",
    "total_hours_decimal": "Total (decimal)",
}


def export_hours_xlsx(report: ReportData) -> bytes:
    """Write the report to an in-memory workbook (records + summary sheets)."""
    rows = pd.DataFrame(report.rows, columns=list(ROW_COLUMNS)).rename(columns=ROW_COLUMNS)
    rows.insert(0, "No.", range(1, len(rows) + 1))
    # Display labels are text; keep Excel from turning "8.30" into 8.3.
    rows["Work Hours (h.mm)"] = rows["Work Hours (h.mm)"].astype(str)

    summary = pd.DataFrame(report.summary, columns=list(SUMMARY_COLUMNS)).rename(columns=SUMMARY_COLUMNS)
    summary["Total (h.mm)"] = summary["Total (h.mm)"].astype(str)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        rows.to_excel(writer, index=False, sheet_name="Attendance Records")
        summary.to_excel(writer, index=False, sheet_name="Summary")
    return output.getvalue()
