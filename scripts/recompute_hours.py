"""Rebuild derived hours for stored records after manual data fixes.

Usage: python scripts/recompute_hours.py YYYY-MM-DD YYYY-MM-DD
"""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timeclock.timeclock.common.datetime_utils import parse_iso_date
from src.timeclock.timeclock.container import build_container
from src.timeclock.timeclock.hours.encoding import display_to_minutes


def main() -> None:
    if len(sys.argv) != 3:
        raise SystemExit(__doc__)
    start, end = parse_iso_date(sys.argv[1]), parse_iso_date(sys.argv[2])

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    rows = container.attendance_repo.get_report_rows(start_date=start, end_date=end)
    changed = 0
    for row in rows:
        before = row.record
        after = container.attendance_service.recompute(before.worker_id, before.civil_date)
        if after.working_hours_display != before.working_hours_display:
            changed += 1
            delta = display_to_minutes(after.working_hours_display) - display_to_minutes(before.working_hours_display)
            print(
                f"worker={before.worker_id} date={before.civil_date}: "
                f"{before.working_hours_display} -> {after.working_hours_display} ({delta:+d} min)"
            )
    print(f"Checked {len(rows)} records, updated {changed}")


if __name__ == "__main__":
    main()
