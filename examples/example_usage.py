"""Example: drive the scan coordinator directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.timeclock.timeclock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, timezone=settings.FACILITY_TIMEZONE)
    result = container.scan_coordinator.handle_scan(
        2, "ChIJP3Sa8ziYEmsRUKgyFmh9AQM", "CLOCK_IN", "2026-03-05T21:28:00Z"
    )
    print(result)
    print(container.attendance_service.get_history_ui(2, limit=5))


if __name__ == "__main__":
    main()
