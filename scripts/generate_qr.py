"""Write a printable QR code PNG for every active location.

Usage: python scripts/generate_qr.py [output_dir]
"""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timeclock.timeclock.database.connection import DBConfig, DatabaseConnection
from src.timeclock.timeclock.database.mysql_base import db_cursor, fetchall
from src.timeclock.timeclock.locations.model import Location
from src.timeclock.timeclock.locations.qr import make_location_qr_png


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    out_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else REPO_ROOT / "qr_codes"
    out_dir.mkdir(parents=True, exist_ok=True)

    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    with db_cursor(conn) as (_, cur):
        cur.execute(
            "SELECT location_id, name, branch, address, place_identifier FROM locations WHERE is_active=1"
        )
        rows = fetchall(cur)

    for r in rows:
        location = Location(
            location_id=int(r["location_id"]),
            name=r["name"],
            branch=r.get("branch"),
            address=r["address"],
            place_identifier=r["place_identifier"],
        )
        path = out_dir / f"location_{location.location_id}.png"
        path.write_bytes(make_location_qr_png(location, box_size=getattr(settings, "QR_BOX_SIZE", 10)))
        print(f"{location.display_name}: {path}")


if __name__ == "__main__":
    main()
