from __future__ import annotations

import importlib
from pathlib import Path

import structlog
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging import setup_logging
from .container import build_container
from .core.constants import DEFAULT_TIMEZONE
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .hours.controller import register as register_hours
from .locations.controller import register as register_locations
from .scans.controller import register as register_scans

logger = structlog.get_logger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), json=bool(getattr(settings, "LOG_JSON", False)))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    timezone = getattr(settings, "FACILITY_TIMEZONE", DEFAULT_TIMEZONE)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logger.info(
        "app_settings",
        settings=settings_module,
        db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        timezone=timezone,
    )

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("schema_ready", tables=len(list_tables(db_config)))
    if getattr(settings, "AUTO_SEED_DB", False):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_users(db_config)
        logger.info("demo_seed_ready")

    container = build_container(
        db_config=db_config,
        timezone=timezone,
        qr_box_size=int(getattr(settings, "QR_BOX_SIZE", 10)),
    )

    register_scans(app, container)
    register_hours(app, container)
    register_locations(app, container)

    return app
