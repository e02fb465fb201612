"""Schema and demo-data setup for a fresh MySQL database.

Used by `create_app` (AUTO_INIT_DB / AUTO_SEED_DB) and `scripts/init_db.py`.
Every statement is idempotent, so running it against an existing database is safe.
"""
from __future__ import annotations

import re
from contextlib import closing
from pathlib import Path
from typing import Iterable, Optional

import structlog
from werkzeug.security import generate_password_hash

from .connection import DBConfig, DatabaseConnection

logger = structlog.get_logger(__name__)

# Demo accounts: (full name, email, password, role)
DEMO_USERS = (
    ("Admin Demo", "admin@example.com", "admin123", "ADMIN"),
    ("Worker Demo", "worker@example.com", "worker123", "EMPLOYEE"),
)

_DB_SWITCH = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def _factory(db_config: dict) -> DatabaseConnection:
    # Not the shared singleton: bootstrap may run before the database exists.
    return DatabaseConnection(DBConfig.from_dict(db_config))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a SQL script on ';' outside quotes; '--' comment lines are dropped."""
    sql = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))

    buf: list[str] = []
    quote: Optional[str] = None
    escaped = False

    for ch in sql:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
        elif ch == ";" and quote is None:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def run_script(db_config: dict, path: str | Path) -> int:
    """Execute a .sql file against the configured database; returns the statement count."""
    # The target database comes from config, never from the script.
    sql = _DB_SWITCH.sub("", Path(path).read_text(encoding="utf-8"))
    count = 0
    with closing(_factory(db_config).connect()) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    return count


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    with closing(factory.connect(with_database=False)) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = run_script(db_config, schema_path)
    logger.info("schema_applied", path=str(schema_path), statements=count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = run_script(db_config, seed_path)
    logger.info("seed_applied", path=str(seed_path), statements=count)


def ensure_demo_users(db_config: dict) -> None:
    """Upsert the demo accounts, all bound to the first location."""
    with closing(_factory(db_config).connect()) as conn:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT location_id FROM locations ORDER BY location_id LIMIT 1")
        row = cur.fetchone()
        if not row:
            raise RuntimeError("No locations found; apply seed.sql before creating demo users")

        for full_name, email, password, role in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (full_name, email, password_hash, role, location_id)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    full_name=VALUES(full_name), password_hash=VALUES(password_hash),
                    role=VALUES(role), location_id=VALUES(location_id), is_active=1
                """,
                (full_name, email, generate_password_hash(password), role, int(row["location_id"])),
            )
        conn.commit()
    logger.info("demo_users_ready", emails=[u[1] for u in DEMO_USERS])


def list_tables(db_config: dict) -> list[str]:
    with closing(_factory(db_config).connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
