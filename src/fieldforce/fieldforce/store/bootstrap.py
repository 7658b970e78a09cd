from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DatabaseConnection, DBConfig
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql names a database; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _statements(sql: str) -> Iterable[str]:
    # Schema files hold DDL only, no ';' inside literals.
    for stmt in sql.split(";"):
        stmt = stmt.strip()
        if stmt:
            yield stmt


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config)), dictionary=False) as (_, cur):
        for stmt in _statements(sql):
            cur.execute(stmt)
    logger.info("Applied schema %s", schema_path)


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config)), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
