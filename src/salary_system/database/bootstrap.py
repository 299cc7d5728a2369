from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def schema_statements(sql: str) -> list[str]:
    """Split schema.sql into statements.

    The schema holds only DDL, with "--" line comments and no ";" inside literals.
    """

    sql = re.sub(r"(?m)^\s*--.*$", "", sql)
    return [stmt.strip() for stmt in sql.split(";") if stmt.strip()]


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[str | Path] = None) -> None:
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    schema_path = Path(schema_path or SCHEMA_PATH)
    statements = schema_statements(schema_path.read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied schema %s to %s@%s/%s", schema_path.name, target.user, target.host, target.database)


def ensure_admin_user(
    db_config: dict,
    *,
    name: str,
    email: str,
    password: str,
    password_hash_method: str = "scrypt",
) -> int:
    """Create the admin account, or promote and reset it when the email exists."""

    target = DBConfig.from_dict(db_config)
    password_hash = generate_password_hash(password, method=password_hash_method)

    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT id FROM users WHERE email=%s", (email,))
        existing = cur.fetchone()
        if existing:
            cur.execute(
                "UPDATE users SET name=%s, password_hash=%s, role=%s WHERE id=%s",
                (name, password_hash, Role.ADMIN.value, int(existing["id"])),
            )
            user_id = int(existing["id"])
        else:
            cur.execute(
                "INSERT INTO users (name, email, password_hash, role) VALUES (%s, %s, %s, %s)",
                (name, email, password_hash, Role.ADMIN.value),
            )
            user_id = int(cur.lastrowid)
        conn.commit()
    finally:
        conn.close()

    return user_id


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
