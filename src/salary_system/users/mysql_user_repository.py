from __future__ import annotations

from typing import Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "id, name, email, password_hash, role, created_at"


def _row_to_user(row: dict) -> User:
    return User(
        id=int(row["id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        # users.email uses a binary collation, so this match is case-sensitive
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(name, email, password_hash, role)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (name, email, password_hash, role.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # Lost a race against another signup with the same email
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ConflictError("Email already registered") from e
            raise
