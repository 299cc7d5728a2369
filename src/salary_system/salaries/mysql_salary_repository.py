from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentMethod, SalaryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import SalaryFields, SalaryFilter, SalaryRecord, SalaryStats
from .repository import SalaryRepository

_SALARY_COLUMNS = """
    id, user_id, type, amount, paid_to, paid_on, paid_through,
    start_date, end_date, remarks, created_at, updated_at
"""


def _row_to_record(r: dict) -> SalaryRecord:
    return SalaryRecord(
        id=int(r["id"]),
        owner_user_id=int(r["user_id"]),
        type=SalaryType(r["type"]),
        amount=Decimal(str(r["amount"])),
        paid_to=r["paid_to"],
        paid_on=normalize_mysql_date(r["paid_on"]),
        paid_through=PaymentMethod(r["paid_through"]),
        start_date=normalize_mysql_date(r["start_date"]),
        end_date=normalize_mysql_date(r["end_date"]),
        remarks=r.get("remarks"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _like_contains(text: str) -> str:
    # LIKE pattern matching text literally anywhere; backslash is the MySQL escape
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _where(criteria: SalaryFilter) -> tuple[str, list[object]]:
    clauses = ["1=1"]
    params: list[object] = []

    # paid_on is a DATE column, so inclusive bounds cover whole days
    if criteria.start_date is not None:
        clauses.append("paid_on >= %s")
        params.append(criteria.start_date)
    if criteria.end_date is not None:
        clauses.append("paid_on <= %s")
        params.append(criteria.end_date)
    if criteria.type is not None:
        clauses.append("type=%s")
        params.append(criteria.type.value)
    if criteria.paid_to:
        clauses.append("paid_to LIKE %s")
        params.append(_like_contains(criteria.paid_to))
    if criteria.paid_through is not None:
        clauses.append("paid_through=%s")
        params.append(criteria.paid_through.value)
    if criteria.owner_user_id is not None:
        clauses.append("user_id=%s")
        params.append(int(criteria.owner_user_id))

    return " AND ".join(clauses), params


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, owner_user_id: int, fields: SalaryFields) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salaries(type, amount, paid_to, paid_on, paid_through,
                                     start_date, end_date, remarks, user_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    fields.type.value,
                    fields.amount,
                    fields.paid_to,
                    fields.paid_on,
                    fields.paid_through.value,
                    fields.start_date,
                    fields.end_date,
                    fields.remarks,
                    int(owner_user_id),
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SALARY_COLUMNS} FROM salaries WHERE id=%s", (int(salary_id),))
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def update(self, *, salary_id: int, fields: SalaryFields) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salaries
                SET type=%s, amount=%s, paid_to=%s, paid_on=%s, paid_through=%s,
                    start_date=%s, end_date=%s, remarks=%s, updated_at=CURRENT_TIMESTAMP
                WHERE id=%s
                """,
                (
                    fields.type.value,
                    fields.amount,
                    fields.paid_to,
                    fields.paid_on,
                    fields.paid_through.value,
                    fields.start_date,
                    fields.end_date,
                    fields.remarks,
                    int(salary_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salaries WHERE id=%s", (int(salary_id),))
            return cur.rowcount > 0

    def list(self, criteria: SalaryFilter) -> Sequence[SalaryRecord]:
        where, params = _where(criteria)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SALARY_COLUMNS}
                FROM salaries
                WHERE {where}
                ORDER BY paid_on DESC, id DESC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def stats(self, criteria: SalaryFilter) -> SalaryStats:
        where, params = _where(criteria)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COALESCE(SUM(amount), 0) AS total,
                       COUNT(*) AS cnt,
                       COUNT(DISTINCT paid_to) AS unique_employees
                FROM salaries
                WHERE {where}
                """,
                tuple(params),
            )
            r = fetchone(cur) or {}

        count = int(r.get("cnt") or 0)
        total = float(r.get("total") or 0)
        return SalaryStats(
            total=total,
            count=count,
            unique_employees=int(r.get("unique_employees") or 0),
            average=total / count if count else 0,
        )
