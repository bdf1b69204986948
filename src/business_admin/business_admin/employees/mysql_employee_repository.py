from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, join_keywords, split_keywords
from .model import Employee, EmployeeInput
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, name, aadhar_id, joining_date, age, status,
    search_keywords, created_at, updated_at, deleted_at
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        name=row["name"],
        joining_date=row["joining_date"],
        aadhar_id=row.get("aadhar_id"),
        age=int(row["age"]) if row.get("age") is not None else None,
        status=EmployeeStatus(row["status"]),
        search_keywords=split_keywords(row.get("search_keywords")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        deleted_at=row.get("deleted_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_by_status(self, status: EmployeeStatus) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE status=%s
                ORDER BY created_at DESC, employee_id DESC
                """,
                (status.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def find_by_aadhar_id(self, aadhar_id: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE aadhar_id=%s", (aadhar_id,))
            return [_to_employee(r) for r in fetchall(cur)]

    def create(self, data: EmployeeInput, *, search_keywords: Sequence[str], status: EmployeeStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, aadhar_id, joining_date, age, status, search_keywords)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    data.name,
                    data.aadhar_id,
                    data.joining_date,
                    data.age,
                    status.value,
                    join_keywords(search_keywords),
                ),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, data: EmployeeInput, *, search_keywords: Sequence[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, aadhar_id=%s, joining_date=%s, age=%s, search_keywords=%s
                WHERE employee_id=%s
                """,
                (
                    data.name,
                    data.aadhar_id,
                    data.joining_date,
                    data.age,
                    join_keywords(search_keywords),
                    int(employee_id),
                ),
            )
            return cur.rowcount > 0

    def set_status(self, employee_id: int, *, status: EmployeeStatus, deleted_at: Optional[datetime] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET status=%s, deleted_at=%s WHERE employee_id=%s",
                (status.value, deleted_at, int(employee_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
