from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import AttendanceInput, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, attendance_key, employee_id, work_date, status,
    marked_by, marked_at, notes, updated_at
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        attendance_key=r["attendance_key"],
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        marked_by=r["marked_by"],
        marked_at=r.get("marked_at"),
        notes=r.get("notes"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_key(self, attendance_key: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_key=%s", (attendance_key,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(self, data: AttendanceInput, *, attendance_key: str, marked_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(attendance_key, employee_id, work_date, status, marked_by, marked_at, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    attendance_key,
                    data.employee_id,
                    data.work_date,
                    data.status.value,
                    data.marked_by,
                    marked_at,
                    data.notes,
                ),
            )
            return int(cur.lastrowid)

    def update(self, record_id: int, data: AttendanceInput, *, updated_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, marked_by=%s, notes=%s, updated_at=%s
                WHERE record_id=%s
                """,
                (data.status.value, data.marked_by, data.notes, updated_at, int(record_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {build_where(clauses)}
                ORDER BY work_date DESC, record_id DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
