from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, join_keywords, split_keywords
from .model import Payment, PaymentInput
from .repository import PaymentRepository

_COLUMNS = """
    payment_id, payment_ref, employee_id, amount, payment_date, payment_mode,
    paid_by, notes, search_keywords, created_at, updated_at
"""


def _to_payment(r: dict) -> Payment:
    return Payment(
        payment_id=int(r["payment_id"]),
        payment_ref=r["payment_ref"],
        employee_id=int(r["employee_id"]),
        amount=Decimal(str(r["amount"])),
        payment_date=r["payment_date"],
        payment_mode=PaymentMode(r["payment_mode"]),
        paid_by=r["paid_by"],
        notes=r.get("notes"),
        search_keywords=split_keywords(r.get("search_keywords")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payments WHERE payment_id=%s", (int(payment_id),))
            r = fetchone(cur)
            return _to_payment(r) if r else None

    def create(self, data: PaymentInput, *, payment_ref: str, search_keywords: Sequence[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(payment_ref, employee_id, amount, payment_date, payment_mode, paid_by, notes, search_keywords)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payment_ref,
                    data.employee_id,
                    data.amount,
                    data.payment_date,
                    data.payment_mode.value,
                    data.paid_by,
                    data.notes,
                    join_keywords(search_keywords),
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        payment_id: int,
        data: PaymentInput,
        *,
        payment_ref: str,
        search_keywords: Sequence[str],
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payments
                SET payment_ref=%s, employee_id=%s, amount=%s, payment_date=%s, payment_mode=%s,
                    paid_by=%s, notes=%s, search_keywords=%s, updated_at=%s
                WHERE payment_id=%s
                """,
                (
                    payment_ref,
                    data.employee_id,
                    data.amount,
                    data.payment_date,
                    data.payment_mode.value,
                    data.paid_by,
                    data.notes,
                    join_keywords(search_keywords),
                    updated_at,
                    int(payment_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, payment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments WHERE payment_id=%s", (int(payment_id),))
            return cur.rowcount > 0

    def list_payments(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        payment_mode: Optional[PaymentMode] = None,
    ) -> Sequence[Payment]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if start_date is not None:
            clauses.append("payment_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("payment_date <= %s")
            params.append(end_date)
        if payment_mode is not None:
            clauses.append("payment_mode=%s")
            params.append(payment_mode.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payments
                {build_where(clauses)}
                ORDER BY payment_date DESC, payment_id DESC
                """,
                tuple(params),
            )
            return [_to_payment(r) for r in fetchall(cur)]
