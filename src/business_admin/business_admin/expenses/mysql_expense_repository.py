from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import ExpenseCategory, ExpensePaymentMode, ExpenseStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Expense, ExpenseInput
from .repository import ExpenseRepository

_COLUMNS = """
    expense_id, amount, category, expense_date, payment_mode, status, vendor, description,
    created_by, updated_by, decided_by, created_at, updated_at, decided_at
"""


def _to_expense(r: dict) -> Expense:
    return Expense(
        expense_id=int(r["expense_id"]),
        amount=Decimal(str(r["amount"])),
        category=ExpenseCategory(r["category"]),
        expense_date=r["expense_date"],
        payment_mode=ExpensePaymentMode(r["payment_mode"]),
        status=ExpenseStatus(r["status"]),
        vendor=r.get("vendor"),
        description=r.get("description"),
        created_by=r.get("created_by"),
        updated_by=r.get("updated_by"),
        decided_by=r.get("decided_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        decided_at=r.get("decided_at"),
    )


class MySQLExpenseRepository(ExpenseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM expenses WHERE expense_id=%s", (int(expense_id),))
            r = fetchone(cur)
            return _to_expense(r) if r else None

    def create(
        self,
        data: ExpenseInput,
        *,
        status: ExpenseStatus,
        created_by: Optional[int],
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO expenses(amount, category, expense_date, payment_mode, status, vendor, description,
                                     created_by, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    data.amount,
                    data.category.value,
                    data.expense_date,
                    data.payment_mode.value,
                    status.value,
                    data.vendor,
                    data.description,
                    created_by,
                    created_at,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def update(self, expense_id: int, data: ExpenseInput, *, updated_by: Optional[int], updated_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE expenses
                SET amount=%s, category=%s, expense_date=%s, payment_mode=%s, vendor=%s, description=%s,
                    updated_by=%s, updated_at=%s
                WHERE expense_id=%s
                """,
                (
                    data.amount,
                    data.category.value,
                    data.expense_date,
                    data.payment_mode.value,
                    data.vendor,
                    data.description,
                    updated_by,
                    updated_at,
                    int(expense_id),
                ),
            )
            return cur.rowcount > 0

    def set_status(
        self,
        expense_id: int,
        *,
        status: ExpenseStatus,
        decided_by: Optional[int],
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE expenses SET status=%s, decided_by=%s, decided_at=%s WHERE expense_id=%s",
                (status.value, decided_by, decided_at, int(expense_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, expense_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM expenses WHERE expense_id=%s", (int(expense_id),))
            return cur.rowcount > 0

    def list_expenses(
        self,
        *,
        category: Optional[ExpenseCategory] = None,
        payment_mode: Optional[ExpensePaymentMode] = None,
        status: Optional[ExpenseStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Expense]:
        clauses: list[str] = []
        params: list[object] = []

        if category is not None:
            clauses.append("category=%s")
            params.append(category.value)
        if payment_mode is not None:
            clauses.append("payment_mode=%s")
            params.append(payment_mode.value)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if start_date is not None:
            clauses.append("expense_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("expense_date <= %s")
            params.append(end_date)

        sql = f"""
            SELECT {_COLUMNS}
            FROM expenses
            {build_where(clauses)}
            ORDER BY expense_date DESC, expense_id DESC
        """
        if limit:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_expense(r) for r in fetchall(cur)]
