from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ExpenseCategory, ExpensePaymentMode, ExpenseStatus
from .model import Expense, ExpenseInput


class ExpenseRepository(Protocol):
    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        raise NotImplementedError

    def create(
        self,
        data: ExpenseInput,
        *,
        status: ExpenseStatus,
        created_by: Optional[int],
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def update(self, expense_id: int, data: ExpenseInput, *, updated_by: Optional[int], updated_at: datetime) -> bool:
        raise NotImplementedError

    def set_status(
        self,
        expense_id: int,
        *,
        status: ExpenseStatus,
        decided_by: Optional[int],
        decided_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, expense_id: int) -> bool:
        raise NotImplementedError

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
        """Matching expenses, most recent expense date first."""

        raise NotImplementedError
