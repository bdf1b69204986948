from __future__ import annotations

import calendar
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Union

from ..common.datetime_utils import now_local
from ..core.enums import ExpenseCategory, ExpensePaymentMode, ExpenseStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import CATEGORY_LABELS, Expense
from .repository import ExpenseRepository
from .validation import normalize_expense, validate_expense

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _total(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), ZERO)


def _breakdowns(expenses: Iterable[Expense]) -> tuple[dict, dict]:
    categories = {c.value: {"count": 0, "amount": ZERO} for c in ExpenseCategory}
    modes = {m.value: ZERO for m in ExpensePaymentMode}
    for expense in expenses:
        bucket = categories[expense.category.value]
        bucket["count"] += 1
        bucket["amount"] += expense.amount
        modes[expense.payment_mode.value] += expense.amount
    return categories, modes


def _enum_or_none(enum_cls, value):
    return enum_cls(value) if value else None


class ExpenseService:
    """Use case: record business expenses, approve them and report on them."""

    def __init__(self, expenses: ExpenseRepository):
        self._expenses = expenses

    def create_expense(
        self,
        data: Mapping[str, Any],
        *,
        created_by: Optional[int],
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Expense:
        validate_expense(data, today=today).raise_if_invalid()
        expense_input = normalize_expense(data)

        expense_id = self._expenses.create(
            expense_input,
            status=ExpenseStatus.PENDING,
            created_by=created_by,
            created_at=now or now_local(),
        )
        logger.info("Created expense %s: %s %s", expense_id, expense_input.category.value, expense_input.amount)

        expense = self._expenses.get_by_id(expense_id)
        if not expense:
            raise ValidationError("Failed to create expense")
        return expense

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        return self._expenses.get_by_id(int(expense_id))

    def list_expenses(
        self,
        *,
        category: Union[ExpenseCategory, str, None] = None,
        payment_mode: Union[ExpensePaymentMode, str, None] = None,
        status: Union[ExpenseStatus, str, None] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[Expense]:
        expenses = list(
            self._expenses.list_expenses(
                category=_enum_or_none(ExpenseCategory, category),
                payment_mode=_enum_or_none(ExpensePaymentMode, payment_mode),
                status=_enum_or_none(ExpenseStatus, status),
                start_date=start_date,
                end_date=end_date,
                limit=limit,
            )
        )
        expenses.sort(key=lambda e: e.expense_date, reverse=True)
        return expenses

    def update_expense(
        self,
        expense_id: int,
        data: Mapping[str, Any],
        *,
        updated_by: Optional[int],
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Expense:
        validate_expense(data, today=today).raise_if_invalid()

        existing = self._expenses.get_by_id(int(expense_id))
        if not existing:
            raise ValidationError("Expense not found")

        self._expenses.update(existing.expense_id, normalize_expense(data), updated_by=updated_by, updated_at=now or now_local())
        logger.info("Updated expense %s", existing.expense_id)
        return self._expenses.get_by_id(existing.expense_id) or existing

    def delete_expense(self, expense_id: int) -> bool:
        deleted = self._expenses.delete_by_id(int(expense_id))
        if deleted:
            logger.info("Deleted expense %s", expense_id)
        return deleted

    def decide_expense(
        self,
        *,
        current_role: Role,
        expense_id: int,
        approve: bool,
        decided_by: Optional[int],
        now: Optional[datetime] = None,
    ) -> Expense:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to do this")

        expense = self._expenses.get_by_id(int(expense_id))
        if not expense:
            raise ValidationError("Expense not found")
        if expense.status != ExpenseStatus.PENDING:
            raise ValidationError("This expense has already been processed")

        status = ExpenseStatus.APPROVED if approve else ExpenseStatus.REJECTED
        if not self._expenses.set_status(expense.expense_id, status=status, decided_by=decided_by, decided_at=now or now_local()):
            raise ValidationError("Failed to update expense status")

        logger.info("Expense %s %s", expense.expense_id, status.value)
        return self._expenses.get_by_id(expense.expense_id) or expense

    def get_daily_report(self, day: date) -> dict:
        expenses = self.list_expenses(start_date=day, end_date=day)
        categories, modes = _breakdowns(expenses)
        return {
            "date": day,
            "expenses": expenses,
            "summary": {
                "total_expenses": len(expenses),
                "total_amount": _total(expenses),
                "category_breakdown": categories,
                "payment_mode_breakdown": modes,
            },
        }

    def get_monthly_report(self, year: int, month: int) -> dict:
        days_in_month = calendar.monthrange(year, month)[1]
        start, end = date(year, month, 1), date(year, month, days_in_month)
        expenses = self.list_expenses(start_date=start, end_date=end)

        daily: dict[int, dict] = {}
        for expense in expenses:
            group = daily.setdefault(
                expense.expense_date.day,
                {"date": expense.expense_date.strftime("%Y-%m-%d"), "expenses": [], "total_amount": ZERO},
            )
            group["expenses"].append(expense)
            group["total_amount"] += expense.amount

        total = _total(expenses)
        categories, modes = _breakdowns(expenses)
        return {
            "year": year,
            "month": month,
            "month_name": calendar.month_name[month],
            "daily_expenses": dict(sorted(daily.items())),
            "summary": {
                "total_expenses": len(expenses),
                "total_amount": total,
                "category_breakdown": categories,
                "payment_mode_breakdown": modes,
                "average_daily": (total / days_in_month).quantize(Decimal("0.01")),
            },
        }

    def get_category_summary(self, start_date: Optional[date], end_date: Optional[date]) -> dict:
        expenses = self.list_expenses(start_date=start_date, end_date=end_date)

        summary = {
            c: {"category": c.value, "label": CATEGORY_LABELS[c], "count": 0, "total_amount": ZERO, "average_amount": ZERO, "expenses": []}
            for c in ExpenseCategory
        }
        for expense in expenses:
            item = summary[expense.category]
            item["count"] += 1
            item["total_amount"] += expense.amount
            item["expenses"].append(expense)

        for item in summary.values():
            if item["count"]:
                item["average_amount"] = (item["total_amount"] / item["count"]).quantize(Decimal("0.01"))

        return {
            "start_date": start_date,
            "end_date": end_date,
            "category_summary": list(summary.values()),
            "total_amount": _total(expenses),
            "total_expenses": len(expenses),
        }
