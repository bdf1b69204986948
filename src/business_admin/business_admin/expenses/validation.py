from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date, subtract_years, today_local
from ..common.formatting import to_decimal
from ..common.validators import ValidationResult, clean_text, is_blank
from ..core.constants import EXPENSE_LOOKBACK_YEARS, MAX_EXPENSE_AMOUNT, NOTES_MAX_LENGTH, VENDOR_MAX_LENGTH
from ..core.enums import ExpenseCategory, ExpensePaymentMode
from .model import ExpenseInput

_CATEGORY_VALUES = {c.value for c in ExpenseCategory}
_MODE_VALUES = {m.value for m in ExpensePaymentMode}


def validate_expense(data: Mapping[str, Any], *, today: Optional[date] = None) -> ValidationResult:
    today = today or today_local()
    result = ValidationResult()

    amount = to_decimal(data.get("amount"))
    if amount is None or amount <= 0:
        result.add("amount", "Amount must be a positive number")
    elif amount > MAX_EXPENSE_AMOUNT:
        result.add("amount", "Amount cannot exceed ₹10,00,000")

    if clean_text(data.get("category")) not in _CATEGORY_VALUES:
        result.add("category", "Please select a valid category")

    raw_date = data.get("date")
    if is_blank(raw_date):
        result.add("date", "Date is required")
    else:
        expense_date = coerce_date(raw_date)
        if expense_date is None:
            result.add("date", "Invalid expense date")
        elif expense_date > today:
            result.add("date", "Expense date cannot be in the future")
        elif expense_date < subtract_years(today, EXPENSE_LOOKBACK_YEARS):
            result.add("date", "Expense date cannot be more than one year old")

    if clean_text(data.get("payment_mode")) not in _MODE_VALUES:
        result.add("payment_mode", "Please select a valid payment mode")

    vendor = data.get("vendor")
    if vendor and not str(vendor).strip():
        result.add("vendor", "Vendor name cannot be empty if provided")
    elif vendor and len(str(vendor)) > VENDOR_MAX_LENGTH:
        result.add("vendor", f"Vendor name cannot exceed {VENDOR_MAX_LENGTH} characters")

    description = data.get("description")
    if description and len(str(description)) > NOTES_MAX_LENGTH:
        result.add("description", f"Description cannot exceed {NOTES_MAX_LENGTH} characters")

    return result


def normalize_expense(data: Mapping[str, Any]) -> ExpenseInput:
    amount = to_decimal(data.get("amount"))
    expense_date = coerce_date(data.get("date"))
    if amount is None or expense_date is None:
        raise ValueError("expense data must be validated before normalizing")

    return ExpenseInput(
        amount=amount,
        category=ExpenseCategory(clean_text(data.get("category"))),
        expense_date=expense_date,
        payment_mode=ExpensePaymentMode(clean_text(data.get("payment_mode"))),
        vendor=clean_text(data.get("vendor")) or None,
        description=clean_text(data.get("description")) or None,
    )


def empty_expense_form(*, today: Optional[date] = None) -> dict[str, str]:
    return {
        "amount": "",
        "category": "",
        "date": (today or today_local()).strftime("%Y-%m-%d"),
        "payment_mode": ExpensePaymentMode.CASH.value,
        "vendor": "",
        "description": "",
    }
