from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date, today_local
from ..common.formatting import to_decimal
from ..common.validators import ValidationResult, clean_text, is_blank
from ..core.constants import (
    EARLIEST_PAYMENT_DATE,
    MAX_PAYMENT_AMOUNT,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NOTES_MAX_LENGTH,
)
from ..core.enums import PaymentMode
from ..employees.validation import parse_int
from .model import PaymentInput

_MODE_VALUES = {m.value for m in PaymentMode}


def _amount_missing(raw: Any) -> bool:
    # a numeric zero counts as "not entered", the string "0" does not
    return is_blank(raw) or (not isinstance(raw, str) and not raw)


def validate_payment(data: Mapping[str, Any], *, today: Optional[date] = None) -> ValidationResult:
    today = today or today_local()
    result = ValidationResult()

    if is_blank(data.get("employee_id")):
        result.add("employee_id", "Employee is required")

    raw_amount = data.get("amount")
    if _amount_missing(raw_amount):
        result.add("amount", "Payment amount is required")
    else:
        amount = to_decimal(raw_amount)
        if amount is None or amount <= 0:
            result.add("amount", "Payment amount must be greater than 0")
        elif amount > MAX_PAYMENT_AMOUNT:
            result.add("amount", "Payment amount cannot exceed 10,00,000")

    raw_date = data.get("payment_date")
    if is_blank(raw_date):
        result.add("payment_date", "Payment date is required")
    else:
        payment_date = coerce_date(raw_date)
        if payment_date is None:
            result.add("payment_date", "Invalid payment date")
        elif payment_date > today:
            result.add("payment_date", "Payment date cannot be in the future")
        elif payment_date < EARLIEST_PAYMENT_DATE:
            result.add("payment_date", f"Payment date cannot be before {EARLIEST_PAYMENT_DATE.year}")

    mode = data.get("payment_mode")
    if is_blank(mode):
        result.add("payment_mode", "Payment mode is required")
    elif str(getattr(mode, "value", mode)) not in _MODE_VALUES:
        result.add("payment_mode", "Please select a valid payment mode")

    paid_by = clean_text(data.get("paid_by"))
    if not paid_by:
        result.add("paid_by", "Paid by name is required")
    elif len(paid_by) < NAME_MIN_LENGTH:
        result.add("paid_by", f"Paid by name must be at least {NAME_MIN_LENGTH} characters long")
    elif len(paid_by) > NAME_MAX_LENGTH:
        result.add("paid_by", f"Paid by name must not exceed {NAME_MAX_LENGTH} characters")

    notes = clean_text(data.get("notes"))
    if len(notes) > NOTES_MAX_LENGTH:
        result.add("notes", f"Notes must not exceed {NOTES_MAX_LENGTH} characters")

    return result


def normalize_payment(data: Mapping[str, Any]) -> PaymentInput:
    employee_id = parse_int(data.get("employee_id"))
    amount = to_decimal(data.get("amount"))
    payment_date = coerce_date(data.get("payment_date"))
    if employee_id is None or amount is None or payment_date is None:
        raise ValueError("payment data must be validated before normalizing")

    mode = data.get("payment_mode")
    return PaymentInput(
        employee_id=employee_id,
        amount=amount,
        payment_date=payment_date,
        payment_mode=PaymentMode(clean_text(getattr(mode, "value", mode))),
        paid_by=clean_text(data.get("paid_by")),
        notes=clean_text(data.get("notes")) or None,
    )


def empty_payment_form(*, today: Optional[date] = None) -> dict[str, str]:
    return {
        "employee_id": "",
        "amount": "",
        "payment_date": (today or today_local()).strftime("%Y-%m-%d"),
        "payment_mode": "",
        "paid_by": "",
        "notes": "",
    }
