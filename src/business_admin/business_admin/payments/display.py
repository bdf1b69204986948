from __future__ import annotations

import calendar
from collections import defaultdict
from decimal import Decimal
from typing import Any, Iterable, Optional, Union

from ..common.datetime_utils import coerce_date, format_display_date
from ..common.formatting import format_currency, to_decimal
from .model import Payment, PaymentInput


def generate_payment_id(employee_id: Any, payment_date: Any, sequence: int = 1) -> str:
    if employee_id in (None, "") or payment_date in (None, ""):
        raise ValueError("Employee ID and date are required to generate payment ID")

    date_str = payment_date if isinstance(payment_date, str) else payment_date.strftime("%Y-%m-%d")
    return f"{employee_id}_{date_str}_{sequence}"


def parse_payment_sequence(payment_ref: Optional[str]) -> int:
    tail = (payment_ref or "").rsplit("_", 1)[-1]
    return int(tail) if tail.isdigit() else 0


def generate_payment_search_keywords(payment: Union[Payment, PaymentInput]) -> list[str]:
    keywords: list[str] = [str(payment.employee_id).lower()]

    if payment.paid_by:
        paid_by = payment.paid_by.lower()
        keywords.append(paid_by)
        keywords.extend(paid_by.split())

    if payment.payment_mode:
        keywords.append(payment.payment_mode.value.lower())

    payment_date = coerce_date(payment.payment_date)
    if payment_date:
        keywords.append(str(payment_date.year))
        keywords.append(calendar.month_name[payment_date.month].lower())

    if payment.notes:
        keywords.extend(payment.notes.lower().split())

    return list(dict.fromkeys(k for k in keywords if k))


def calculate_total_payment(payments: Iterable[Payment]) -> Decimal:
    return sum((to_decimal(p.amount) or Decimal("0") for p in payments), Decimal("0"))


def group_payments_by_date(payments: Iterable[Payment]) -> dict[str, list[Payment]]:
    groups: dict[str, list[Payment]] = defaultdict(list)
    for payment in payments:
        groups[payment.payment_date.strftime("%Y-%m-%d")].append(payment)
    return dict(groups)


def group_payments_by_employee(payments: Iterable[Payment]) -> dict[int, list[Payment]]:
    groups: dict[int, list[Payment]] = defaultdict(list)
    for payment in payments:
        groups[payment.employee_id].append(payment)
    return dict(groups)


def format_payment_for_display(payment: Optional[Payment], employee_name: Optional[str] = None) -> Optional[dict]:
    if payment is None:
        return None

    return {
        "payment_id": payment.payment_id,
        "payment_ref": payment.payment_ref,
        "employee_id": payment.employee_id,
        "employee_name": employee_name or "Unknown Employee",
        "amount": format_currency(payment.amount) if payment.amount else "₹0.00",
        "payment_date": format_display_date(payment.payment_date),
        "payment_date_iso": payment.payment_date.strftime("%Y-%m-%d") if payment.payment_date else "",
        "payment_mode": payment.payment_mode.value if payment.payment_mode else "N/A",
        "paid_by": (payment.paid_by or "").strip() or "N/A",
        "notes": (payment.notes or "").strip(),
    }
