from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from ..common.datetime_utils import now_local
from ..core.enums import EmployeeStatus, PaymentMode
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..employees.validation import parse_int
from .display import (
    calculate_total_payment,
    generate_payment_id,
    generate_payment_search_keywords,
    group_payments_by_employee,
    parse_payment_sequence,
)
from .model import Payment
from .repository import PaymentRepository
from .validation import normalize_payment, validate_payment

logger = logging.getLogger(__name__)


class PaymentService:
    """Use case: record payments made to employees and summarize them."""

    def __init__(self, payments: PaymentRepository, employees: EmployeeRepository):
        self._payments = payments
        self._employees = employees

    def _require_employee(self, employee_id: Any) -> None:
        key = parse_int(employee_id)
        if key is None or not self._employees.get_by_id(key):
            raise ValidationError("Employee not found")

    def _next_reference(self, employee_id: int, payment_date: date) -> str:
        same_day = self._payments.list_payments(employee_id=employee_id, start_date=payment_date, end_date=payment_date)
        sequence = max((parse_payment_sequence(p.payment_ref) for p in same_day), default=0) + 1
        return generate_payment_id(employee_id, payment_date, sequence)

    def create_payment(self, data: Mapping[str, Any], *, today: Optional[date] = None) -> Payment:
        validate_payment(data, today=today).raise_if_invalid()
        self._require_employee(data.get("employee_id"))

        payment_input = normalize_payment(data)
        payment_ref = self._next_reference(payment_input.employee_id, payment_input.payment_date)
        payment_id = self._payments.create(
            payment_input,
            payment_ref=payment_ref,
            search_keywords=generate_payment_search_keywords(payment_input),
        )
        logger.info("Recorded payment %s of %s", payment_ref, payment_input.amount)

        payment = self._payments.get_by_id(payment_id)
        if not payment:
            raise ValidationError("Failed to save payment")
        return payment

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        return self._payments.get_by_id(int(payment_id))

    def list_payments(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        payment_mode: Union[PaymentMode, str, None] = None,
        paid_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Payment]:
        payments = list(
            self._payments.list_payments(
                employee_id=int(employee_id) if employee_id is not None else None,
                start_date=start_date,
                end_date=end_date,
                payment_mode=PaymentMode(payment_mode) if payment_mode else None,
            )
        )

        if paid_by:
            needle = paid_by.lower()
            payments = [p for p in payments if p.paid_by and needle in p.paid_by.lower()]

        payments.sort(key=lambda p: p.payment_date, reverse=True)
        return payments[:limit] if limit else payments

    def list_for_employee(self, employee_id: int, **filters) -> list[Payment]:
        filters["employee_id"] = employee_id
        return self.list_payments(**filters)

    def list_by_date_range(self, start_date: date, end_date: date, **filters) -> list[Payment]:
        filters.update(start_date=start_date, end_date=end_date)
        return self.list_payments(**filters)

    def update_payment(
        self,
        payment_id: int,
        data: Mapping[str, Any],
        *,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Payment:
        validate_payment(data, today=today).raise_if_invalid()

        existing = self._payments.get_by_id(int(payment_id))
        if not existing:
            raise ValidationError("Payment record not found")
        self._require_employee(data.get("employee_id"))

        payment_input = normalize_payment(data)
        payment_ref = existing.payment_ref
        if (payment_input.employee_id, payment_input.payment_date) != (existing.employee_id, existing.payment_date):
            payment_ref = self._next_reference(payment_input.employee_id, payment_input.payment_date)

        self._payments.update(
            existing.payment_id,
            payment_input,
            payment_ref=payment_ref,
            search_keywords=generate_payment_search_keywords(payment_input),
            updated_at=now or now_local(),
        )
        if payment_ref != existing.payment_ref:
            logger.info("Updated payment %s (now %s)", existing.payment_ref, payment_ref)
        else:
            logger.info("Updated payment %s", payment_ref)
        return self._payments.get_by_id(existing.payment_id) or existing

    def delete_payment(self, payment_id: int) -> bool:
        existing = self._payments.get_by_id(int(payment_id))
        if not existing:
            return False

        deleted = self._payments.delete_by_id(existing.payment_id)
        if deleted:
            logger.info("Deleted payment %s", existing.payment_ref)
        return deleted

    def get_payment_stats(self, **filters) -> dict:
        payments = self.list_payments(**filters)
        cash = [p for p in payments if p.payment_mode == PaymentMode.CASH]
        online = [p for p in payments if p.payment_mode == PaymentMode.ONLINE]

        stats: dict = {
            "total_payments": len(payments),
            "total_amount": calculate_total_payment(payments),
            "cash_payments": len(cash),
            "online_payments": len(online),
            "cash_amount": calculate_total_payment(cash),
            "online_amount": calculate_total_payment(online),
            "unique_employees": len({p.employee_id for p in payments}),
            "date_range": None,
        }

        if payments:
            dates = sorted(p.payment_date for p in payments)
            stats["date_range"] = {
                "start": dates[0].strftime("%Y-%m-%d"),
                "end": dates[-1].strftime("%Y-%m-%d"),
            }
        return stats

    def search_payments(self, search_text: Optional[str], **filters) -> list[Payment]:
        payments = self.list_payments(**filters)
        term = (search_text or "").strip().lower()
        if not term:
            return payments

        def matches(payment: Payment) -> bool:
            employee_key = str(payment.employee_id)
            return (
                term == employee_key
                or any(term in keyword for keyword in payment.search_keywords if keyword != employee_key)
                or (bool(payment.paid_by) and term in payment.paid_by.lower())
                or (bool(payment.notes) and term in payment.notes.lower())
            )

        return [p for p in payments if matches(p)]

    def get_payment_summary_by_employee(self, **filters) -> list[dict]:
        names: dict[int, str] = {}
        for status in (EmployeeStatus.INACTIVE, EmployeeStatus.ACTIVE):
            names.update((e.employee_id, e.name) for e in self._employees.list_by_status(status))

        summary = []
        for employee_id, payments in group_payments_by_employee(self.list_payments(**filters)).items():
            summary.append(
                {
                    "employee_id": employee_id,
                    "employee_name": names.get(employee_id, "Unknown Employee"),
                    "total_amount": calculate_total_payment(payments),
                    "payment_count": len(payments),
                    "last_payment_date": max(p.payment_date for p in payments),
                    "payments": payments,
                }
            )

        summary.sort(key=lambda s: s["total_amount"], reverse=True)
        return summary

    def total_paid(self, employee_id: int, start_date: date, end_date: date) -> Decimal:
        return calculate_total_payment(self.list_for_employee(employee_id, start_date=start_date, end_date=end_date))
