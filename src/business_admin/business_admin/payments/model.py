from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentMode


@dataclass(frozen=True)
class Payment:
    """Domain entity: money paid to an employee.

    ``payment_ref`` is ``<employee_id>_<date>_<sequence>``.
    """

    payment_id: int
    payment_ref: str
    employee_id: int
    amount: Decimal
    payment_date: date
    payment_mode: PaymentMode
    paid_by: str
    notes: Optional[str] = None
    search_keywords: tuple[str, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class PaymentInput:
    employee_id: int
    amount: Decimal
    payment_date: date
    payment_mode: PaymentMode
    paid_by: str
    notes: Optional[str] = None
