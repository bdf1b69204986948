from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentMode
from .model import Payment, PaymentInput


class PaymentRepository(Protocol):
    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        raise NotImplementedError

    def create(self, data: PaymentInput, *, payment_ref: str, search_keywords: Sequence[str]) -> int:
        raise NotImplementedError

    def update(
        self,
        payment_id: int,
        data: PaymentInput,
        *,
        payment_ref: str,
        search_keywords: Sequence[str],
        updated_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, payment_id: int) -> bool:
        raise NotImplementedError

    def list_payments(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        payment_mode: Optional[PaymentMode] = None,
    ) -> Sequence[Payment]:
        """Matching payments, most recent payment date first."""

        raise NotImplementedError
