from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceInput, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_by_key(self, attendance_key: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, data: AttendanceInput, *, attendance_key: str, marked_at: datetime) -> int:
        raise NotImplementedError

    def update(self, record_id: int, data: AttendanceInput, *, updated_at: datetime) -> bool:
        raise NotImplementedError

    def delete_by_id(self, record_id: int) -> bool:
        raise NotImplementedError

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        """Matching records, newest work date first."""

        raise NotImplementedError
