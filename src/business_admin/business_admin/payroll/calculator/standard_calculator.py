from __future__ import annotations

from decimal import Decimal

from .base import DayValueCalculator
from ...attendance.model import AttendanceRecord
from ...core.enums import AttendanceStatus, SalaryRecordType


class StandardDayValueCalculator(DayValueCalculator):
    """Standard rule: present = 1 day, half-day = 0.5, anything else = 0."""

    _VALUES = {
        AttendanceStatus.PRESENT: (Decimal("1"), SalaryRecordType.FULL),
        AttendanceStatus.HALF_DAY: (Decimal("0.5"), SalaryRecordType.PARTIAL),
    }
    _ABSENT = (Decimal("0"), SalaryRecordType.ABSENT)

    def day_value(self, record: AttendanceRecord) -> Decimal:
        return self._VALUES.get(record.status, self._ABSENT)[0]

    def record_type(self, record: AttendanceRecord) -> SalaryRecordType:
        return self._VALUES.get(record.status, self._ABSENT)[1]
