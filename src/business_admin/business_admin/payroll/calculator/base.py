from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...attendance.model import AttendanceRecord
from ...core.enums import SalaryRecordType


class DayValueCalculator(ABC):
    """Calculator interface (Strategy Pattern for salary): how much of a paid day one record is worth."""

    @abstractmethod
    def day_value(self, record: AttendanceRecord) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def record_type(self, record: AttendanceRecord) -> SalaryRecordType:
        raise NotImplementedError
