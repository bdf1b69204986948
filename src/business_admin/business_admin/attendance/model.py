from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day.

    ``attendance_key`` is ``<employee_id>_<YYYY-MM-DD>`` and is unique per record.
    """

    record_id: int
    attendance_key: str
    employee_id: int
    work_date: date
    status: AttendanceStatus
    marked_by: str
    marked_at: Optional[datetime] = None
    notes: Optional[str] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceInput:
    employee_id: int
    work_date: date
    status: AttendanceStatus
    marked_by: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class ModifyCheck:
    can_modify: bool
    reason: str = ""
