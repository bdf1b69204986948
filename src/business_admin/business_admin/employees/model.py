from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee record.

    Note: plain data object (no database access code).
    """

    employee_id: int
    name: str
    joining_date: date
    aadhar_id: Optional[str] = None
    age: Optional[int] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    search_keywords: tuple[str, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE


@dataclass(frozen=True)
class EmployeeInput:
    """Validated and trimmed form data, ready to be stored."""

    name: str
    joining_date: date
    aadhar_id: Optional[str] = None
    age: Optional[int] = None


@dataclass(frozen=True)
class TenureStatus:
    status: str
    label: str
    color: str
