from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import Employee, EmployeeInput


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note: the service layer depends on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_status(self, status: EmployeeStatus) -> Sequence[Employee]:
        raise NotImplementedError

    def find_by_aadhar_id(self, aadhar_id: str) -> Sequence[Employee]:
        """All employees (any status) holding this Aadhar ID."""

        raise NotImplementedError

    def create(self, data: EmployeeInput, *, search_keywords: Sequence[str], status: EmployeeStatus) -> int:
        raise NotImplementedError

    def update(self, employee_id: int, data: EmployeeInput, *, search_keywords: Sequence[str]) -> bool:
        raise NotImplementedError

    def set_status(self, employee_id: int, *, status: EmployeeStatus, deleted_at: Optional[datetime] = None) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
