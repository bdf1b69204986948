from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.formatting import round_half_up
from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .display import generate_employee_search_keywords
from .model import Employee
from .repository import EmployeeRepository
from .validation import normalize_employee, validate_employee

logger = logging.getLogger(__name__)

AGE_BUCKETS = ((18, 25), (26, 35), (36, 45), (46, 55), (56, 65))


@dataclass(frozen=True)
class BatchCreateResult:
    results: list[dict] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)


def _newest_first(employees: Sequence[Employee]) -> list[Employee]:
    return sorted(
        employees,
        key=lambda e: (e.created_at or datetime.min, e.employee_id),
        reverse=True,
    )


class EmployeeService:
    """Use case: manage employee records."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def create_employee(self, data: Mapping[str, Any], *, today: Optional[date] = None) -> Employee:
        validate_employee(data, today=today).raise_if_invalid()
        employee_input = normalize_employee(data)

        if employee_input.aadhar_id and self.find_by_aadhar_id(employee_input.aadhar_id):
            raise ValidationError("An employee with this Aadhar ID already exists")

        keywords = generate_employee_search_keywords(employee_input)
        employee_id = self._employees.create(employee_input, search_keywords=keywords, status=EmployeeStatus.ACTIVE)
        logger.info("Created employee %s (%s)", employee_id, employee_input.name)

        created = self._employees.get_by_id(employee_id)
        if not created:
            raise ValidationError("Failed to create employee")
        return created

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        return self._employees.get_by_id(int(employee_id))

    def require_employee(self, employee_id: Any) -> Employee:
        try:
            key = int(employee_id)
        except (TypeError, ValueError):
            raise ValidationError("Employee not found")

        employee = self._employees.get_by_id(key)
        if not employee:
            raise ValidationError("Employee not found")
        return employee

    def update_employee(self, employee_id: int, data: Mapping[str, Any], *, today: Optional[date] = None) -> Employee:
        validate_employee(data, today=today).raise_if_invalid()
        existing = self.require_employee(employee_id)
        employee_input = normalize_employee(data)

        if employee_input.aadhar_id:
            duplicate = self.find_by_aadhar_id(employee_input.aadhar_id)
            if duplicate and duplicate.employee_id != existing.employee_id:
                raise ValidationError("An employee with this Aadhar ID already exists")

        keywords = generate_employee_search_keywords(employee_input)
        # rowcount is 0 when nothing changed, so existence was checked above instead.
        self._employees.update(existing.employee_id, employee_input, search_keywords=keywords)
        logger.info("Updated employee %s", existing.employee_id)
        return self.require_employee(existing.employee_id)

    def deactivate_employee(self, employee_id: int, *, now: Optional[datetime] = None) -> None:
        """Soft delete: the record stays but drops out of every active listing."""

        employee = self.require_employee(employee_id)
        self._employees.set_status(
            employee.employee_id,
            status=EmployeeStatus.INACTIVE,
            deleted_at=now or now_local(),
        )
        logger.info("Deactivated employee %s", employee.employee_id)

    def delete_employee_permanently(self, *, current_role: Role, employee_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to do this")

        employee = self.require_employee(employee_id)
        if not self._employees.delete_by_id(employee.employee_id):
            raise ValidationError("Failed to delete employee")
        logger.info("Permanently deleted employee %s", employee.employee_id)

    def list_employees(self) -> list[Employee]:
        return _newest_first(self._employees.list_by_status(EmployeeStatus.ACTIVE))

    def search_employees(self, search_term: Optional[str]) -> list[Employee]:
        employees = self.list_employees()
        term = (search_term or "").strip().lower()
        if not term:
            return employees

        def matches(employee: Employee) -> bool:
            if employee.name and term in employee.name.lower():
                return True
            if employee.aadhar_id and term in employee.aadhar_id:
                return True
            return any(term in keyword for keyword in employee.search_keywords)

        return [e for e in employees if matches(e)]

    def find_by_aadhar_id(self, aadhar_id: Optional[str]) -> Optional[Employee]:
        """Active employee holding this Aadhar ID, if any."""

        aadhar_id = (aadhar_id or "").strip()
        if not aadhar_id:
            return None
        active = [e for e in self._employees.find_by_aadhar_id(aadhar_id) if e.is_active]
        return active[0] if active else None

    def list_by_joining_date_range(self, start: date, end: date) -> list[Employee]:
        return [e for e in self.list_employees() if e.joining_date and start <= e.joining_date <= end]

    def list_by_age_range(self, min_age: int, max_age: int) -> list[Employee]:
        return [e for e in self.list_employees() if e.age and min_age <= e.age <= max_age]

    def get_employee_stats(self) -> dict:
        employees = self.list_employees()
        with_age = [e for e in employees if e.age]

        stats: dict = {
            "total": len(employees),
            "with_aadhar": sum(1 for e in employees if e.aadhar_id),
            "with_age": len(with_age),
            "avg_age": 0,
            "newest_hire": None,
            "oldest_hire": None,
            "age_distribution": {f"{lo}-{hi}": 0 for lo, hi in AGE_BUCKETS},
        }

        if with_age:
            stats["avg_age"] = int(round_half_up(sum(e.age for e in with_age) / len(with_age)))

        by_joining = sorted((e for e in employees if e.joining_date), key=lambda e: e.joining_date, reverse=True)
        if by_joining:
            stats["newest_hire"] = by_joining[0]
            stats["oldest_hire"] = by_joining[-1]

        for employee in with_age:
            for lo, hi in AGE_BUCKETS:
                if lo <= employee.age <= hi:
                    stats["age_distribution"][f"{lo}-{hi}"] += 1
                    break

        return stats

    def batch_create_employees(
        self, rows: Sequence[Mapping[str, Any]], *, today: Optional[date] = None
    ) -> BatchCreateResult:
        outcome = BatchCreateResult()
        for index, row in enumerate(rows):
            try:
                employee = self.create_employee(row, today=today)
                outcome.results.append({"index": index, "success": True, "employee": employee})
            except ValidationError as e:
                outcome.errors.append({"index": index, "error": str(e), "data": dict(row)})
        return outcome
