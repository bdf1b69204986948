from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus, EmployeeStatus
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..employees.validation import parse_int
from .display import STATS_KEYS, calculate_attendance_stats, empty_counts, format_attendance_for_display
from .keys import generate_attendance_key
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .validation import normalize_attendance, validate_attendance

logger = logging.getLogger(__name__)


@dataclass
class BulkMarkResult:
    total: int = 0
    success: int = 0
    errors: int = 0
    success_records: list[dict] = field(default_factory=list)
    error_records: list[dict] = field(default_factory=list)


class AttendanceService:
    """Use case: mark and report daily attendance.

    One record per employee per day, identified by ``<employee_id>_<date>``.
    Marking the same day twice updates the existing record.
    """

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def _names_by_id(self) -> dict[int, str]:
        names: dict[int, str] = {}
        for status in (EmployeeStatus.INACTIVE, EmployeeStatus.ACTIVE):
            names.update((e.employee_id, e.name) for e in self._employees.list_by_status(status))
        return names

    def _find_employee(self, employee_id: Any) -> Optional[Employee]:
        key = parse_int(employee_id)
        return self._employees.get_by_id(key) if key is not None else None

    def mark_attendance(
        self,
        data: Mapping[str, Any],
        *,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        validate_attendance(data, today=today).raise_if_invalid()

        if not self._find_employee(data.get("employee_id")):
            raise ValidationError("Employee not found")

        attendance_input = normalize_attendance(data)
        key = generate_attendance_key(attendance_input.employee_id, attendance_input.work_date)

        if self._attendance.get_by_key(key):
            return self.update_attendance(key, data, today=today, now=now)

        record_id = self._attendance.create(attendance_input, attendance_key=key, marked_at=now or now_local())
        logger.info("Marked attendance %s as %s", key, attendance_input.status.value)

        record = self._attendance.get_by_id(record_id)
        if not record:
            raise ValidationError("Failed to save attendance")
        return record

    def mark_bulk_attendance(
        self,
        rows: Sequence[Mapping[str, Any]],
        *,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> BulkMarkResult:
        result = BulkMarkResult(total=len(rows))
        for index, row in enumerate(rows):
            try:
                record = self.mark_attendance(row, today=today, now=now)
                result.success += 1
                result.success_records.append({"index": index, "employee_id": row.get("employee_id"), "record": record})
            except ValidationError as e:
                result.errors += 1
                result.error_records.append({"index": index, "employee_id": row.get("employee_id"), "error": str(e)})

        logger.info("Bulk attendance: %s saved, %s failed", result.success, result.errors)
        return result

    def get_by_key(self, attendance_key: str) -> Optional[AttendanceRecord]:
        return self._attendance.get_by_key(attendance_key)

    def update_attendance(
        self,
        attendance_key: str,
        data: Mapping[str, Any],
        *,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        validate_attendance(data, today=today).raise_if_invalid()

        existing = self._attendance.get_by_key(attendance_key)
        if not existing:
            raise ValidationError("Attendance record not found")

        attendance_input = normalize_attendance(data)
        self._attendance.update(existing.record_id, attendance_input, updated_at=now or now_local())
        logger.info("Updated attendance %s to %s", attendance_key, attendance_input.status.value)

        return self._attendance.get_by_id(existing.record_id) or existing

    def delete_attendance(self, identifier: Any) -> bool:
        """Delete by record id, falling back to the attendance key.

        Returns False when neither matches a stored record.
        """

        record = None
        record_id = parse_int(identifier)
        if record_id is not None and str(identifier).strip() == str(record_id):
            record = self._attendance.get_by_id(record_id)
        if record is None:
            record = self._attendance.get_by_key(str(identifier))
        if record is None:
            logger.warning("Attendance record %s not found", identifier)
            return False

        deleted = self._attendance.delete_by_id(record.record_id)
        if deleted:
            logger.info("Deleted attendance %s", record.attendance_key)
        return deleted

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
        limit: Optional[int] = None,
    ) -> list[AttendanceRecord]:
        records = list(
            self._attendance.list_records(
                employee_id=int(employee_id),
                start_date=start_date,
                end_date=end_date,
                status=status,
            )
        )
        records.sort(key=lambda r: r.work_date, reverse=True)
        return records[:limit] if limit else records

    def _with_names(self, records: Sequence[AttendanceRecord], *, today: Optional[date] = None) -> list[dict]:
        names = self._names_by_id()
        return [format_attendance_for_display(r, names.get(r.employee_id), today=today) for r in records]

    def list_for_date(self, work_date: date, *, today: Optional[date] = None) -> list[dict]:
        records = self._attendance.list_records(start_date=work_date, end_date=work_date)
        rows = self._with_names(records, today=today)
        rows.sort(key=lambda r: r["employee_name"].lower())
        return rows

    def list_for_date_range(self, start_date: date, end_date: date, *, today: Optional[date] = None) -> list[dict]:
        records = self._attendance.list_records(start_date=start_date, end_date=end_date)
        return self._sorted_rows(self._with_names(records, today=today))

    def list_all(self, *, today: Optional[date] = None) -> list[dict]:
        return self._sorted_rows(self._with_names(self._attendance.list_records(), today=today))

    @staticmethod
    def _sorted_rows(rows: list[dict]) -> list[dict]:
        # date descending, then employee name ascending
        rows.sort(key=lambda r: r["employee_name"].lower())
        rows.sort(key=lambda r: r["date"], reverse=True)
        return rows

    def get_attendance_stats(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> dict:
        records = self._attendance.list_records(
            employee_id=int(employee_id) if employee_id is not None else None,
            start_date=start_date,
            end_date=end_date,
        )

        stats = calculate_attendance_stats(records)
        by_date: dict[str, dict] = {}
        by_employee: dict[int, dict] = {}

        for record in records:
            key = STATS_KEYS.get(record.status)
            for bucket in (
                by_date.setdefault(record.work_date.strftime("%Y-%m-%d"), empty_counts()),
                by_employee.setdefault(record.employee_id, empty_counts()),
            ):
                if key:
                    bucket[key] += 1
                bucket["total"] += 1

        stats["by_date"] = by_date
        stats["by_employee"] = by_employee
        return stats

    def employees_without_attendance(self, work_date: date) -> list[Employee]:
        marked = {r.employee_id for r in self._attendance.list_records(start_date=work_date, end_date=work_date)}
        employees = self._employees.list_by_status(EmployeeStatus.ACTIVE)
        return sorted((e for e in employees if e.employee_id not in marked), key=lambda e: e.name.lower())
