from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date, subtract_months, today_local
from ..common.validators import ValidationResult, clean_text, is_blank
from ..core.constants import ATTENDANCE_LOOKBACK_MONTHS, NOTES_MAX_LENGTH
from ..core.enums import AttendanceStatus
from ..employees.validation import parse_int
from .model import AttendanceInput

_STATUS_VALUES = {s.value for s in AttendanceStatus}


@dataclass
class BulkValidationResult:
    is_valid: bool
    errors: list = field(default_factory=list)
    valid_records: list = field(default_factory=list)


def validate_attendance(data: Mapping[str, Any], *, today: Optional[date] = None) -> ValidationResult:
    today = today or today_local()
    result = ValidationResult()

    if is_blank(data.get("employee_id")):
        result.add("employee_id", "Employee ID is required")

    raw_date = data.get("date")
    if is_blank(raw_date):
        result.add("date", "Date is required")
    else:
        work_date = coerce_date(raw_date)
        if work_date is None:
            result.add("date", "Invalid date")
        elif work_date > today:
            result.add("date", "Cannot mark attendance for future dates")
        elif work_date < subtract_months(today, ATTENDANCE_LOOKBACK_MONTHS):
            result.add("date", "Cannot mark attendance for dates older than 3 months")

    status = data.get("status")
    if is_blank(status):
        result.add("status", "Attendance status is required")
    elif str(getattr(status, "value", status)) not in _STATUS_VALUES:
        result.add("status", "Invalid attendance status")

    if is_blank(data.get("marked_by")):
        result.add("marked_by", "Marked by information is required")

    notes = data.get("notes")
    if notes and len(str(notes)) > NOTES_MAX_LENGTH:
        result.add("notes", f"Notes cannot exceed {NOTES_MAX_LENGTH} characters")

    return result


def validate_bulk_attendance(
    records: Optional[Sequence[Mapping[str, Any]]], *, today: Optional[date] = None
) -> BulkValidationResult:
    if not records:
        return BulkValidationResult(is_valid=False, errors=["No attendance data provided"])

    outcome = BulkValidationResult(is_valid=True)
    for index, record in enumerate(records):
        validation = validate_attendance(record, today=today)
        if validation.is_valid:
            outcome.valid_records.append(record)
        else:
            outcome.is_valid = False
            outcome.errors.append(
                {
                    "index": index,
                    "employee_id": record.get("employee_id"),
                    "errors": validation.errors,
                }
            )
    return outcome


def normalize_attendance(data: Mapping[str, Any]) -> AttendanceInput:
    """Trim a validated submission into storable form."""

    employee_id = parse_int(data.get("employee_id"))
    work_date = coerce_date(data.get("date"))
    if employee_id is None or work_date is None:
        raise ValueError("attendance data must be validated before normalizing")

    status = data.get("status")
    notes = clean_text(data.get("notes")) or None
    return AttendanceInput(
        employee_id=employee_id,
        work_date=work_date,
        status=AttendanceStatus(getattr(status, "value", status)),
        marked_by=clean_text(data.get("marked_by")),
        notes=notes,
    )


def empty_attendance_form(*, today: Optional[date] = None) -> dict[str, str]:
    return {
        "employee_id": "",
        "date": (today or today_local()).strftime("%Y-%m-%d"),
        "status": AttendanceStatus.PRESENT.value,
        "marked_by": "",
        "notes": "",
    }
