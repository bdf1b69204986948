from datetime import date, datetime

from src.business_admin.business_admin.attendance.display import (
    calculate_attendance_stats,
    can_modify_attendance,
    format_attendance_for_display,
    get_date_range,
    get_status_color,
    get_status_label,
)
from src.business_admin.business_admin.attendance.model import AttendanceRecord
from src.business_admin.business_admin.attendance.validation import (
    normalize_attendance,
    validate_attendance,
    validate_bulk_attendance,
)
from src.business_admin.business_admin.core.enums import AttendanceStatus

TODAY = date(2024, 3, 15)


def _row(**overrides):
    data = {"employee_id": "1", "date": "2024-03-14", "status": "present", "marked_by": "Admin", "notes": ""}
    data.update(overrides)
    return data


def _record(work_date, status=AttendanceStatus.PRESENT, employee_id=1):
    return AttendanceRecord(
        record_id=1,
        attendance_key=f"{employee_id}_{work_date.isoformat()}",
        employee_id=employee_id,
        work_date=work_date,
        status=status,
        marked_by="Admin",
        marked_at=datetime(2024, 3, 14, 9, 5),
    )


def test_valid_submission():
    assert validate_attendance(_row(), today=TODAY).is_valid


def test_required_fields():
    errors = validate_attendance({}, today=TODAY).errors
    assert errors == {
        "employee_id": "Employee ID is required",
        "date": "Date is required",
        "status": "Attendance status is required",
        "marked_by": "Marked by information is required",
    }


def test_date_window():
    assert validate_attendance(_row(date="2024-03-16"), today=TODAY).errors["date"] == (
        "Cannot mark attendance for future dates"
    )
    assert validate_attendance(_row(date="2023-12-14"), today=TODAY).errors["date"] == (
        "Cannot mark attendance for dates older than 3 months"
    )
    assert validate_attendance(_row(date="2023-12-15"), today=TODAY).is_valid
    assert validate_attendance(_row(date="2024-03-10xyz"), today=TODAY).errors["date"] == "Invalid date"


def test_status_and_notes():
    assert validate_attendance(_row(status="late"), today=TODAY).errors["status"] == "Invalid attendance status"
    assert "notes" in validate_attendance(_row(notes="x" * 501), today=TODAY).errors


def test_bulk_validation_splits_rows():
    result = validate_bulk_attendance([_row(), _row(employee_id="")], today=TODAY)
    assert not result.is_valid
    assert len(result.valid_records) == 1
    assert result.errors[0]["index"] == 1

    assert validate_bulk_attendance([], today=TODAY).errors == ["No attendance data provided"]


def test_normalize():
    attendance = normalize_attendance(_row(status="half-day", notes="  left early "))
    assert attendance.employee_id == 1
    assert attendance.status == AttendanceStatus.HALF_DAY
    assert attendance.notes == "left early"


def test_labels_and_colors():
    assert get_status_label("half-day") == "Half Day"
    assert get_status_label("late") == "Unknown"
    assert get_status_color(AttendanceStatus.ABSENT) == "#dc3545"


def test_stats_percentages():
    records = [
        _record(date(2024, 3, 11)),
        _record(date(2024, 3, 12)),
        _record(date(2024, 3, 13), AttendanceStatus.HALF_DAY),
    ]
    stats = calculate_attendance_stats(records)
    assert stats["present"] == 2
    assert stats["half_day"] == 1
    assert stats["present_percent"] == 67
    assert stats["half_day_percent"] == 33
    assert calculate_attendance_stats([])["present_percent"] == 0


def test_date_ranges():
    assert get_date_range("today", today=TODAY) == (TODAY, TODAY)
    assert get_date_range("week", today=TODAY) == (date(2024, 3, 11), TODAY)
    assert get_date_range("month", today=TODAY) == (date(2024, 3, 1), TODAY)
    assert get_date_range("custom", "2024-01-01", "2024-01-31", today=TODAY) == (date(2024, 1, 1), date(2024, 1, 31))
    assert get_date_range("custom", "2024-01-01", None, today=TODAY) == (TODAY, TODAY)


def test_modify_window():
    assert can_modify_attendance(_record(date(2024, 3, 8)), today=TODAY).can_modify
    check = can_modify_attendance(_record(date(2024, 3, 7)), today=TODAY)
    assert not check.can_modify
    assert check.reason == "Cannot modify attendance older than 7 days"
    assert can_modify_attendance(None).reason == "Attendance record not found"


def test_display_dict():
    shown = format_attendance_for_display(_record(date(2024, 3, 14)), "Ramesh", today=TODAY)
    assert shown["date"] == "2024-03-14"
    assert shown["date_formatted"] == "14 March 2024"
    assert shown["status"] == "present"
    assert shown["marked_at_formatted"] == "14/03/2024 09:05"
    assert shown["can_modify"] is True
    assert format_attendance_for_display(_record(date(2024, 3, 14)))["employee_name"] == "Unknown Employee"
