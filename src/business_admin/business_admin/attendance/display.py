from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, Optional

from ..common.datetime_utils import coerce_date, format_display_date, today_local
from ..common.formatting import round_half_up
from ..core.constants import ATTENDANCE_EDIT_WINDOW_DAYS
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, ModifyCheck

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.HALF_DAY: "Half Day",
}

STATUS_COLORS = {
    AttendanceStatus.PRESENT: "#28a745",
    AttendanceStatus.ABSENT: "#dc3545",
    AttendanceStatus.HALF_DAY: "#ffc107",
}

UNKNOWN_COLOR = "#6c757d"

# keys used in stats dicts
STATS_KEYS = {
    AttendanceStatus.PRESENT: "present",
    AttendanceStatus.ABSENT: "absent",
    AttendanceStatus.HALF_DAY: "half_day",
}


def _as_status(status: Any) -> Optional[AttendanceStatus]:
    try:
        return AttendanceStatus(getattr(status, "value", status))
    except ValueError:
        return None


def get_status_label(status: Any) -> str:
    return STATUS_LABELS.get(_as_status(status), "Unknown")


def get_status_color(status: Any) -> str:
    return STATUS_COLORS.get(_as_status(status), UNKNOWN_COLOR)


def percent(part: int, total: int) -> int:
    if not total:
        return 0
    return int(round_half_up(Decimal(part * 100) / Decimal(total)))


def empty_counts() -> dict[str, int]:
    return {"present": 0, "absent": 0, "half_day": 0, "total": 0}


def calculate_attendance_stats(records: Iterable[AttendanceRecord]) -> dict:
    counts = empty_counts()
    for record in records:
        key = STATS_KEYS.get(_as_status(record.status))
        if key:
            counts[key] += 1
        counts["total"] += 1

    total = counts["total"]
    return {
        **counts,
        "present_percent": percent(counts["present"], total),
        "absent_percent": percent(counts["absent"], total),
        "half_day_percent": percent(counts["half_day"], total),
    }


def get_date_range(
    period: str,
    custom_start: Any = None,
    custom_end: Any = None,
    *,
    today: Optional[date] = None,
) -> tuple[date, date]:
    """Inclusive (start, end) for a report period: today, week, month or custom."""

    today = today or today_local()

    if period == "week":
        # weeks start on Monday
        return today - timedelta(days=today.weekday()), today
    if period == "month":
        return today.replace(day=1), today
    if period == "custom":
        start, end = coerce_date(custom_start), coerce_date(custom_end)
        if start and end:
            return start, end

    return today, today


def can_modify_attendance(record: Optional[AttendanceRecord], *, today: Optional[date] = None) -> ModifyCheck:
    if record is None:
        return ModifyCheck(False, "Attendance record not found")

    today = today or today_local()
    if (today - record.work_date).days > ATTENDANCE_EDIT_WINDOW_DAYS:
        return ModifyCheck(False, f"Cannot modify attendance older than {ATTENDANCE_EDIT_WINDOW_DAYS} days")
    return ModifyCheck(True)


def format_attendance_for_display(
    record: Optional[AttendanceRecord],
    employee_name: Optional[str] = None,
    *,
    today: Optional[date] = None,
) -> Optional[dict]:
    if record is None:
        return None

    return {
        "record_id": record.record_id,
        "attendance_key": record.attendance_key,
        "employee_id": record.employee_id,
        "employee_name": employee_name or "Unknown Employee",
        "date": record.work_date.strftime("%Y-%m-%d"),
        "date_formatted": format_display_date(record.work_date),
        "status": getattr(record.status, "value", record.status),
        "status_label": get_status_label(record.status),
        "status_color": get_status_color(record.status),
        "marked_by": record.marked_by,
        "marked_at_formatted": record.marked_at.strftime("%d/%m/%Y %H:%M") if record.marked_at else "N/A",
        "notes": record.notes or "",
        "can_modify": can_modify_attendance(record, today=today).can_modify,
    }
