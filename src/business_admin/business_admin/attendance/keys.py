from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import format_iso

KEY_SEPARATOR = "_"


def generate_attendance_key(employee_id: Any, work_date: Any) -> str:
    """Build the per-day record key, e.g. ``12_2024-01-15``."""
    if employee_id in (None, "") or work_date in (None, ""):
        raise ValueError("Employee ID and date are required to generate attendance key")

    date_str = work_date if isinstance(work_date, str) else format_iso(work_date)
    if not date_str:
        raise ValueError("Employee ID and date are required to generate attendance key")
    return f"{employee_id}{KEY_SEPARATOR}{date_str}"


def parse_attendance_key(key: Any) -> tuple[Optional[str], Optional[str]]:
    if not key or not isinstance(key, str):
        return None, None

    parts = key.split(KEY_SEPARATOR)
    if len(parts) < 2:
        return None, None

    # first segment is the employee, anything after it belongs to the date
    return parts[0], KEY_SEPARATOR.join(parts[1:])
