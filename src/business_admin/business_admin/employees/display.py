from __future__ import annotations

from datetime import date
from typing import Any, Optional, Union

from ..common.datetime_utils import coerce_date, format_display_date, today_local
from .model import Employee, EmployeeInput, TenureStatus

NEW_EMPLOYEE_DAYS = 90
RECENT_HIRE_DAYS = 365


def format_aadhar_id(aadhar_id: Optional[str]) -> Optional[str]:
    """Mask the middle digits: 123412341234 -> 1234-****-1234."""
    if not aadhar_id or len(aadhar_id) != 12:
        return aadhar_id
    return f"{aadhar_id[:4]}-****-{aadhar_id[8:]}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def calculate_years_of_service(joining_date: Any, *, today: Optional[date] = None) -> str:
    joining = coerce_date(joining_date)
    if joining is None:
        return "N/A"

    today = today or today_local()
    diff_days = abs((today - joining).days)
    years = diff_days // 365
    months = (diff_days % 365) // 30

    if years == 0 and months == 0:
        return "Less than a month"
    if years == 0:
        return _plural(months, "month")
    if months == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')}, {_plural(months, 'month')}"


def get_employee_status(joining_date: Any, *, today: Optional[date] = None) -> TenureStatus:
    joining = coerce_date(joining_date)
    if joining is None:
        return TenureStatus(status="unknown", label="Unknown", color="#6c757d")

    today = today or today_local()
    diff_days = (today - joining).days

    if diff_days < 0:
        return TenureStatus(status="future", label="Future Joining", color="#17a2b8")
    if diff_days <= NEW_EMPLOYEE_DAYS:
        return TenureStatus(status="new", label="New Employee", color="#28a745")
    if diff_days <= RECENT_HIRE_DAYS:
        return TenureStatus(status="recent", label="Recent Hire", color="#ffc107")
    return TenureStatus(status="experienced", label="Experienced", color="#007bff")


def generate_employee_search_keywords(employee: Union[Employee, EmployeeInput]) -> list[str]:
    keywords: list[str] = []

    if employee.name:
        lowered = employee.name.lower()
        keywords.append(lowered)
        keywords.extend(lowered.split())

    if employee.aadhar_id:
        keywords.append(employee.aadhar_id)

    if employee.joining_date:
        keywords.append(str(employee.joining_date.year))

    # dict keeps first-seen order
    return list(dict.fromkeys(keywords))


def format_employee_for_display(employee: Optional[Employee], *, today: Optional[date] = None) -> Optional[dict]:
    if employee is None:
        return None

    tenure = get_employee_status(employee.joining_date, today=today)
    return {
        "employee_id": employee.employee_id,
        "name": employee.name.strip() or "N/A",
        "aadhar_id": format_aadhar_id(employee.aadhar_id) if employee.aadhar_id else "Not provided",
        "joining_date": format_display_date(employee.joining_date),
        "joining_date_iso": employee.joining_date.strftime("%Y-%m-%d") if employee.joining_date else "",
        "age": f"{employee.age} years" if employee.age else "Not specified",
        "years_of_service": calculate_years_of_service(employee.joining_date, today=today),
        "tenure_status": tenure.status,
        "tenure_label": tenure.label,
        "tenure_color": tenure.color,
        "status": employee.status.value,
    }
