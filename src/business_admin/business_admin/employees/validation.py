from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date, today_local
from ..common.validators import ValidationResult, clean_text, is_blank
from ..core.constants import (
    AADHAR_PATTERN,
    EARLIEST_JOINING_DATE,
    MAX_EMPLOYEE_AGE,
    MIN_EMPLOYEE_AGE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
)
from .model import EmployeeInput

_AADHAR_RE = re.compile(AADHAR_PATTERN)
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> Optional[int]:
    """Read the leading integer of a form value ("25", 25, "25 years")."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else None


def validate_employee(data: Mapping[str, Any], *, today: Optional[date] = None) -> ValidationResult:
    """Validate an employee form submission."""

    today = today or today_local()
    result = ValidationResult()

    name = clean_text(data.get("name"))
    if not name:
        result.add("name", "Name is required")
    elif len(name) < NAME_MIN_LENGTH:
        result.add("name", f"Name must be at least {NAME_MIN_LENGTH} characters long")
    elif len(name) > NAME_MAX_LENGTH:
        result.add("name", f"Name must not exceed {NAME_MAX_LENGTH} characters")

    aadhar_id = clean_text(data.get("aadhar_id"))
    if aadhar_id and not _AADHAR_RE.match(aadhar_id):
        result.add("aadhar_id", "Aadhar ID must be exactly 12 digits")

    raw_joining = data.get("joining_date")
    if is_blank(raw_joining):
        result.add("joining_date", "Joining date is required")
    else:
        joining_date = coerce_date(raw_joining)
        if joining_date is None:
            result.add("joining_date", "Invalid joining date")
        elif joining_date > today:
            result.add("joining_date", "Joining date cannot be in the future")
        elif joining_date < EARLIEST_JOINING_DATE:
            result.add("joining_date", f"Joining date cannot be before {EARLIEST_JOINING_DATE.year}")

    raw_age = data.get("age")
    if not is_blank(raw_age):
        age = parse_int(raw_age)
        if age is None or age < MIN_EMPLOYEE_AGE or age > MAX_EMPLOYEE_AGE:
            result.add("age", f"Age must be between {MIN_EMPLOYEE_AGE} and {MAX_EMPLOYEE_AGE}")

    return result


def normalize_employee(data: Mapping[str, Any]) -> EmployeeInput:
    """Trim the form data and drop empty optional fields.

    Call after ``validate_employee``; the joining date must already be valid.
    """

    joining_date = coerce_date(data.get("joining_date"))
    if joining_date is None:
        raise ValueError("joining_date must be validated before normalizing")

    aadhar_id = clean_text(data.get("aadhar_id")) or None
    age = None if is_blank(data.get("age")) else parse_int(data.get("age"))

    return EmployeeInput(
        name=clean_text(data.get("name")),
        joining_date=joining_date,
        aadhar_id=aadhar_id,
        age=age,
    )


def empty_employee_form() -> dict[str, str]:
    return {"name": "", "aadhar_id": "", "joining_date": "", "age": ""}
