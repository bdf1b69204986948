from __future__ import annotations

import calendar
import re
from datetime import date, datetime
from typing import Any, Optional

_ISO_DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of form/database values into a date.

    Accepts ``date``/``datetime`` objects and ISO strings (a time part after the
    date is ignored). Returns None when the value cannot be read as a date.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = _ISO_DATE_PREFIX.match(value.strip())
        if not match:
            return None
        try:
            return parse_iso_date(match.group(1))
        except ValueError:
            return None
    return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def subtract_months(value: date, months: int) -> date:
    """Go back ``months`` calendar months, clamping to the end of the target month."""
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def subtract_years(value: date, years: int) -> date:
    return subtract_months(value, years * 12)


def format_display_date(value: Any) -> str:
    """Long display form, e.g. ``15 January 2024``."""
    if value is None or value == "":
        return "N/A"
    d = coerce_date(value)
    if d is None:
        return "Invalid Date"
    return f"{d.day} {calendar.month_name[d.month]} {d.year}"


def format_iso(value: Any) -> Optional[str]:
    d = coerce_date(value)
    return d.strftime("%Y-%m-%d") if d else None
