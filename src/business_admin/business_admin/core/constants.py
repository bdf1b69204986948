"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date
from decimal import Decimal

DEFAULT_SESSION_DAYS = 7

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
AADHAR_PATTERN = r"^\d{12}$"
MIN_EMPLOYEE_AGE = 18
MAX_EMPLOYEE_AGE = 65
EARLIEST_JOINING_DATE = date(1990, 1, 1)

ATTENDANCE_LOOKBACK_MONTHS = 3
ATTENDANCE_EDIT_WINDOW_DAYS = 7
NOTES_MAX_LENGTH = 500

MAX_PAYMENT_AMOUNT = Decimal("1000000")
EARLIEST_PAYMENT_DATE = date(2020, 1, 1)

DEFAULT_DAILY_RATE = Decimal("750")
MIN_DAILY_RATE = Decimal("1")
MAX_DAILY_RATE = Decimal("50000")

MAX_EXPENSE_AMOUNT = Decimal("1000000")
EXPENSE_LOOKBACK_YEARS = 1
VENDOR_MAX_LENGTH = 100
