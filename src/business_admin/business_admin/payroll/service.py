from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence, Union

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import coerce_date, now_local
from ..common.formatting import round_half_up, to_decimal
from ..common.validators import ValidationResult, is_blank
from ..core.constants import DEFAULT_DAILY_RATE, MAX_DAILY_RATE, MIN_DAILY_RATE
from ..core.enums import SalaryStatus
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..employees.validation import parse_int
from ..payments.display import calculate_total_payment
from ..payments.model import Payment
from ..payments.repository import PaymentRepository
from .calculator.base import DayValueCalculator
from .calculator.standard_calculator import StandardDayValueCalculator

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class AttendanceSummary:
    total_records: int = 0
    working_days: Decimal = Decimal("0")
    full_days: int = 0
    half_days: int = 0
    absent_days: int = 0
    attendance_percentage: Decimal = Decimal("0")
    details: list[dict] = field(default_factory=list)


@dataclass(frozen=True)
class SalaryCalculation:
    employee_id: int
    employee_name: str
    start_date: date
    end_date: date
    total_days: int
    daily_rate: Decimal
    attendance: AttendanceSummary
    gross_salary: Decimal
    total_payments: Decimal
    net_salary: Decimal
    status: SalaryStatus
    payments: list[Payment]
    records: list[AttendanceRecord]
    calculated_at: datetime


@dataclass(frozen=True)
class SalaryFailure:
    employee_id: Any
    error: str


def calculate_attendance_summary(
    records: Sequence[AttendanceRecord],
    *,
    calculator: Optional[DayValueCalculator] = None,
) -> AttendanceSummary:
    if not records:
        return AttendanceSummary()

    calculator = calculator or StandardDayValueCalculator()
    working_days = Decimal("0")
    counts = {"full": 0, "partial": 0, "absent": 0}
    details: list[dict] = []

    for record in records:
        value = calculator.day_value(record)
        record_type = calculator.record_type(record)
        working_days += value
        counts[record_type.value] += 1
        details.append(
            {
                "date": record.work_date.strftime("%Y-%m-%d"),
                "status": record.status.value,
                "type": record_type.value,
                "day_value": value,
            }
        )

    return AttendanceSummary(
        total_records=len(records),
        working_days=round_half_up(working_days, 1),
        full_days=counts["full"],
        half_days=counts["partial"],
        absent_days=counts["absent"],
        attendance_percentage=round_half_up(working_days * 100 / len(records), 1),
        details=details,
    )


def calculate_total_days(start_date: date, end_date: date) -> int:
    """Days in the period, counting both ends."""
    return abs((end_date - start_date).days) + 1


def _minutes_of(hhmm: str) -> int:
    hour, minute = hhmm.strip().split(":")[:2]
    return int(hour) * 60 + int(minute)


def calculate_hours_worked(check_in: Optional[str], check_out: Optional[str]) -> float:
    """Hours between two HH:MM times; a check-out before check-in means the next day."""
    if not check_in or not check_out:
        return 0.0
    try:
        start, end = _minutes_of(check_in), _minutes_of(check_out)
    except ValueError:
        return 0.0

    if end < start:
        end += 24 * 60
    return max(0, end - start) / 60


def format_hours(hours: float) -> str:
    whole = int(hours)
    minutes = int(round_half_up((Decimal(str(hours)) - whole) * 60))
    return f"{whole}h {minutes}m"


def validate_salary_inputs(
    employee_id: Any,
    start_date: Any,
    end_date: Any,
    daily_rate: Any = DEFAULT_DAILY_RATE,
) -> ValidationResult:
    result = ValidationResult()

    if is_blank(employee_id):
        result.add("employee_id", "Employee selection is required")

    start, end = coerce_date(start_date), coerce_date(end_date)
    if start is None:
        result.add("start_date", "Start date is required")
    if end is None:
        result.add("end_date", "End date is required")
    if start and end and start > end:
        result.add("date_range", "Start date must be before or equal to end date")

    rate = to_decimal(daily_rate)
    if rate is None or rate <= 0:
        result.add("daily_rate", "Valid daily rate is required")
    if rate and (rate < MIN_DAILY_RATE or rate > MAX_DAILY_RATE):
        result.add("daily_rate", "Daily rate must be between ₹1 and ₹50,000")

    return result


def get_salary_summary(calculation: SalaryCalculation) -> dict:
    return {
        "employee_name": calculation.employee_name,
        "total_days": calculation.total_days,
        "working_days": calculation.attendance.working_days,
        "attendance_rate": calculation.attendance.attendance_percentage,
        "gross_salary": calculation.gross_salary,
        "total_payments": calculation.total_payments,
        "net_salary": calculation.net_salary,
        "net_salary_status": calculation.status.value,
    }


class SalaryService:
    """Use case: salary owed for a period = paid days x daily rate - payments already made."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        payments: PaymentRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[DayValueCalculator] = None,
        default_daily_rate: Decimal = DEFAULT_DAILY_RATE,
    ):
        self._attendance = attendance
        self._payments = payments
        self._employees = employees
        self._calculator = calculator or StandardDayValueCalculator()
        self._default_daily_rate = Decimal(str(default_daily_rate))

    @property
    def default_daily_rate(self) -> Decimal:
        return self._default_daily_rate

    def calculate_salary(
        self,
        employee_id: Any,
        start_date: Any,
        end_date: Any,
        daily_rate: Any = None,
        *,
        now: Optional[datetime] = None,
    ) -> SalaryCalculation:
        if daily_rate is None:
            daily_rate = self._default_daily_rate
        validate_salary_inputs(employee_id, start_date, end_date, daily_rate).raise_if_invalid()

        key = parse_int(employee_id)
        employee = self._employees.get_by_id(key) if key is not None else None
        if not employee:
            raise ValidationError("Employee not found")

        start, end = coerce_date(start_date), coerce_date(end_date)
        rate = to_decimal(daily_rate)

        records = list(self._attendance.list_records(employee_id=employee.employee_id, start_date=start, end_date=end))
        payments = list(self._payments.list_payments(employee_id=employee.employee_id, start_date=start, end_date=end))

        summary = calculate_attendance_summary(records, calculator=self._calculator)
        gross = (summary.working_days * rate).quantize(CENTS)
        paid = calculate_total_payment(payments).quantize(CENTS)
        net = gross - paid

        logger.debug("Salary for employee %s: gross=%s paid=%s net=%s", employee.employee_id, gross, paid, net)

        return SalaryCalculation(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            start_date=start,
            end_date=end,
            total_days=calculate_total_days(start, end),
            daily_rate=rate,
            attendance=summary,
            gross_salary=gross,
            total_payments=paid,
            net_salary=net,
            status=SalaryStatus.DUE if net >= 0 else SalaryStatus.OVERPAID,
            payments=payments,
            records=records,
            calculated_at=now or now_local(),
        )

    def calculate_salary_for_employees(
        self,
        employee_ids: Iterable[Any],
        start_date: Any,
        end_date: Any,
        daily_rate: Any = None,
    ) -> list[Union[SalaryCalculation, SalaryFailure]]:
        calculations: list[Union[SalaryCalculation, SalaryFailure]] = []
        for employee_id in employee_ids:
            try:
                calculations.append(self.calculate_salary(employee_id, start_date, end_date, daily_rate))
            except ValidationError as e:
                logger.warning("Salary calculation failed for employee %s: %s", employee_id, e)
                calculations.append(SalaryFailure(employee_id=employee_id, error=str(e)))
        return calculations
