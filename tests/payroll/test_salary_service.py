from datetime import date, datetime
from decimal import Decimal

import pytest

from src.business_admin.business_admin.attendance.model import AttendanceInput
from src.business_admin.business_admin.core.enums import AttendanceStatus, EmployeeStatus, PaymentMode, SalaryStatus
from src.business_admin.business_admin.core.exceptions import ValidationError
from src.business_admin.business_admin.employees.model import EmployeeInput
from src.business_admin.business_admin.payments.model import PaymentInput
from src.business_admin.business_admin.payroll.service import SalaryCalculation, SalaryFailure, SalaryService, get_salary_summary

MARCH_1 = date(2024, 3, 1)
MARCH_31 = date(2024, 3, 31)


@pytest.fixture
def employee_id(employees_repo):
    return employees_repo.create(
        EmployeeInput(name="Ramesh", joining_date=date(2023, 1, 1)),
        search_keywords=["ramesh"],
        status=EmployeeStatus.ACTIVE,
    )


@pytest.fixture
def service(attendance_repo, payments_repo, employees_repo):
    return SalaryService(attendance_repo, payments_repo, employees_repo, default_daily_rate=Decimal("800"))


def _mark(repo, employee_id, day, status):
    work_date = date(2024, 3, day)
    repo.create(
        AttendanceInput(employee_id=employee_id, work_date=work_date, status=status, marked_by="Admin"),
        attendance_key=f"{employee_id}_{work_date.isoformat()}",
        marked_at=datetime(2024, 3, day, 9, 0),
    )


def _pay(repo, employee_id, amount, day):
    repo.create(
        PaymentInput(
            employee_id=employee_id,
            amount=Decimal(amount),
            payment_date=date(2024, 3, day),
            payment_mode=PaymentMode.CASH,
            paid_by="Admin",
        ),
        payment_ref=f"{employee_id}_2024-03-{day:02d}_1",
        search_keywords=[],
    )


def test_salary_is_days_times_rate_minus_payments(service, employee_id, attendance_repo, payments_repo, fixed_now):
    _mark(attendance_repo, employee_id, 1, AttendanceStatus.PRESENT)
    _mark(attendance_repo, employee_id, 2, AttendanceStatus.PRESENT)
    _mark(attendance_repo, employee_id, 3, AttendanceStatus.HALF_DAY)
    _mark(attendance_repo, employee_id, 4, AttendanceStatus.ABSENT)
    _pay(payments_repo, employee_id, "500", 2)

    result = service.calculate_salary(employee_id, MARCH_1, MARCH_31, "750", now=fixed_now)

    assert result.attendance.working_days == Decimal("2.5")
    assert result.gross_salary == Decimal("1875.00")
    assert result.total_payments == Decimal("500.00")
    assert result.net_salary == Decimal("1375.00")
    assert result.status == SalaryStatus.DUE
    assert result.total_days == 31
    assert result.calculated_at == fixed_now


def test_default_rate_is_used(service, employee_id, attendance_repo):
    _mark(attendance_repo, employee_id, 1, AttendanceStatus.PRESENT)

    result = service.calculate_salary(employee_id, MARCH_1, MARCH_31)
    assert result.daily_rate == Decimal("800")
    assert result.gross_salary == Decimal("800.00")


def test_overpaid_when_payments_exceed_earnings(service, employee_id, attendance_repo, payments_repo):
    _mark(attendance_repo, employee_id, 1, AttendanceStatus.HALF_DAY)
    _pay(payments_repo, employee_id, "1000", 1)

    result = service.calculate_salary(employee_id, MARCH_1, MARCH_31, 750)
    assert result.net_salary == Decimal("-625.00")
    assert result.status == SalaryStatus.OVERPAID
    assert get_salary_summary(result)["net_salary_status"] == "overpaid"


def test_only_records_inside_period_count(service, employee_id, attendance_repo):
    _mark(attendance_repo, employee_id, 1, AttendanceStatus.PRESENT)
    _mark(attendance_repo, employee_id, 20, AttendanceStatus.PRESENT)

    result = service.calculate_salary(employee_id, MARCH_1, date(2024, 3, 10), 750)
    assert result.attendance.total_records == 1


def test_invalid_inputs(service, employee_id):
    with pytest.raises(ValidationError):
        service.calculate_salary(employee_id, MARCH_31, MARCH_1, 750)
    with pytest.raises(ValidationError, match="Employee not found"):
        service.calculate_salary(999, MARCH_1, MARCH_31, 750)


def test_many_employees_reports_failures(service, employee_id):
    results = service.calculate_salary_for_employees([employee_id, 999], MARCH_1, MARCH_31, 750)

    assert isinstance(results[0], SalaryCalculation)
    assert isinstance(results[1], SalaryFailure)
    assert results[1].error == "Employee not found"
