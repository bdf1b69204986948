from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_DAILY_RATE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .expenses.mysql_expense_repository import MySQLExpenseRepository
from .expenses.repository import ExpenseRepository
from .expenses.service import ExpenseService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .payroll.service import SalaryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    payments_repo: PaymentRepository
    expenses_repo: ExpenseRepository

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    payment_service: PaymentService
    salary_service: SalaryService
    expense_service: ExpenseService


def wire_container(
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    payments_repo: PaymentRepository,
    expenses_repo: ExpenseRepository,
    conn: Optional[DatabaseConnection] = None,
    default_daily_rate: Decimal = DEFAULT_DAILY_RATE,
) -> Container:
    """Build services on top of any repository implementations."""

    return Container(
        conn=conn,
        users_repo=users_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        expenses_repo=expenses_repo,
        auth_service=AuthService(users_repo),
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo),
        payment_service=PaymentService(payments_repo, employees_repo),
        salary_service=SalaryService(
            attendance_repo,
            payments_repo,
            employees_repo,
            default_daily_rate=default_daily_rate,
        ),
        expense_service=ExpenseService(expenses_repo),
    )


def build_container(*, db_config: Mapping[str, Any], default_daily_rate: Decimal = DEFAULT_DAILY_RATE) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        expenses_repo=MySQLExpenseRepository(conn),
        default_daily_rate=default_daily_rate,
    )
