"""Example: use the service layer directly, without Flask.

Controllers stay thin; the business rules live in the services.
"""

import importlib
from decimal import Decimal

from config import get_settings_module

from src.business_admin.business_admin.common.datetime_utils import today_local
from src.business_admin.business_admin.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        default_daily_rate=Decimal(str(getattr(settings, "DEFAULT_DAILY_RATE", "750"))),
    )

    today = today_local()
    print(container.employee_service.get_employee_stats())
    print(container.attendance_service.get_attendance_stats(start_date=today.replace(day=1), end_date=today))

    employees = container.employee_service.list_employees()
    if employees:
        result = container.salary_service.calculate_salary(
            employee_id=employees[0].employee_id,
            start_date=today.replace(day=1),
            end_date=today,
        )
        print(result)


if __name__ == "__main__":
    main()
