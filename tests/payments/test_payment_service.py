from datetime import date, datetime
from decimal import Decimal

import pytest

from src.business_admin.business_admin.core.enums import EmployeeStatus, PaymentMode
from src.business_admin.business_admin.core.exceptions import ValidationError
from src.business_admin.business_admin.employees.model import EmployeeInput
from src.business_admin.business_admin.payments.service import PaymentService


@pytest.fixture
def staff(employees_repo):
    return [
        employees_repo.create(
            EmployeeInput(name=name, joining_date=date(2023, 1, 1)),
            search_keywords=[name.lower()],
            status=EmployeeStatus.ACTIVE,
        )
        for name in ("Ramesh", "Sita")
    ]


@pytest.fixture
def service(payments_repo, employees_repo):
    return PaymentService(payments_repo, employees_repo)


def _form(employee_id, amount="1000", day="2024-03-10", mode="Cash", paid_by="Admin", notes=""):
    return {
        "employee_id": str(employee_id),
        "amount": amount,
        "payment_date": day,
        "payment_mode": mode,
        "paid_by": paid_by,
        "notes": notes,
    }


def test_references_count_up_per_employee_and_day(service, staff, today):
    first = service.create_payment(_form(staff[0]), today=today)
    second = service.create_payment(_form(staff[0]), today=today)
    other_day = service.create_payment(_form(staff[0], day="2024-03-11"), today=today)

    assert first.payment_ref == f"{staff[0]}_2024-03-10_1"
    assert second.payment_ref == f"{staff[0]}_2024-03-10_2"
    assert other_day.payment_ref == f"{staff[0]}_2024-03-11_1"


def test_sequence_continues_after_delete(service, staff, today):
    first = service.create_payment(_form(staff[0]), today=today)
    second = service.create_payment(_form(staff[0]), today=today)
    service.delete_payment(first.payment_id)

    third = service.create_payment(_form(staff[0]), today=today)
    assert second.payment_ref.endswith("_2")
    assert third.payment_ref.endswith("_3")


def test_unknown_employee(service, staff, today):
    with pytest.raises(ValidationError, match="Employee not found"):
        service.create_payment(_form(999), today=today)


def test_update_and_delete(service, staff, today, fixed_now):
    payment = service.create_payment(_form(staff[0]), today=today)

    updated = service.update_payment(payment.payment_id, _form(staff[0], amount="1250.75"), today=today, now=fixed_now)
    assert updated.amount == Decimal("1250.75")
    assert updated.payment_ref == payment.payment_ref
    assert updated.updated_at == fixed_now

    assert service.delete_payment(payment.payment_id) is True
    assert service.delete_payment(payment.payment_id) is False
    with pytest.raises(ValidationError, match="Payment record not found"):
        service.update_payment(payment.payment_id, _form(staff[0]), today=today)


def test_moving_payment_takes_new_reference(service, staff, today, fixed_now):
    payment = service.create_payment(_form(staff[0], day="2024-03-10"), today=today)
    service.create_payment(_form(staff[1], day="2024-03-12"), today=today)

    moved = service.update_payment(payment.payment_id, _form(staff[1], day="2024-03-12"), today=today, now=fixed_now)
    assert moved.employee_id == staff[1]
    assert moved.payment_ref == f"{staff[1]}_2024-03-12_2"

    fresh = service.create_payment(_form(staff[0], day="2024-03-10"), today=today)
    assert fresh.payment_ref == f"{staff[0]}_2024-03-10_1"

    refs = [p.payment_ref for p in service.list_payments()]
    assert len(refs) == len(set(refs))


def test_filters_and_stats(service, staff, today):
    service.create_payment(_form(staff[0], amount="1000", day="2024-03-01"), today=today)
    service.create_payment(_form(staff[0], amount="500", day="2024-03-05", mode="Online", paid_by="Site Manager"), today=today)
    service.create_payment(_form(staff[1], amount="750", day="2024-03-10"), today=today)

    assert [p.payment_date for p in service.list_payments()] == [date(2024, 3, 10), date(2024, 3, 5), date(2024, 3, 1)]
    assert len(service.list_payments(payment_mode="Online")) == 1
    assert len(service.list_payments(paid_by="manager")) == 1
    assert len(service.list_payments(limit=2)) == 2
    assert len(service.list_for_employee(staff[0])) == 2
    assert len(service.list_by_date_range(date(2024, 3, 2), date(2024, 3, 10))) == 2

    stats = service.get_payment_stats()
    assert stats["total_payments"] == 3
    assert stats["total_amount"] == Decimal("2250")
    assert stats["cash_amount"] == Decimal("1750")
    assert stats["online_payments"] == 1
    assert stats["unique_employees"] == 2
    assert stats["date_range"] == {"start": "2024-03-01", "end": "2024-03-10"}

    assert service.get_payment_stats(employee_id=999)["date_range"] is None


def test_search(service, staff, today):
    service.create_payment(_form(staff[0], notes="Diwali bonus"), today=today)
    service.create_payment(_form(staff[1]), today=today)

    assert len(service.search_payments("bonus")) == 1
    assert len(service.search_payments("")) == 2


def test_search_by_employee_id_is_exact(service, staff, employees_repo, today):
    extra = [
        employees_repo.create(
            EmployeeInput(name=f"Worker {n}", joining_date=date(2023, 1, 1)),
            search_keywords=[f"worker {n}"],
            status=EmployeeStatus.ACTIVE,
        )
        for n in range(10)
    ]
    service.create_payment(_form(staff[0]), today=today)
    service.create_payment(_form(extra[-1]), today=today)

    found = service.search_payments(str(staff[0]))
    assert [p.employee_id for p in found] == [staff[0]]


def test_summary_by_employee_orders_by_total(service, staff, today):
    service.create_payment(_form(staff[0], amount="100"), today=today)
    service.create_payment(_form(staff[1], amount="900"), today=today)
    service.create_payment(_form(staff[0], amount="200", day="2024-03-12"), today=today)

    summary = service.get_payment_summary_by_employee()
    assert [s["employee_name"] for s in summary] == ["Sita", "Ramesh"]
    assert summary[1]["payment_count"] == 2
    assert summary[1]["last_payment_date"] == date(2024, 3, 12)
    assert service.total_paid(staff[0], date(2024, 3, 1), date(2024, 3, 31)) == Decimal("300")
