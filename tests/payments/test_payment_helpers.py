from datetime import date
from decimal import Decimal

import pytest

from src.business_admin.business_admin.core.enums import PaymentMode
from src.business_admin.business_admin.payments.display import (
    calculate_total_payment,
    format_payment_for_display,
    generate_payment_id,
    generate_payment_search_keywords,
    group_payments_by_date,
    group_payments_by_employee,
    parse_payment_sequence,
)
from src.business_admin.business_admin.payments.model import Payment, PaymentInput
from src.business_admin.business_admin.payments.validation import normalize_payment, validate_payment

TODAY = date(2024, 3, 15)


def _form(**overrides):
    data = {
        "employee_id": "1",
        "amount": "1500",
        "payment_date": "2024-03-10",
        "payment_mode": "Cash",
        "paid_by": "Admin",
        "notes": "",
    }
    data.update(overrides)
    return data


def _payment(payment_id, employee_id, amount, day, mode=PaymentMode.CASH):
    return Payment(
        payment_id=payment_id,
        payment_ref=f"{employee_id}_{day.isoformat()}_1",
        employee_id=employee_id,
        amount=Decimal(amount),
        payment_date=day,
        payment_mode=mode,
        paid_by="Admin",
    )


def test_valid_payment():
    assert validate_payment(_form(), today=TODAY).is_valid


def test_amount_rules():
    assert validate_payment(_form(amount=""), today=TODAY).errors["amount"] == "Payment amount is required"
    assert validate_payment(_form(amount=0), today=TODAY).errors["amount"] == "Payment amount is required"
    assert validate_payment(_form(amount="0"), today=TODAY).errors["amount"] == "Payment amount must be greater than 0"
    assert validate_payment(_form(amount="abc"), today=TODAY).errors["amount"] == "Payment amount must be greater than 0"
    assert validate_payment(_form(amount="1000001"), today=TODAY).errors["amount"] == (
        "Payment amount cannot exceed 10,00,000"
    )


def test_date_mode_and_payer_rules():
    assert validate_payment(_form(payment_date="2024-03-16"), today=TODAY).errors["payment_date"] == (
        "Payment date cannot be in the future"
    )
    assert validate_payment(_form(payment_date="2019-12-31"), today=TODAY).errors["payment_date"] == (
        "Payment date cannot be before 2020"
    )
    assert validate_payment(_form(payment_mode="cheque"), today=TODAY).errors["payment_mode"] == (
        "Please select a valid payment mode"
    )
    assert validate_payment(_form(paid_by="A"), today=TODAY).errors["paid_by"] == (
        "Paid by name must be at least 2 characters long"
    )
    assert validate_payment(_form(payment_date="2024-03-100"), today=TODAY).errors["payment_date"] == "Invalid payment date"


def test_normalize():
    payment = normalize_payment(_form(amount="1500.50", notes="  advance "))
    assert payment == PaymentInput(
        employee_id=1,
        amount=Decimal("1500.50"),
        payment_date=date(2024, 3, 10),
        payment_mode=PaymentMode.CASH,
        paid_by="Admin",
        notes="advance",
    )


def test_reference_format():
    assert generate_payment_id(4, date(2024, 3, 10), 2) == "4_2024-03-10_2"
    assert parse_payment_sequence("4_2024-03-10_2") == 2
    assert parse_payment_sequence("garbage") == 0
    with pytest.raises(ValueError):
        generate_payment_id(None, date(2024, 3, 10))


def test_search_keywords():
    payment = normalize_payment(_form(paid_by="Site Manager", payment_mode="Online", notes="Diwali bonus"))
    assert generate_payment_search_keywords(payment) == [
        "1",
        "site manager",
        "site",
        "manager",
        "online",
        "2024",
        "march",
        "diwali",
        "bonus",
    ]


def test_totals_and_grouping():
    payments = [
        _payment(1, 1, "100.50", date(2024, 3, 1)),
        _payment(2, 2, "200", date(2024, 3, 1)),
        _payment(3, 1, "50", date(2024, 3, 2)),
    ]
    assert calculate_total_payment(payments) == Decimal("350.50")
    assert calculate_total_payment([]) == Decimal("0")
    assert sorted(group_payments_by_date(payments)) == ["2024-03-01", "2024-03-02"]
    assert [p.payment_id for p in group_payments_by_employee(payments)[1]] == [1, 3]


def test_display_dict():
    shown = format_payment_for_display(_payment(1, 1, "125000", date(2024, 3, 1)), "Ramesh")
    assert shown["amount"] == "₹1,25,000.00"
    assert shown["payment_date"] == "1 March 2024"
    assert shown["payment_mode"] == "Cash"
    assert format_payment_for_display(None) is None
