from datetime import date
from decimal import Decimal

from src.business_admin.business_admin.core.enums import ExpenseCategory, ExpensePaymentMode
from src.business_admin.business_admin.expenses.validation import normalize_expense, validate_expense

TODAY = date(2024, 3, 15)


def _form(**overrides):
    data = {
        "amount": "450",
        "category": "tea_snacks",
        "date": "2024-03-14",
        "payment_mode": "cash",
        "vendor": "",
        "description": "",
    }
    data.update(overrides)
    return data


def test_valid_expense():
    assert validate_expense(_form(), today=TODAY).is_valid


def test_amount_rules():
    assert validate_expense(_form(amount="-5"), today=TODAY).errors["amount"] == "Amount must be a positive number"
    assert validate_expense(_form(amount="2000000"), today=TODAY).errors["amount"] == "Amount cannot exceed ₹10,00,000"


def test_category_and_mode_must_be_known():
    errors = validate_expense(_form(category="travel", payment_mode="Cash"), today=TODAY).errors
    assert errors["category"] == "Please select a valid category"
    assert errors["payment_mode"] == "Please select a valid payment mode"


def test_date_window_is_one_year():
    assert validate_expense(_form(date="2024-03-16"), today=TODAY).errors["date"] == "Expense date cannot be in the future"
    assert validate_expense(_form(date="2023-03-14"), today=TODAY).errors["date"] == (
        "Expense date cannot be more than one year old"
    )
    assert validate_expense(_form(date="2023-03-15"), today=TODAY).is_valid
    assert validate_expense(_form(date="14/03/2024"), today=TODAY).errors["date"] == "Invalid expense date"
    assert validate_expense(_form(date="2024-03-144"), today=TODAY).errors["date"] == "Invalid expense date"


def test_vendor_and_description():
    assert validate_expense(_form(vendor="   "), today=TODAY).errors["vendor"] == "Vendor name cannot be empty if provided"
    assert "vendor" in validate_expense(_form(vendor="v" * 101), today=TODAY).errors
    assert "description" in validate_expense(_form(description="d" * 501), today=TODAY).errors


def test_normalize():
    expense = normalize_expense(_form(vendor=" Chai Stall ", amount="450.5"))
    assert expense.amount == Decimal("450.5")
    assert expense.category == ExpenseCategory.TEA_SNACKS
    assert expense.payment_mode == ExpensePaymentMode.CASH
    assert expense.vendor == "Chai Stall"
    assert expense.description is None
