from datetime import date

from src.business_admin.business_admin.employees.display import (
    calculate_years_of_service,
    format_aadhar_id,
    format_employee_for_display,
    generate_employee_search_keywords,
    get_employee_status,
)
from src.business_admin.business_admin.employees.model import Employee, EmployeeInput
from src.business_admin.business_admin.employees.validation import normalize_employee, parse_int, validate_employee

TODAY = date(2024, 3, 15)


def _valid(**overrides):
    data = {"name": "Ramesh Kumar", "aadhar_id": "123412341234", "joining_date": "2023-01-10", "age": "30"}
    data.update(overrides)
    return data


def test_valid_employee_has_no_errors():
    assert validate_employee(_valid(), today=TODAY).is_valid


def test_name_rules():
    assert validate_employee(_valid(name="  "), today=TODAY).errors["name"] == "Name is required"
    assert "at least 2" in validate_employee(_valid(name="R"), today=TODAY).errors["name"]
    assert "exceed 100" in validate_employee(_valid(name="x" * 101), today=TODAY).errors["name"]


def test_aadhar_must_be_twelve_digits_when_given():
    assert validate_employee(_valid(aadhar_id=""), today=TODAY).is_valid
    errors = validate_employee(_valid(aadhar_id="12341234"), today=TODAY).errors
    assert errors["aadhar_id"] == "Aadhar ID must be exactly 12 digits"


def test_joining_date_bounds():
    assert validate_employee(_valid(joining_date=""), today=TODAY).errors["joining_date"] == "Joining date is required"
    assert validate_employee(_valid(joining_date="2024-03-16"), today=TODAY).errors["joining_date"] == (
        "Joining date cannot be in the future"
    )
    assert validate_employee(_valid(joining_date="1989-12-31"), today=TODAY).errors["joining_date"] == (
        "Joining date cannot be before 1990"
    )
    assert validate_employee(_valid(joining_date="2024-03-15"), today=TODAY).is_valid


def test_joining_date_with_trailing_characters_is_invalid():
    for value in ("2020-01-019", "2024-03-155", "2024-03-10xyz"):
        assert validate_employee(_valid(joining_date=value), today=TODAY).errors["joining_date"] == "Invalid joining date"


def test_age_bounds():
    assert validate_employee(_valid(age="18"), today=TODAY).is_valid
    assert validate_employee(_valid(age="65"), today=TODAY).is_valid
    assert "age" in validate_employee(_valid(age="17"), today=TODAY).errors
    assert "age" in validate_employee(_valid(age="abc"), today=TODAY).errors


def test_parse_int_reads_leading_digits():
    assert parse_int("25 years") == 25
    assert parse_int(" 7") == 7
    assert parse_int("x1") is None
    assert parse_int(None) is None


def test_normalize_trims_and_drops_empty_optionals():
    employee = normalize_employee({"name": "  Sita Devi ", "aadhar_id": " ", "joining_date": "2023-07-15", "age": ""})
    assert employee == EmployeeInput(name="Sita Devi", joining_date=date(2023, 7, 15))


def test_aadhar_masking():
    assert format_aadhar_id("123412341234") == "1234-****-1234"
    assert format_aadhar_id("123") == "123"


def test_years_of_service():
    assert calculate_years_of_service(date(2024, 3, 1), today=TODAY) == "Less than a month"
    assert calculate_years_of_service(date(2024, 1, 1), today=TODAY) == "2 months"
    assert calculate_years_of_service(date(2023, 2, 1), today=TODAY) == "1 year, 1 month"
    assert calculate_years_of_service(None) == "N/A"


def test_tenure_status_buckets():
    assert get_employee_status(date(2024, 3, 20), today=TODAY).status == "future"
    assert get_employee_status(date(2024, 1, 1), today=TODAY).status == "new"
    assert get_employee_status(date(2023, 6, 1), today=TODAY).status == "recent"
    assert get_employee_status(date(2020, 1, 1), today=TODAY).status == "experienced"


def test_search_keywords_are_unique_and_lowercase():
    employee = EmployeeInput(name="Ram Ram", joining_date=date(2023, 1, 1), aadhar_id="123412341234")
    assert generate_employee_search_keywords(employee) == ["ram ram", "ram", "123412341234", "2023"]


def test_display_dict():
    employee = Employee(employee_id=3, name="Mohan", joining_date=date(2020, 1, 1))
    shown = format_employee_for_display(employee, today=TODAY)
    assert shown["aadhar_id"] == "Not provided"
    assert shown["age"] == "Not specified"
    assert shown["joining_date_iso"] == "2020-01-01"
    assert shown["tenure_label"] == "Experienced"
    assert format_employee_for_display(None) is None
