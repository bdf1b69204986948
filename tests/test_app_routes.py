from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from src.business_admin.business_admin.container import wire_container
from src.business_admin.business_admin.core.enums import EmployeeStatus, ExpenseStatus, Role
from src.business_admin.business_admin.employees.model import EmployeeInput
from src.business_admin.business_admin.main import create_app
from src.business_admin.business_admin.users.model import User


@pytest.fixture
def container(users_repo, employees_repo, attendance_repo, payments_repo, expenses_repo):
    for user_id, username, role in ((1, "admin", Role.ADMIN), (2, "staff", Role.STAFF)):
        users_repo.add(
            User(
                user_id=user_id,
                full_name=username.title(),
                username=username,
                password_hash=generate_password_hash("secret"),
                role=role,
            )
        )
    employees_repo.create(
        EmployeeInput(name="Ramesh Kumar", joining_date=date(2023, 1, 10)),
        search_keywords=["ramesh kumar", "ramesh", "kumar", "2023"],
        status=EmployeeStatus.ACTIVE,
    )
    return wire_container(
        users_repo=users_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        expenses_repo=expenses_repo,
        default_daily_rate=Decimal("750"),
    )


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def _login(client, username="admin"):
    return client.post("/", data={"username": username, "password": "secret"})


def test_pages_need_login(client):
    resp = client.get("/employees")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/")


def test_wrong_password_stays_on_login(client):
    resp = client.post("/", data={"username": "admin", "password": "nope"})
    assert resp.status_code == 200
    assert b"Invalid username or password" in resp.data


@pytest.mark.parametrize(
    "path",
    [
        "/dashboard",
        "/employees",
        "/employees/new",
        "/employees/1/edit",
        "/attendance",
        "/attendance/bulk",
        "/attendance/reports?period=week",
        "/payments",
        "/salary",
        "/expenses",
        "/expenses/reports?view=daily",
        "/expenses/reports?view=monthly",
        "/expenses/reports?view=category",
    ],
)
def test_pages_render(client, path):
    _login(client)
    assert client.get(path).status_code == 200


def test_create_employee_then_list(client, container):
    _login(client)
    resp = client.post(
        "/employees/new",
        data={"name": "Sita Devi", "aadhar_id": "567856785678", "joining_date": "2023-07-15", "age": "28"},
    )
    assert resp.status_code == 302
    assert [e.name for e in container.employee_service.search_employees("sita")] == ["Sita Devi"]


def test_mark_attendance_and_export(client, container):
    _login(client)
    today = date.today().isoformat()
    resp = client.post("/attendance", data={"employee_id": "1", "date": today, "status": "present", "notes": ""})
    assert resp.status_code == 302

    record = container.attendance_service.get_by_key(f"1_{today}")
    assert record is not None
    assert record.marked_by == "Admin"

    csv_resp = client.get("/attendance/reports.csv?period=today")
    assert csv_resp.mimetype == "text/csv"
    assert "employee_name" in csv_resp.data.decode("utf-8-sig")
    assert "Ramesh Kumar" in csv_resp.data.decode("utf-8-sig")

    stats = client.get("/api/attendance/stats?period=today").get_json()
    assert stats["success"] is True
    assert stats["stats"]["present"] == 1


def test_salary_calculation_page(client):
    _login(client)
    today = date.today()
    resp = client.post(
        "/salary",
        data={
            "employee_ids": ["1"],
            "start_date": today.replace(day=1).isoformat(),
            "end_date": today.isoformat(),
            "daily_rate": "750",
        },
    )
    assert resp.status_code == 200
    assert b"Ramesh Kumar" in resp.data


def test_staff_cannot_purge_employee(client, container):
    _login(client, "staff")
    resp = client.post("/employees/1/purge")
    assert resp.status_code == 403
    assert container.employee_service.get_employee(1) is not None


def test_admin_approves_expense(client, container):
    _login(client)
    expense = container.expense_service.create_expense(
        {"amount": "300", "category": "fuel", "date": date.today().isoformat(), "payment_mode": "cash"},
        created_by=1,
    )
    resp = client.post(f"/expenses/{expense.expense_id}/decide", data={"decision": "approve"})
    assert resp.status_code == 302
    assert container.expense_service.get_expense(expense.expense_id).status == ExpenseStatus.APPROVED


def test_logout_clears_session(client):
    _login(client)
    client.get("/logout")
    assert client.get("/dashboard").status_code == 302
