from __future__ import annotations

import sys
from datetime import date, datetime
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
REPO_ROOT = TESTS_DIR.parent
for path in (REPO_ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from fakes import (  # noqa: E402
    InMemoryAttendance,
    InMemoryEmployees,
    InMemoryExpenses,
    InMemoryPayments,
    InMemoryUsers,
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 10, 30)


@pytest.fixture
def today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def payments_repo() -> InMemoryPayments:
    return InMemoryPayments()


@pytest.fixture
def expenses_repo() -> InMemoryExpenses:
    return InMemoryExpenses()


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()
