from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.business_admin.business_admin.core.enums import Role
from src.business_admin.business_admin.core.exceptions import AuthenticationError
from src.business_admin.business_admin.users.model import User
from src.business_admin.business_admin.users.service import AuthService

from fakes import InMemoryUsers


def _user(*, password_hash=None, is_active=True):
    return User(
        user_id=1,
        full_name="Site Admin",
        username="admin",
        password_hash=password_hash or generate_password_hash("right"),
        role=Role.ADMIN,
        is_active=is_active,
    )


def test_auth_success_returns_session_user():
    auth = AuthService(InMemoryUsers([_user()]))

    s_user = auth.authenticate(" admin ", "right")
    assert (s_user.user_id, s_user.full_name, s_user.role) == (1, "Site Admin", Role.ADMIN)


def test_auth_wrong_password_raises():
    auth = AuthService(InMemoryUsers([_user()]))

    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        auth.authenticate("admin", "wrong")


def test_auth_unknown_or_inactive_user_raises():
    auth = AuthService(InMemoryUsers([_user(is_active=False)]))

    with pytest.raises(AuthenticationError):
        auth.authenticate("admin", "right")
    with pytest.raises(AuthenticationError):
        auth.authenticate("nobody", "right")


def test_auth_placeholder_hash_never_matches():
    auth = AuthService(InMemoryUsers([_user(password_hash="CHANGE_ME")]))

    with pytest.raises(AuthenticationError):
        auth.authenticate("admin", "CHANGE_ME")
