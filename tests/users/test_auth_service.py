from __future__ import annotations

import pytest

from salary_system.core.enums import Role
from salary_system.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from salary_system.users.service import AuthService
from salary_system.users.tokens import TokenService


@pytest.fixture
def tokens():
    return TokenService("unit-test-secret")


@pytest.fixture
def auth(users_repo, tokens):
    return AuthService(users_repo, tokens, password_hash_method="pbkdf2:sha256:1000")


def test_register_defaults_role_to_employee(auth, users_repo):
    user_id = auth.register(name="A", email="a@x.com", password="secret123")

    user = users_repo.get_by_id(user_id)
    assert user.role == Role.EMPLOYEE
    assert user.password_hash != "secret123"


def test_register_accepts_admin_role(auth, users_repo):
    user_id = auth.register(name="Boss", email="boss@x.com", password="secret123", role="admin")
    assert users_repo.get_by_id(user_id).role == Role.ADMIN


def test_register_rejects_unknown_role(auth):
    with pytest.raises(ValidationError):
        auth.register(name="A", email="a@x.com", password="secret123", role="manager")


@pytest.mark.parametrize(
    "name,email,password",
    [("", "a@x.com", "pw"), ("A", "", "pw"), ("A", "a@x.com", ""), (None, "a@x.com", "pw"), ("  ", "a@x.com", "pw")],
)
def test_register_requires_all_fields(auth, name, email, password):
    with pytest.raises(ValidationError):
        auth.register(name=name, email=email, password=password)


def test_register_same_email_twice_conflicts(auth):
    auth.register(name="A", email="a@x.com", password="secret123")

    with pytest.raises(ConflictError):
        auth.register(name="Other", email="a@x.com", password="another")


def test_email_match_is_case_sensitive(auth):
    auth.register(name="A", email="a@x.com", password="secret123")

    # A different case is a different account
    auth.register(name="A2", email="A@x.com", password="secret123")

    with pytest.raises(AuthenticationError):
        auth.login(email="A@X.COM", password="secret123")


def test_login_returns_verifiable_token(auth, tokens):
    user_id = auth.register(name="A", email="a@x.com", password="secret123")

    result = auth.login(email="a@x.com", password="secret123")

    claims = tokens.verify(result.token)
    assert result.role == Role.EMPLOYEE
    assert result.user_id == user_id
    assert claims.user_id == user_id
    assert claims.email == "a@x.com"
    assert claims.role == Role.EMPLOYEE


def test_wrong_password_and_unknown_email_fail_identically(auth):
    auth.register(name="A", email="a@x.com", password="secret123")

    with pytest.raises(AuthenticationError) as wrong_pw:
        auth.login(email="a@x.com", password="nope")
    with pytest.raises(AuthenticationError) as unknown:
        auth.login(email="ghost@x.com", password="secret123")

    assert type(wrong_pw.value) is type(unknown.value)
    assert str(wrong_pw.value) == str(unknown.value) == "Invalid credentials"


def test_login_with_mismatched_role_is_refused(auth):
    auth.register(name="A", email="a@x.com", password="secret123")

    with pytest.raises(AuthorizationError, match="User is not a admin"):
        auth.login(email="a@x.com", password="secret123", role="admin")


def test_login_with_matching_role(auth):
    auth.register(name="A", email="a@x.com", password="secret123", role="admin")
    assert auth.login(email="a@x.com", password="secret123", role="admin").role == Role.ADMIN


def test_login_requires_email_and_password(auth):
    with pytest.raises(ValidationError):
        auth.login(email="", password="x")


def test_corrupted_hash_is_treated_as_bad_password(auth, users_repo):
    users_repo.create_user(name="Legacy", email="old@x.com", password_hash="CHANGE_ME", role=Role.EMPLOYEE)

    with pytest.raises(AuthenticationError):
        auth.login(email="old@x.com", password="whatever")


def test_profile_is_sanitized(auth):
    auth.register(name="A", email="a@x.com", password="secret123")
    token = auth.login(email="a@x.com", password="secret123").token

    profile = auth.get_profile(auth.authenticate_token(token)).to_profile()

    assert profile["email"] == "a@x.com"
    assert profile["name"] == "A"
    assert "password" not in profile
    assert "password_hash" not in profile


def test_profile_of_deleted_user_is_not_found(auth, users_repo):
    user_id = auth.register(name="A", email="a@x.com", password="secret123")
    claims = auth.authenticate_token(auth.login(email="a@x.com", password="secret123").token)
    users_repo.remove(user_id)

    with pytest.raises(NotFoundError):
        auth.get_profile(claims)
