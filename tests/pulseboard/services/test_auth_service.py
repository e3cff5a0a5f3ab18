"""Tests for simulated authentication and its form validation."""

from __future__ import annotations

import pytest

from pulseboard.errors import ValidationFailedError
from pulseboard.services.auth import AuthService, validate_credentials
from pulseboard.store.store import Store
from tests.pulseboard.support.doubles import Counter


@pytest.fixture
def auth(store: Store, ids: Counter) -> AuthService:
    return AuthService(store, id_factory=ids)


def test_login_sets_user_with_default_email(auth: AuthService, store: Store) -> None:
    user = auth.login("alice", "secret")

    assert user.username == "alice"
    assert user.email == "alice@example.com"
    assert user.is_logged_in is True
    assert store.state.user == user
    assert auth.current_user == user


def test_login_trims_username_and_keeps_given_email(auth: AuthService) -> None:
    user = auth.login("  alice ", "secret", email="a@b.io")

    assert user.username == "alice"
    assert user.email == "a@b.io"


@pytest.mark.parametrize(
    "username,password,field",
    [("", "secret", "username"), ("   ", "secret", "username"), ("alice", "", "password")],
)
def test_login_rejects_missing_fields(
    auth: AuthService, store: Store, username: str, password: str, field: str
) -> None:
    with pytest.raises(ValidationFailedError) as excinfo:
        auth.login(username, password)

    assert field in excinfo.value.errors
    assert store.state.user is None


def test_signup_validates_email_and_confirmation() -> None:
    errors = validate_credentials(
        username="bob",
        password="one",
        email="not-an-email",
        confirm_password="two",
        signup=True,
    )

    assert errors == {
        "email": "Email is invalid",
        "confirm_password": "Passwords do not match",
    }


def test_signup_requires_email() -> None:
    errors = validate_credentials(
        username="bob", password="pw", email=" ", confirm_password="pw", signup=True
    )

    assert errors == {"email": "Email is required"}


def test_signup_signs_in(auth: AuthService, store: Store) -> None:
    user = auth.signup("bob", "bob@example.org", "pw", "pw")

    assert store.state.user == user
    assert user.email == "bob@example.org"


def test_signup_failure_message_lists_fields(auth: AuthService) -> None:
    with pytest.raises(ValidationFailedError, match="confirm_password"):
        auth.signup("bob", "bob@example.org", "pw", "other")


def test_logout_clears_user(auth: AuthService, store: Store) -> None:
    auth.login("alice", "secret")

    auth.logout()

    assert store.state.user is None
