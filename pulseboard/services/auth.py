"""Simulated authentication.

There is no credential store: any non-empty username/password pair signs in.
The checks below only mirror the form validation of the sign-in screen.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from pulseboard.errors import ValidationFailedError
from pulseboard.schemas.user import User
from pulseboard.store.actions import Logout, SetUser
from pulseboard.store.store import Store
from pulseboard.utils.ids import TimeBasedIdFactory
from pulseboard.utils.time import Clock, utcnow

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


def validate_credentials(
    *,
    username: str,
    password: str,
    email: str | None = None,
    confirm_password: str | None = None,
    signup: bool = False,
) -> dict[str, str]:
    """Return field -> message errors; an empty mapping means the form is valid."""

    errors: dict[str, str] = {}
    if not username.strip():
        errors["username"] = "Username is required"

    if signup:
        if not (email or "").strip():
            errors["email"] = "Email is required"
        elif not _EMAIL_RE.search(email or ""):
            errors["email"] = "Email is invalid"

    if not password:
        errors["password"] = "Password is required"

    if signup and password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"

    return errors


class AuthService:
    """Create and clear the session user."""

    def __init__(
        self,
        store: Store,
        *,
        clock: Clock = utcnow,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._new_id = id_factory or TimeBasedIdFactory(clock)

    @property
    def current_user(self) -> User | None:
        return self._store.state.user

    def login(self, username: str, password: str, *, email: str | None = None) -> User:
        errors = validate_credentials(username=username, password=password)
        if errors:
            raise ValidationFailedError(errors)
        return self._start_session(username.strip(), email)

    def signup(
        self,
        username: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> User:
        errors = validate_credentials(
            username=username,
            password=password,
            email=email,
            confirm_password=confirm_password,
            signup=True,
        )
        if errors:
            raise ValidationFailedError(errors)
        return self._start_session(username.strip(), email.strip())

    def logout(self) -> None:
        user = self.current_user
        self._store.dispatch(Logout())
        if user is not None:
            logger.info("Signed out %s", user.username)

    def _start_session(self, username: str, email: str | None) -> User:
        user = User(
            id=self._new_id(),
            username=username,
            email=email or f"{username}@example.com",
            is_logged_in=True,
        )
        self._store.dispatch(SetUser(user=user))
        logger.info("Signed in %s", username)
        return user


__all__ = ["AuthService", "validate_credentials"]
