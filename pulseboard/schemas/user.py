"""Session user schema and the explicit viewer context."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field

from pulseboard.schemas.base import PulseboardModel

ANONYMOUS_AUTHOR = "Anonymous"
ANONYMOUS_USER_ID = "anonymous"


class User(PulseboardModel):
    """The single active user of a session."""

    id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    email: str
    avatar: str | None = None
    is_logged_in: bool = True


@dataclass(frozen=True, slots=True)
class ViewerContext:
    """Who is looking at the data, passed explicitly to services and analytics."""

    user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user else None

    @property
    def username(self) -> str | None:
        return self.user.username if self.user else None

    @property
    def display_name(self) -> str:
        """Name used when authoring posts and comments."""

        return self.user.username if self.user else ANONYMOUS_AUTHOR


__all__ = ["ANONYMOUS_AUTHOR", "ANONYMOUS_USER_ID", "User", "ViewerContext"]
