"""User domain errors."""

from __future__ import annotations

from uuid import UUID

from taskhub.domain.errors.base import ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user id does not resolve (HTTP 404)."""

    def __init__(self, user_id: UUID) -> None:
        self.user_id = user_id
        super().__init__("User not found")


class UserAlreadyExistsError(ConflictError):
    """Raised when a username or email is already taken (HTTP 409).

    Attributes:
        username: The username that was requested, if any.
        email: The email that was requested, if any.
    """

    def __init__(self, username: str | None = None, email: str | None = None) -> None:
        self.username = username
        self.email = email
        super().__init__("Username or email already exists")
