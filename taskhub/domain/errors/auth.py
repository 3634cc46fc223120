"""Authentication and role errors.

InvalidCredentialsError and InvalidTokenError are deliberately vague in
their messages: the client learns that authentication failed, not which
part of it did.
"""

from __future__ import annotations

from taskhub.domain.errors.base import AuthenticationError, ForbiddenError


class InvalidCredentialsError(AuthenticationError):
    """Raised when a username/password pair does not match (HTTP 401)."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is missing, malformed, expired or orphaned (HTTP 401).

    Attributes:
        reason: Internal reason code for logs, never sent to the client.
    """

    def __init__(self, reason: str = "invalid") -> None:
        self.reason = reason
        super().__init__("Invalid or expired token")


class AdminRequiredError(ForbiddenError):
    """Raised when a non-admin calls an admin-only operation (HTTP 403)."""

    def __init__(self) -> None:
        super().__init__("Access denied. Admin privileges required.")
