"""Error categories for TaskHub.

Each category corresponds to exactly one HTTP status at the API boundary:

- InvalidInputError     -> 400
- AuthenticationError   -> 401
- ForbiddenError        -> 403
- NotFoundError         -> 404
- ConflictError         -> 409

Concrete errors subclass one category; anything that is not a TaskHubError
is treated as unexpected (500).
"""

from taskhub.domain.exceptions import TaskHubError


class InvalidInputError(TaskHubError):
    """Raised when a request carries a malformed or unsupported value."""

    pass


class AuthenticationError(TaskHubError):
    """Raised when the caller's identity cannot be established."""

    pass


class ForbiddenError(TaskHubError):
    """Raised when the authorization policy denies an operation."""

    pass


class NotFoundError(TaskHubError):
    """Raised when an entity id does not resolve."""

    pass


class ConflictError(TaskHubError):
    """Raised when a write would violate a uniqueness invariant."""

    pass
