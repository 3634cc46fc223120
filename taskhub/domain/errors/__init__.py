"""Domain errors for TaskHub.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from TaskHubError.
"""

from taskhub.domain.errors.auth import (
    AdminRequiredError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from taskhub.domain.errors.base import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from taskhub.domain.errors.project import (
    ProjectNotFoundError,
    ProjectTitleConflictError,
)
from taskhub.domain.errors.store import DuplicateKeyError
from taskhub.domain.errors.task import (
    InvalidStatusError,
    TaskAccessDeniedError,
    TaskNotFoundError,
)
from taskhub.domain.errors.user import UserAlreadyExistsError, UserNotFoundError

__all__: list[str] = [
    "AdminRequiredError",
    "AuthenticationError",
    "ConflictError",
    "DuplicateKeyError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "InvalidInputError",
    "InvalidStatusError",
    "InvalidTokenError",
    "NotFoundError",
    "ProjectNotFoundError",
    "ProjectTitleConflictError",
    "TaskAccessDeniedError",
    "TaskNotFoundError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
