"""Base exception classes for the TaskHub domain layer."""


class TaskHubError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling across the application:
    the API layer maps each subclass family to one HTTP status.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
        self.message = message
