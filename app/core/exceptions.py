"""Custom exceptions for the Collab portal application."""


class CollabException(Exception):
    """Base exception for the Collab portal application."""

    pass


class ValidationError(CollabException):
    """Raised when validation fails.

    ``field`` names the offending input so callers can attach the message to
    the right form control.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(CollabException):
    """Raised when a resource is not found or not visible to the caller."""

    pass


class ConflictError(CollabException):
    """Raised when an operation conflicts with the current resource state."""

    pass


class ConfigurationError(CollabException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(CollabException):
    """Raised when authentication fails."""

    pass


class AuthorizationError(CollabException):
    """Raised when an authenticated caller lacks access."""

    pass
