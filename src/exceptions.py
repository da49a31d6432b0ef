"""Application error taxonomy.

Every error raised on purpose by the services carries the HTTP status it maps
to, so the exception handlers in ``src.main`` can render a ``{status, message}``
body without inspecting error types. Anything that is not an ``AppError``
becomes a generic 500.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that are safe to show to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert the error to the API error body."""
        return {"status": self.status_code, "message": self.message}


class ValidationError(AppError):
    """Request input failed a validation rule."""

    status_code = 422
    default_message = "Invalid input"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field


class ConflictError(AppError):
    """A unique value (the signup email) is already taken."""

    status_code = 422
    default_message = "Email does already exists"


class AuthenticationError(AppError):
    """Login credentials did not match a user."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Incorrect email or password"


class UnauthenticatedError(AppError):
    """No usable token was presented."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated"


class ForbiddenError(AppError):
    """The authenticated identity may not act on the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(AppError):
    """The target resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidTokenError(Exception):
    """Token failed signature, structure or expiry checks.

    Internal to the token codec; callers translate it to ``UnauthenticatedError``
    so codec details never reach the client.
    """
