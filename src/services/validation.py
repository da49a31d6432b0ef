"""Ordered request validators.

Each validator checks its rules in a fixed order and returns the first
failure as a ``FieldError`` (or ``None`` when the input is valid). The order
decides which single message a caller sees when several fields are invalid.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from src.config import Settings
from src.schemas.auth import LoginRequest, SignupRequest
from src.schemas.comment import CommentCreate, CommentUpdate
from src.schemas.post import PostCreate, PostUpdate


@dataclass(frozen=True)
class FieldError:
    """First validation failure: the offending field and a client-facing message."""

    field: str
    message: str


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _check_email(email: str | None) -> FieldError | None:
    if _is_blank(email):
        return FieldError("email", "Email is required")
    if not _is_valid_email(email):
        return FieldError("email", "Email must be a valid email")
    return None


def validate_signup(data: SignupRequest, settings: Settings) -> FieldError | None:
    """Validate a signup request."""
    if _is_blank(data.name):
        return FieldError("name", "Name is required")

    error = _check_email(data.email)
    if error:
        return error

    password = data.password
    if not password:
        return FieldError("password", "Password is required")
    if not (password.isascii() and password.isalnum()):
        return FieldError("password", "Password must contain only alphanumeric characters")
    if len(password) < settings.password_min_length:
        return FieldError(
            "password",
            f"Password must be at least {settings.password_min_length} characters long",
        )
    if len(password) > settings.password_max_length:
        return FieldError(
            "password",
            f"Password must not exceed {settings.password_max_length} characters",
        )

    if not data.confirmation_password:
        return FieldError("confirmationPassword", "Confirmation password is required")
    if data.confirmation_password != password:
        return FieldError("confirmationPassword", "Confirmation password must match the password")

    return None


def validate_login(data: LoginRequest) -> FieldError | None:
    """Validate a login request. Password rules are not re-checked at login."""
    error = _check_email(data.email)
    if error:
        return error
    if not data.password:
        return FieldError("password", "Password is required")
    return None


def validate_post_create(data: PostCreate) -> FieldError | None:
    if _is_blank(data.title):
        return FieldError("title", "Title is required")
    if _is_blank(data.content):
        return FieldError("content", "Content is required")
    return None


def validate_post_update(data: PostUpdate) -> FieldError | None:
    # Omitted fields are fine; provided ones must not be blank
    if data.title is not None and _is_blank(data.title):
        return FieldError("title", "Title must not be empty")
    if data.content is not None and _is_blank(data.content):
        return FieldError("content", "Content must not be empty")
    return None


def validate_comment(data: CommentCreate | CommentUpdate) -> FieldError | None:
    if _is_blank(data.content):
        return FieldError("content", "Content is required")
    return None
