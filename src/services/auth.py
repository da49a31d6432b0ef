"""Authentication service: password hashing, token signing and the signup/login flows."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import Settings
from src.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    ValidationError,
)
from src.models.user import User
from src.schemas.auth import LoginRequest, SignupRequest, TokenClaims
from src.services.validation import validate_login, validate_signup

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Salted bcrypt hashing with a configurable cost factor."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password."""
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash. Malformed hashes never match."""
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        """Spend the same time as a real verification against no user."""
        self._context.dummy_verify()


class TokenCodec:
    """Signs and verifies identity tokens (HS256 JWT).

    Claims are ``id``, ``name``, ``email`` and ``iat``. They are readable by
    anyone holding the token but cannot be altered without the secret. When
    ``ttl`` is set, tokens older than it are rejected at verification time.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta | None = None):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(settings.jwt_secret, settings.jwt_algorithm, settings.token_ttl)

    def sign(self, user_id: int, name: str, email: str, issued_at: datetime | None = None) -> str:
        """Create a signed token for the given identity."""
        issued_at = issued_at or datetime.now(UTC)
        claims = {
            "id": user_id,
            "name": name,
            "email": email,
            "iat": int(issued_at.timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode a token, raising InvalidTokenError if it cannot be trusted."""
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as e:
            raise InvalidTokenError(f"Token rejected: {e}") from e

        try:
            claims = TokenClaims.model_validate(payload)
        except PydanticValidationError as e:
            raise InvalidTokenError("Token claims are incomplete") from e

        if self._ttl is not None:
            issued_at = datetime.fromtimestamp(claims.iat, UTC)
            if datetime.now(UTC) - issued_at > self._ttl:
                raise InvalidTokenError("Token has expired")

        return claims


@dataclass
class AuthResult:
    """Authenticated user and the token issued for them."""

    user: User
    token: str


class AuthService:
    """Signup and login against the user table."""

    def __init__(
        self,
        db: Session,
        hasher: PasswordHasher,
        codec: TokenCodec,
        settings: Settings,
    ):
        self.db = db
        self.hasher = hasher
        self.codec = codec
        self.settings = settings

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def signup(self, data: SignupRequest) -> AuthResult:
        """Validate, check uniqueness, hash, persist, then issue a token."""
        error = validate_signup(data, self.settings)
        if error:
            raise ValidationError(error.message, field=error.field)

        # Reject duplicates before spending time on hashing
        if self.get_user_by_email(data.email):
            logger.info("Signup rejected: email already registered")
            raise ConflictError()

        user = User(
            name=data.name.strip(),
            email=data.email,
            password_hash=self.hasher.hash(data.password),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # A concurrent signup won the race for this email
            self.db.rollback()
            logger.info("Signup rejected by unique constraint on email")
            raise ConflictError() from e
        self.db.refresh(user)

        logger.info(f"User {user.id} signed up")
        return AuthResult(user=user, token=self._issue_token(user))

    def login(self, data: LoginRequest) -> AuthResult:
        """Check credentials and issue a token.

        Unknown email and wrong password raise the same error so callers
        cannot tell which half of the pair was wrong.
        """
        error = validate_login(data)
        if error:
            raise ValidationError(error.message, field=error.field)

        user = self.get_user_by_email(data.email)
        if user is None:
            self.hasher.dummy_verify()
        if user is None or not self.hasher.verify(data.password, user.password_hash):
            logger.warning("Failed login attempt")
            raise AuthenticationError()

        logger.info(f"User {user.id} logged in")
        return AuthResult(user=user, token=self._issue_token(user))

    def _issue_token(self, user: User) -> str:
        return self.codec.sign(user.id, user.name, user.email)
