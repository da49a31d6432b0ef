"""FastAPI dependencies for authentication and services."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.exceptions import InvalidTokenError, UnauthenticatedError
from src.models.user import User
from src.schemas.auth import TokenClaims
from src.services.auth import AuthService, PasswordHasher, TokenCodec

logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches our own 401 body
security = HTTPBearer(auto_error=False)


@lru_cache
def _build_hasher(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


def get_password_hasher(
    settings: Annotated[Settings, Depends(get_settings)],
) -> PasswordHasher:
    """Get the password hasher for the configured cost factor."""
    return _build_hasher(settings.bcrypt_rounds)


def get_token_codec(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenCodec:
    """Get a token codec built from the configured secret and TTL."""
    return TokenCodec.from_settings(settings)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, hasher, codec, settings)


def extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> str | None:
    """Read the token from the one transport this deployment uses."""
    if settings.uses_cookie_transport:
        return request.cookies.get(settings.auth_cookie_name) or None
    if credentials is None:
        return None
    return credentials.credentials or None


def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenClaims:
    """Get the identity asserted by the request's token.

    Verification is stateless: the database is never consulted.
    """
    token = extract_token(request, credentials, settings)
    if token is None:
        raise UnauthenticatedError()

    try:
        return codec.verify(token)
    except InvalidTokenError as e:
        logger.info(f"Rejected token: {e}")
        raise UnauthenticatedError() from e


CurrentIdentity = Annotated[TokenClaims, Depends(get_current_identity)]


def get_author(db: Session, identity: TokenClaims) -> User:
    """Load the user a token names. A token whose user row is gone is unauthenticated."""
    user = db.get(User, identity.id)
    if user is None:
        logger.info(f"Token names unknown user {identity.id}")
        raise UnauthenticatedError()
    return user
