"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from src.api.dependencies import CurrentIdentity, get_auth_service
from src.config import Settings, get_settings
from src.schemas.auth import (
    AuthResponse,
    IdentityResponse,
    LoginRequest,
    SignupRequest,
    UserResponse,
)
from src.schemas.common import MessageResponse
from src.services.auth import AuthResult, AuthService

router = APIRouter(prefix="/api/v1", tags=["auth"])


def deliver_token(response: Response, result: AuthResult, settings: Settings) -> str | None:
    """Hand the token over through the configured transport.

    Cookie deployments set an HTTP-only cookie and keep the token out of the
    body; header deployments return it in the body for the client to store.
    """
    if not settings.uses_cookie_transport:
        return result.token

    ttl = settings.token_ttl
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=result.token,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        max_age=int(ttl.total_seconds()) if ttl else None,
    )
    return None


# Handlers are sync so bcrypt work runs in the threadpool, not on the event loop
@router.post("/signup", response_model=AuthResponse)
def signup(
    payload: SignupRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Register a new user."""
    result = auth_service.signup(payload)

    return AuthResponse(
        message="User was created successfully",
        user_info=UserResponse.model_validate(result.user),
        token=deliver_token(response, result, settings),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login with email and password."""
    result = auth_service.login(payload)

    return AuthResponse(
        message="You logged in successfully",
        user_info=UserResponse.model_validate(result.user),
        token=deliver_token(response, result, settings),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Logout. Header clients discard the token; cookie clients get it cleared."""
    if settings.uses_cookie_transport:
        response.delete_cookie(settings.auth_cookie_name, httponly=True, samesite="lax")
    return MessageResponse(message="Logged out successfully")


@router.get("/auth", response_model=IdentityResponse)
async def get_auth(identity: CurrentIdentity):
    """Return the identity carried by the presented token."""
    return IdentityResponse(data=identity)
