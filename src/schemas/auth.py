"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    """User signup request.

    Fields are optional at the schema level so that the ordered validator in
    ``src.services.validation`` decides which single message the caller sees.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    password: str | None = None
    confirmation_password: str | None = Field(None, alias="confirmationPassword")


class LoginRequest(BaseModel):
    """User login request."""

    email: str | None = Field(None, max_length=255)
    password: str | None = None


class UserResponse(BaseModel):
    """Public user information. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class AuthResponse(BaseModel):
    """Signup/login response with user info and, in header mode, the token."""

    model_config = ConfigDict(populate_by_name=True)

    status: int = 200
    message: str
    user_info: UserResponse = Field(..., alias="userInfo")
    token: str | None = None


class TokenClaims(BaseModel):
    """Identity asserted by a signed token."""

    id: int
    name: str
    email: str
    iat: int  # issued at, seconds since epoch


class IdentityResponse(BaseModel):
    """Response for the token introspection endpoint."""

    status: int = 200
    data: TokenClaims
