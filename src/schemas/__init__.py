"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthResponse,
    IdentityResponse,
    LoginRequest,
    SignupRequest,
    TokenClaims,
    UserResponse,
)
from src.schemas.comment import AuthorSummary, CommentCreate, CommentResponse, CommentUpdate
from src.schemas.common import DataResponse, ErrorResponse, MessageResponse
from src.schemas.post import PostCreate, PostDetailResponse, PostResponse, PostUpdate

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "TokenClaims",
    "IdentityResponse",
    "PostCreate",
    "PostUpdate",
    "PostResponse",
    "PostDetailResponse",
    "AuthorSummary",
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "MessageResponse",
    "DataResponse",
    "ErrorResponse",
]
