"""Comment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CommentCreate(BaseModel):
    """Create a comment on a post."""

    content: str | None = None


class CommentUpdate(BaseModel):
    """Update a comment."""

    content: str | None = None


class AuthorSummary(BaseModel):
    """Author shown alongside posts and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CommentResponse(BaseModel):
    """Comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    post_id: int
    author_id: int
    author: AuthorSummary
    created_at: datetime
    updated_at: datetime
