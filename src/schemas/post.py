"""Post schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.comment import AuthorSummary, CommentResponse


class PostCreate(BaseModel):
    """Create a new post."""

    title: str | None = Field(None, max_length=255)
    content: str | None = None
    published: bool = True


class PostUpdate(BaseModel):
    """Update a post. Omitted fields are left unchanged."""

    title: str | None = Field(None, max_length=255)
    content: str | None = None
    published: bool | None = None


class PostResponse(BaseModel):
    """Post response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    published: bool
    author_id: int
    author: AuthorSummary
    created_at: datetime
    updated_at: datetime


class PostDetailResponse(PostResponse):
    """Post response including its comments."""

    comments: list[CommentResponse] = []
