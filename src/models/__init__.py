"""SQLAlchemy models."""

from src.models.comment import Comment
from src.models.post import Post
from src.models.user import User

__all__ = [
    "User",
    "Post",
    "Comment",
]
