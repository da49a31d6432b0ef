"""Comment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from src.api.dependencies import CurrentIdentity, get_author
from src.api.posts import get_post_or_404
from src.database import get_db
from src.exceptions import ValidationError
from src.models.comment import Comment
from src.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from src.schemas.common import DataResponse, MessageResponse
from src.services.ownership import ensure_owner
from src.services.validation import validate_comment

router = APIRouter(prefix="/api/v1", tags=["comments"])


def get_comment(db: Session, comment_id: int) -> Comment | None:
    """Get a comment with its author loaded."""
    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.id == comment_id)
        .first()
    )


@router.get("/posts/{post_id}/comments", response_model=DataResponse[list[CommentResponse]])
def get_comments(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get all comments on a post, oldest first."""
    get_post_or_404(db, post_id)

    comments = (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at, Comment.id)
        .all()
    )

    return DataResponse(data=[CommentResponse.model_validate(c) for c in comments])


@router.post(
    "/posts/{post_id}/comments",
    response_model=DataResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    post_id: int,
    comment_data: CommentCreate,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Comment on a post as the current user."""
    get_post_or_404(db, post_id)

    error = validate_comment(comment_data)
    if error:
        raise ValidationError(error.message, field=error.field)

    author = get_author(db, identity)

    comment = Comment(content=comment_data.content, post_id=post_id, author_id=author.id)
    db.add(comment)
    db.commit()
    db.refresh(comment)

    return DataResponse(
        status=status.HTTP_201_CREATED,
        message="Comment created successfully",
        data=CommentResponse.model_validate(comment),
    )


@router.put("/comments/{comment_id}", response_model=DataResponse[CommentResponse])
def update_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Edit a comment (author only)."""
    comment = ensure_owner(get_comment(db, comment_id), identity, "comment", "update")

    error = validate_comment(comment_data)
    if error:
        raise ValidationError(error.message, field=error.field)

    comment.content = comment_data.content
    db.commit()
    db.refresh(comment)

    return DataResponse(
        message="Comment updated successfully",
        data=CommentResponse.model_validate(comment),
    )


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: int,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a comment (author only)."""
    comment = ensure_owner(get_comment(db, comment_id), identity, "comment", "delete")

    db.delete(comment)
    db.commit()

    return MessageResponse(message="Comment deleted successfully")
