"""Post API endpoints."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from src.api.dependencies import CurrentIdentity, get_author
from src.database import get_db
from src.exceptions import NotFoundError, ValidationError
from src.models.comment import Comment
from src.models.post import Post
from src.models.user import User
from src.schemas.common import DataResponse, MessageResponse
from src.schemas.post import PostCreate, PostDetailResponse, PostResponse, PostUpdate
from src.services.ownership import ensure_owner
from src.services.validation import validate_post_create, validate_post_update

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])

SORT_COLUMNS = {
    "created_at": Post.created_at,
    "updated_at": Post.updated_at,
}


def _detail_query(db: Session):
    return db.query(Post).options(
        joinedload(Post.author),
        selectinload(Post.comments).joinedload(Comment.author),
    )


def get_post(db: Session, post_id: int) -> Post | None:
    """Get a post with its author and comments loaded."""
    return _detail_query(db).filter(Post.id == post_id).first()


def get_post_or_404(db: Session, post_id: int) -> Post:
    post = get_post(db, post_id)
    if not post:
        raise NotFoundError("Post not found")
    return post


@router.get("", response_model=DataResponse[list[PostDetailResponse]])
def get_posts(
    db: Annotated[Session, Depends(get_db)],
    search: str | None = Query(default=None, max_length=255),
    sort_field: Literal["created_at", "updated_at"] = Query(default="created_at"),
    sort_order: Literal["asc", "desc"] = Query(default="asc"),
):
    """List posts, optionally filtered by title, content or author name."""
    query = _detail_query(db).join(Post.author)

    if search:
        # Wildcard characters in the search are matched literally
        query = query.filter(
            or_(
                Post.title.icontains(search, autoescape=True),
                Post.content.icontains(search, autoescape=True),
                User.name.icontains(search, autoescape=True),
            )
        )

    column = SORT_COLUMNS[sort_field]
    if sort_order == "desc":
        query = query.order_by(column.desc(), Post.id.desc())
    else:
        query = query.order_by(column.asc(), Post.id.asc())

    posts = query.all()
    return DataResponse(data=[PostDetailResponse.model_validate(post) for post in posts])


@router.get("/{post_id}", response_model=DataResponse[PostDetailResponse])
def get_post_by_id(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single post with its comments."""
    post = get_post_or_404(db, post_id)
    return DataResponse(data=PostDetailResponse.model_validate(post))


@router.post(
    "",
    response_model=DataResponse[PostResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_post(
    post_data: PostCreate,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a post owned by the current user."""
    error = validate_post_create(post_data)
    if error:
        raise ValidationError(error.message, field=error.field)

    author = get_author(db, identity)

    post = Post(
        title=post_data.title.strip(),
        content=post_data.content,
        published=post_data.published,
        author_id=author.id,
    )
    db.add(post)
    db.commit()
    db.refresh(post)

    return DataResponse(
        status=status.HTTP_201_CREATED,
        message="Post created successfully",
        data=PostResponse.model_validate(post),
    )


@router.put("/{post_id}", response_model=DataResponse[PostResponse])
def update_post(
    post_id: int,
    post_data: PostUpdate,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a post (author only)."""
    post = ensure_owner(get_post(db, post_id), identity, "post", "update")

    error = validate_post_update(post_data)
    if error:
        raise ValidationError(error.message, field=error.field)

    update_data = post_data.model_dump(exclude_unset=True, exclude_none=True)
    if "title" in update_data:
        update_data["title"] = update_data["title"].strip()
    for field, value in update_data.items():
        setattr(post, field, value)

    db.commit()
    db.refresh(post)

    return DataResponse(
        message="Post updated successfully",
        data=PostResponse.model_validate(post),
    )


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a post and its comments (author only)."""
    post = ensure_owner(get_post(db, post_id), identity, "post", "delete")

    db.delete(post)
    db.commit()

    return MessageResponse(message="Post deleted successfully")
