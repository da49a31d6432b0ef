"""Ownership-based authorization for mutating posts and comments."""

from typing import Protocol, TypeVar

from src.exceptions import ForbiddenError, NotFoundError
from src.schemas.auth import TokenClaims


class Owned(Protocol):
    """Anything recording the id of the user who created it."""

    author_id: int


OwnedT = TypeVar("OwnedT", bound=Owned)


def ensure_owner(resource: OwnedT | None, identity: TokenClaims, kind: str, action: str) -> OwnedT:
    """Return the resource if the identity created it.

    Raises NotFoundError when the resource does not exist and ForbiddenError
    when it belongs to someone else. Runs after authentication, so a valid
    token on its own never grants a mutation.
    """
    if resource is None:
        raise NotFoundError(f"{kind.capitalize()} not found")
    if resource.author_id != identity.id:
        raise ForbiddenError(f"Forbidden: You can only {action} your own {kind}s")
    return resource
