"""Tests for the ownership check."""

from types import SimpleNamespace

import pytest

from src.exceptions import ForbiddenError, NotFoundError
from src.schemas.auth import TokenClaims
from src.services.ownership import ensure_owner

IDENTITY = TokenClaims(id=1, name="Basil", email="basil@example.com", iat=0)


class TestEnsureOwner:
    """Tests for ensure_owner."""

    def test_owner_passes(self):
        """Test the resource is returned to its author."""
        resource = SimpleNamespace(author_id=1)
        assert ensure_owner(resource, IDENTITY, "post", "update") is resource

    def test_other_user_forbidden(self):
        """Test a different identity is refused."""
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_owner(SimpleNamespace(author_id=2), IDENTITY, "post", "delete")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Forbidden: You can only delete your own posts"

    def test_missing_resource(self):
        """Test a missing resource is reported as not found before ownership."""
        with pytest.raises(NotFoundError, match="Comment not found"):
            ensure_owner(None, IDENTITY, "comment", "update")
