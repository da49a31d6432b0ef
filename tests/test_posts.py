"""Tests for post endpoints and author-only editing."""

import pytest

from src.models.post import Post
from src.models.user import User

POSTS_URL = "/api/v1/posts"


@pytest.fixture
def post(client, auth_headers):
    """Create a post owned by the auth_headers user."""
    response = client.post(
        POSTS_URL,
        headers=auth_headers,
        json={"title": "First post", "content": "Hello from the blog"},
    )
    assert response.status_code == 201
    return response.json()["data"]


def test_create_post(client, auth_headers):
    """Test creating a post records the current user as author."""
    response = client.post(
        POSTS_URL,
        headers=auth_headers,
        json={"title": "Shopping for words", "content": "Some content"},
    )
    assert response.status_code == 201

    body = response.json()
    assert body["status"] == 201
    assert body["message"] == "Post created successfully"
    assert body["data"]["title"] == "Shopping for words"
    assert body["data"]["author_id"] == auth_headers.user_id
    assert body["data"]["author"] == {"id": auth_headers.user_id, "name": "Test User"}
    assert body["data"]["published"] is True


def test_create_post_requires_auth(client):
    """Test creating a post without a token is rejected."""
    response = client.post(POSTS_URL, json={"title": "Anonymous", "content": "No"})
    assert response.status_code == 401
    assert response.json()["message"] == "Unauthenticated"


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({}, "Title is required"),
        ({"title": "   ", "content": "x"}, "Title is required"),
        ({"title": "Title"}, "Content is required"),
    ],
)
def test_create_post_validation(client, auth_headers, payload, message):
    """Test post input validation."""
    response = client.post(POSTS_URL, headers=auth_headers, json=payload)
    assert response.status_code == 422
    assert response.json()["message"] == message


def test_get_posts_is_public(client, post):
    """Test listing posts needs no token."""
    response = client.get(POSTS_URL)
    assert response.status_code == 200

    data = response.json()["data"]
    assert [p["id"] for p in data] == [post["id"]]
    assert data[0]["comments"] == []


def test_get_posts_search(client, auth_headers, create_user):
    """Test search matches title, content and author name case-insensitively."""
    client.post(POSTS_URL, headers=auth_headers, json={"title": "Python tips", "content": "a"})
    client.post(POSTS_URL, headers=auth_headers, json={"title": "Other", "content": "PYTHON!"})
    writer = create_user("writer@example.com", name="Margaret")
    client.post(POSTS_URL, headers=writer, json={"title": "Unrelated", "content": "b"})

    by_text = client.get(POSTS_URL, params={"search": "python"}).json()["data"]
    assert {p["title"] for p in by_text} == {"Python tips", "Other"}

    by_author = client.get(POSTS_URL, params={"search": "marg"}).json()["data"]
    assert [p["title"] for p in by_author] == ["Unrelated"]


def test_get_posts_search_matches_wildcards_literally(client, auth_headers):
    """Test % and _ in a search are plain characters, not LIKE wildcards."""
    client.post(POSTS_URL, headers=auth_headers, json={"title": "plain", "content": "a"})
    client.post(POSTS_URL, headers=auth_headers, json={"title": "snake_case", "content": "b"})

    underscore = client.get(POSTS_URL, params={"search": "_"}).json()["data"]
    assert [p["title"] for p in underscore] == ["snake_case"]

    percent = client.get(POSTS_URL, params={"search": "%"}).json()["data"]
    assert percent == []


def test_create_post_for_deleted_user(client, db, create_user):
    """Test a valid token whose user no longer exists cannot create posts."""
    ghost = create_user("ghost@example.com", name="Ghost")
    db.delete(db.get(User, ghost.user_id))
    db.commit()

    response = client.post(
        POSTS_URL,
        headers=ghost,
        json={"title": "Orphan", "content": "Nobody wrote this"},
    )
    assert response.status_code == 401
    assert response.json() == {"status": 401, "message": "Unauthenticated"}
    assert db.query(Post).count() == 0


def test_get_posts_sort_order(client, auth_headers):
    """Test newest-first ordering."""
    for title in ["one", "two", "three"]:
        client.post(POSTS_URL, headers=auth_headers, json={"title": title, "content": "c"})

    response = client.get(POSTS_URL, params={"sort_field": "created_at", "sort_order": "desc"})
    assert [p["title"] for p in response.json()["data"]] == ["three", "two", "one"]


def test_get_posts_rejects_unknown_sort_field(client):
    """Test only known columns can be sorted on."""
    response = client.get(POSTS_URL, params={"sort_field": "password_hash"})
    assert response.status_code == 422


def test_get_post(client, post):
    """Test fetching a single post."""
    response = client.get(f"{POSTS_URL}/{post['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "First post"


def test_get_missing_post(client):
    """Test fetching a post that does not exist."""
    response = client.get(f"{POSTS_URL}/9999")
    assert response.status_code == 404
    assert response.json() == {"status": 404, "message": "Post not found"}


def test_update_own_post(client, auth_headers, post):
    """Test the author can update their post."""
    response = client.put(
        f"{POSTS_URL}/{post['id']}",
        headers=auth_headers,
        json={"title": "Edited title", "published": False},
    )
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["title"] == "Edited title"
    assert data["content"] == "Hello from the blog"
    assert data["published"] is False
    assert data["author_id"] == auth_headers.user_id


def test_update_post_rejects_blank_title(client, auth_headers, post):
    """Test a provided title must not be blank."""
    response = client.put(f"{POSTS_URL}/{post['id']}", headers=auth_headers, json={"title": " "})
    assert response.status_code == 422
    assert response.json()["message"] == "Title must not be empty"


def test_update_someone_elses_post(client, other_auth_headers, post):
    """Test a non-author is forbidden from updating and nothing changes."""
    response = client.put(
        f"{POSTS_URL}/{post['id']}",
        headers=other_auth_headers,
        json={"title": "Hijacked"},
    )
    assert response.status_code == 403
    assert response.json() == {
        "status": 403,
        "message": "Forbidden: You can only update your own posts",
    }

    assert client.get(f"{POSTS_URL}/{post['id']}").json()["data"]["title"] == "First post"


def test_update_cannot_reassign_author(client, auth_headers, other_auth_headers, post):
    """Test author_id in an update body is ignored."""
    response = client.put(
        f"{POSTS_URL}/{post['id']}",
        headers=auth_headers,
        json={"title": "Still mine", "author_id": other_auth_headers.user_id},
    )
    assert response.status_code == 200
    assert response.json()["data"]["author_id"] == auth_headers.user_id


def test_update_missing_post(client, auth_headers):
    """Test updating a post that does not exist."""
    response = client.put(f"{POSTS_URL}/9999", headers=auth_headers, json={"title": "x"})
    assert response.status_code == 404


def test_update_post_requires_auth(client, post):
    """Test authentication is checked before ownership."""
    response = client.put(
        f"{POSTS_URL}/{post['id']}",
        headers={"Authorization": "Bearer forged.token.value"},
        json={"title": "x"},
    )
    assert response.status_code == 401


def test_delete_someone_elses_post(client, other_auth_headers, post):
    """Test a non-author is forbidden from deleting."""
    response = client.delete(f"{POSTS_URL}/{post['id']}", headers=other_auth_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Forbidden: You can only delete your own posts"

    assert client.get(f"{POSTS_URL}/{post['id']}").status_code == 200


def test_delete_own_post(client, auth_headers, post):
    """Test the author can delete their post."""
    response = client.delete(f"{POSTS_URL}/{post['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"status": 200, "message": "Post deleted successfully"}

    assert client.get(f"{POSTS_URL}/{post['id']}").status_code == 404
