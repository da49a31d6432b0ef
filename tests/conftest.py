"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_password_hasher
from src.database import Base, build_engine, get_db
from src.main import app
from src.services.auth import PasswordHasher

DEFAULT_PASSWORD = "testpass123"

# Minimum bcrypt cost keeps the suite fast; production uses the configured rounds
fast_hasher = PasswordHasher(rounds=4)


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/blog", "/blog_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database and hasher overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: fast_hasher
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup_user(client, email: str, name: str = "Test User", password: str = DEFAULT_PASSWORD):
    """Sign up a user and return auth headers carrying their token."""
    response = client.post(
        "/api/v1/signup",
        json={
            "name": name,
            "email": email,
            "password": password,
            "confirmationPassword": password,
        },
    )
    assert response.status_code == 200, response.json()
    data = response.json()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["userInfo"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return signup_user(client, "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """Create a second user who owns nothing the first user creates."""
    return signup_user(client, "other@example.com", name="Other User")


@pytest.fixture
def create_user(client):
    """Factory fixture for signing up additional users."""

    def _create(email: str, name: str = "Test User", password: str = DEFAULT_PASSWORD):
        return signup_user(client, email, name=name, password=password)

    return _create
