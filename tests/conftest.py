"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, make_url
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db, init_db
from src.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores the signed-up user's details."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email

    @property
    def token(self) -> str:
        return self["x-auth"]


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    test_url = make_url(os.getenv("DATABASE_URL").replace("/todo_api", "/todo_api_test"))
    # Pin the driver to the declared psycopg2 package
    if test_url.drivername == "postgresql":
        test_url = test_url.set(drivername="postgresql+psycopg2")
    SQLALCHEMY_DATABASE_URL = test_url.render_as_string(hide_password=False)
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "testpass123"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    init_db(bind=engine)
    yield


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
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup(client, email: str, password: str = TEST_PASSWORD) -> AuthHeaders:
    response = client.post("/users", json={"email": email, "password": password})
    assert response.status_code == 200
    return AuthHeaders(
        {"x-auth": response.headers["x-auth"]},
        user_id=response.json()["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Sign up a user and return its x-auth header with user info."""
    return signup(client, "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """Sign up a second, unrelated user."""
    return signup(client, "other@example.com")
