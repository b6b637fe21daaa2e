"""Pytest configuration and fixtures."""

import os

# Activate the test profile before the application reads its settings
os.environ["ENVIRONMENT"] = "test"

from collections.abc import Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bookstore.database import Base, get_db  # noqa: E402
from bookstore.infrastructure.common.rate_limiting import limiter  # noqa: E402
from bookstore.main import app  # noqa: E402

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite://"

# One shared connection so every thread sees the same in-memory database
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def reset_rate_limits() -> Generator[None, None, None]:
    """Every test starts with a full request budget."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _login(client: TestClient, username: str, password: str) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    """Bearer header for the built-in ADMIN account."""
    return _login(client, "admin", "admin123")


@pytest.fixture
def user_headers(client: TestClient) -> dict[str, str]:
    """Bearer header for the built-in USER account."""
    return _login(client, "user", "user123")


@pytest.fixture
def create_book(
    client: TestClient, admin_headers: dict[str, str]
) -> Callable[..., dict[str, Any]]:
    """Factory creating a book through the API and returning its JSON."""

    def _create(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": "The Pragmatic Programmer",
            "price": "39.99",
            "published_year": 1999,
            "authors": [{"name": "Andrew Hunt"}, {"name": "David Thomas"}],
            "genres": [{"name": "Software"}],
            "quantity_in_stock": 20,
            "cost_price": "20.00",
        }
        payload.update(overrides)
        response = client.post("/api/books", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
