"""
Pytest configuration and fixtures.
Provides test database, client, and common test utilities.
"""

import os

# Settings are read at import time; configure them before the app is imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DISABLE_BOOTSTRAP_USERS", "true")

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from httpx import Response
from sqlmodel import Session, SQLModel, create_engine, select
from sqlmodel.pool import StaticPool

from safevault.db.session import get_session
from safevault.main import app
from safevault.models.user import User, UserRole
from safevault.services.user_service import UserService


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """
    Create a test database session.
    Uses an in-memory SQLite database for fast tests.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with dependency overrides.
    """

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(session: Session) -> User:
    """
    Create a regular account: alice / secret.
    """
    return UserService.register(session, "alice", "secret", "alice@example.com")


@pytest.fixture(name="test_admin")
def test_admin_fixture(session: Session) -> User:
    """
    Create an admin account: root_admin / adminpassword123.
    """
    return UserService.register(
        session, "root_admin", "adminpassword123", "admin@example.com", role=UserRole.ADMIN.value
    )


@pytest.fixture(name="login")
def login_fixture(client: TestClient) -> Callable[[str, str], Response]:
    """
    Post the login form without following the redirect.
    """

    def _login(username: str, password: str) -> Response:
        return client.post(
            "/login",
            data={"username": username, "password": password},
            follow_redirects=False,
        )

    return _login


@pytest.fixture(name="all_rows")
def all_rows_fixture(session: Session) -> Callable[[], list[User]]:
    """
    Read every row of the Users table.
    """

    def _all_rows() -> list[User]:
        return list(session.exec(select(User).order_by(User.id)).all())

    return _all_rows
