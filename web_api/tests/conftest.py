# web_api/tests/conftest.py
"""Pytest fixtures for web API tests."""

import pytest
from fastapi.testclient import TestClient

from core.enums import UserRole
from web_api.auth import SESSION_COOKIE, create_jwt
from web_api.rate_limit import login_limiter, register_limiter


@pytest.fixture(autouse=True)
def reset_rate_limiters():
    """Rate limiter state is module-level; start every test with a clean slate."""
    login_limiter.reset()
    register_limiter.reset()
    yield
    login_limiter.reset()
    register_limiter.reset()


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    from main import app

    return TestClient(app, raise_server_exceptions=False)


def session_token(user_id=1, role=UserRole.STUDENT, college="MIT") -> str:
    """Signed session token for a user that need not exist in the database."""
    return create_jwt({"user_id": user_id, "role": role, "college": college})


@pytest.fixture
def as_admin(client):
    client.cookies.set(SESSION_COOKIE, session_token(1, UserRole.ADMIN))
    return client


@pytest.fixture
def as_student(client):
    client.cookies.set(SESSION_COOKIE, session_token(2, UserRole.STUDENT))
    return client
