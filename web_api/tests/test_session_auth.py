"""Tests for JWT sessions and the /auth routes."""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import jwt
import pytest

from core.authz import Principal
from core.enums import UserRole
from core.errors import ConflictError, Unauthorized
from web_api.auth import (
    JWT_ALGORITHM,
    SESSION_COOKIE,
    create_jwt,
    principal_from_payload,
    verify_jwt,
)

USER = {
    "user_id": 7,
    "name": "Alice",
    "email": "alice@mit.edu",
    "role": UserRole.STUDENT,
    "college": "MIT",
}


class TestJwt:

    def test_round_trip_claims(self):
        payload = verify_jwt(create_jwt(USER))

        assert payload["sub"] == "7"
        assert payload["role"] == "STUDENT"
        assert payload["college"] == "MIT"
        assert principal_from_payload(payload) == Principal(7, UserRole.STUDENT, "MIT")

    def test_tampered_token_rejected(self):
        token = create_jwt(USER)
        assert verify_jwt(token[:-2] + "xx") is None

    def test_expired_token_rejected(self):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = jwt.encode(
            {"sub": "7", "role": "STUDENT", "iat": past, "exp": past},
            os.environ["JWT_SECRET"],
            algorithm=JWT_ALGORITHM,
        )
        assert verify_jwt(token) is None

    @pytest.mark.parametrize(
        "payload",
        [{"role": "STUDENT"}, {"sub": "abc", "role": "STUDENT"}, {"sub": "1", "role": "INSTRUCTOR"}],
    )
    def test_malformed_claims(self, payload):
        assert principal_from_payload(payload) is None


class TestAuthMe:

    def test_no_session_cookie_returns_401(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated"}

    def test_invalid_jwt_returns_401(self, client):
        client.cookies.set(SESSION_COOKIE, "invalid.jwt.token")
        response = client.get("/auth/me")
        assert response.status_code == 401

    def test_valid_session(self, client):
        client.cookies.set(
            SESSION_COOKIE,
            create_jwt({"user_id": 5, "role": UserRole.ADMIN, "college": "Harvard"}),
        )

        response = client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {"id": 5, "role": "ADMIN", "college": "Harvard"}


class TestLoginRegister:

    def test_login_sets_session_cookie(self, client):
        with patch(
            "web_api.routes.auth.authenticate_user", new_callable=AsyncMock
        ) as mock_auth:
            mock_auth.return_value = USER
            response = client.post(
                "/auth/login", json={"email": "alice@mit.edu", "password": "pw"}
            )

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "alice@mit.edu"
        token = response.cookies.get(SESSION_COOKIE)
        assert verify_jwt(token)["sub"] == "7"
        mock_auth.assert_awaited_once_with("alice@mit.edu", "pw")

    def test_bad_credentials(self, client):
        with patch(
            "web_api.routes.auth.authenticate_user",
            new_callable=AsyncMock,
            side_effect=Unauthorized("Invalid credentials"),
        ):
            response = client.post("/auth/login", json={"email": "x", "password": "y"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}
        assert SESSION_COOKIE not in response.cookies

    def test_login_rate_limited(self, client):
        with patch(
            "web_api.routes.auth.authenticate_user",
            new_callable=AsyncMock,
            side_effect=Unauthorized("Invalid credentials"),
        ):
            statuses = [
                client.post("/auth/login", json={"email": "x", "password": "y"}).status_code
                for _ in range(11)
            ]

        assert statuses[:10] == [401] * 10
        assert statuses[10] == 429

    def test_register_creates_student_session(self, client):
        with patch(
            "web_api.routes.auth.register_user", new_callable=AsyncMock
        ) as mock_register:
            mock_register.return_value = USER
            response = client.post(
                "/auth/register",
                json={"name": "Alice", "email": "alice@mit.edu", "password": "pw", "college": "MIT"},
            )

        assert response.status_code == 201
        assert verify_jwt(response.cookies.get(SESSION_COOKIE))["role"] == "STUDENT"

    def test_register_duplicate_email(self, client):
        with patch(
            "web_api.routes.auth.register_user",
            new_callable=AsyncMock,
            side_effect=ConflictError("User with this email already exists"),
        ):
            response = client.post(
                "/auth/register",
                json={"name": "Alice", "email": "alice@mit.edu", "password": "pw"},
            )

        assert response.status_code == 400
        assert response.json() == {"error": "User with this email already exists"}

    def test_logout_clears_cookie(self, client):
        response = client.post("/auth/logout")

        assert response.status_code == 200
        assert SESSION_COOKIE in response.headers.get("set-cookie", "")
