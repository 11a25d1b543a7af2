"""
JWT session handling for the web API.

This is the identity provider the services trust: it turns the session
cookie into a Principal (id, role, college) or None.

Security measures implemented:
- HS256 signing algorithm with a server-side secret
- Token expiration (24 hours)
- HttpOnly cookies
"""

import os
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import HTTPException, Request, Response

from core.authz import Principal
from core.config import is_production
from core.enums import UserRole

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = 24
SESSION_COOKIE = "session"


def _get_jwt_secret() -> str:
    secret = os.environ.get("JWT_SECRET")
    if not secret:
        raise ValueError("JWT_SECRET environment variable not set")
    return secret


def create_jwt(user: dict) -> str:
    """
    Create a signed JWT token for an authenticated user.

    Args:
        user: User record with user_id, role and college

    Returns:
        Signed JWT token string
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user["user_id"]),
        "role": UserRole(user["role"]).value,
        "college": user.get("college"),
        "iat": now,
        "exp": now + timedelta(hours=JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(payload, _get_jwt_secret(), algorithm=JWT_ALGORITHM)


def verify_jwt(token: str) -> dict | None:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded payload dict if valid, None if invalid
    """
    try:
        return jwt.decode(token, _get_jwt_secret(), algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


def principal_from_payload(payload: dict) -> Principal | None:
    """Build a Principal from JWT claims; None if the claims are malformed."""
    try:
        return Principal(
            id=int(payload["sub"]),
            role=UserRole(payload["role"]),
            college=payload.get("college"),
        )
    except (KeyError, TypeError, ValueError):
        return None


def set_session_cookie(response: Response, token: str) -> None:
    """Set the session cookie with the JWT token."""
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        secure=is_production(),
        samesite="lax",
        max_age=60 * 60 * JWT_EXPIRATION_HOURS,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE)


async def get_principal(request: Request) -> Principal | None:
    """
    FastAPI dependency returning the caller's Principal, or None.

    Services decide whether None is acceptable; they raise Unauthorized
    when it is not.
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        return None

    payload = verify_jwt(token)
    if not payload:
        return None

    return principal_from_payload(payload)


async def get_current_principal(request: Request) -> Principal:
    """
    FastAPI dependency requiring an authenticated caller.

    Raises:
        HTTPException: 401 if not authenticated or invalid token
    """
    principal = await get_principal(request)
    if principal is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return principal
