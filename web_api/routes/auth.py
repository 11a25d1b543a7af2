"""
Authentication routes for email/password sessions.

Endpoints:
- POST /auth/register - Self-register as a student and start a session
- POST /auth/login - Check credentials and start a session
- POST /auth/logout - Clear session
- GET /auth/me - Get current principal
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from core.auth import authenticate_user, register_user
from core.authz import Principal
from web_api.auth import (
    clear_session_cookie,
    create_jwt,
    get_current_principal,
    set_session_cookie,
)
from web_api.rate_limit import login_limiter, register_limiter

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    college: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


@router.post("/register", status_code=201)
async def register(
    body: RegisterRequest, request: Request, response: Response
) -> dict[str, Any]:
    register_limiter.check(request)
    user = await register_user(
        name=body.name,
        email=body.email,
        password=body.password,
        college=body.college,
    )
    set_session_cookie(response, create_jwt(user))
    return {"user": user}


@router.post("/login")
async def login(
    body: LoginRequest, request: Request, response: Response
) -> dict[str, Any]:
    login_limiter.check(request)
    user = await authenticate_user(body.email, body.password)
    set_session_cookie(response, create_jwt(user))
    return {"user": user}


@router.post("/logout")
async def logout(response: Response) -> dict[str, str]:
    clear_session_cookie(response)
    return {"status": "logged_out"}


@router.get("/me")
async def get_me(
    principal: Principal = Depends(get_current_principal),
) -> dict[str, Any]:
    return {
        "id": principal.id,
        "role": principal.role.value,
        "college": principal.college,
    }
