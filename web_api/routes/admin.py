"""
Admin roster routes.

All endpoints require an admin principal; students are scoped to the
admin's college.

Endpoints:
- GET /api/admin/students - List students of the admin's college
- POST /api/admin/students - Create a student account
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from core.authz import Principal
from core.roster import create_student, list_students
from web_api.auth import get_principal

router = APIRouter(prefix="/api/admin", tags=["admin"])


class CreateStudentRequest(BaseModel):
    """Request body for creating a student."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    college: str | None = None


@router.get("/students")
async def list_students_endpoint(
    principal: Principal | None = Depends(get_principal),
) -> list[dict[str, Any]]:
    return await list_students(principal)


@router.post("/students", status_code=201)
async def create_student_endpoint(
    body: CreateStudentRequest,
    principal: Principal | None = Depends(get_principal),
) -> dict[str, Any]:
    """Create a student. The response never includes the password hash."""
    user = await create_student(
        principal,
        name=body.name,
        email=body.email,
        password=body.password,
        college=body.college,
    )
    return {"message": "Student created successfully", "user": user}
