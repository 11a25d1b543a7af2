"""
Enrollment routes.

Endpoints:
- GET /api/enrollments - List the caller's enrollments
- POST /api/enrollments - Enroll the caller in a course
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from core.authz import Principal
from core.enrollment import enroll, list_enrollments
from core.errors import ValidationError
from web_api.auth import get_principal

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"])


class EnrollRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_id: int | None = Field(None, alias="courseId")


@router.get("")
async def list_enrollments_endpoint(
    principal: Principal | None = Depends(get_principal),
) -> list[dict[str, Any]]:
    return await list_enrollments(principal)


@router.post("", status_code=201)
async def enroll_endpoint(
    body: EnrollRequest,
    principal: Principal | None = Depends(get_principal),
) -> dict[str, Any]:
    if body.course_id is None:
        raise ValidationError("Course ID is required")
    return await enroll(principal, body.course_id)
