"""
Course catalog routes.

Endpoints:
- GET /api/courses - List active courses
- POST /api/courses - Create a course (admin)
- GET /api/courses/{course_id} - Get a course with its lessons
- DELETE /api/courses/{course_id} - Delete a course (admin)
- GET /api/courses/{course_id}/lessons - List active lessons
- POST /api/courses/{course_id}/lessons - Create a lesson (admin)
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from core.authz import Principal
from core.catalog import (
    create_course,
    create_lesson,
    delete_course,
    get_course,
    list_courses,
    list_lessons,
)
from web_api.auth import get_principal

router = APIRouter(prefix="/api/courses", tags=["courses"])


class CreateCourseRequest(BaseModel):
    """Request body for creating a course. Values are validated by the catalog."""

    title: str | None = None
    description: str | None = None
    instructor: str | None = None
    duration: int | str | None = None
    price: float | str | None = None


class CreateLessonRequest(BaseModel):
    """Request body for creating a lesson."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    content: str | None = None
    description: str | None = None
    video_url: str | None = Field(None, alias="videoUrl")
    duration: int | str | None = None
    order: int | str | None = None


@router.get("")
async def list_courses_endpoint() -> list[dict[str, Any]]:
    return await list_courses()


@router.post("", status_code=201)
async def create_course_endpoint(
    body: CreateCourseRequest,
    principal: Principal | None = Depends(get_principal),
) -> dict[str, Any]:
    return await create_course(
        principal,
        title=body.title,
        description=body.description,
        instructor=body.instructor,
        duration=body.duration,
        price=body.price,
    )


@router.get("/{course_id}")
async def get_course_endpoint(course_id: int) -> dict[str, Any]:
    return await get_course(course_id)


@router.delete("/{course_id}")
async def delete_course_endpoint(
    course_id: int,
    principal: Principal | None = Depends(get_principal),
) -> dict[str, Any]:
    await delete_course(principal, course_id)
    return {"message": "Course deleted successfully"}


@router.get("/{course_id}/lessons")
async def list_lessons_endpoint(course_id: int) -> list[dict[str, Any]]:
    return await list_lessons(course_id)


@router.post("/{course_id}/lessons", status_code=201)
async def create_lesson_endpoint(
    course_id: int,
    body: CreateLessonRequest,
    principal: Principal | None = Depends(get_principal),
) -> dict[str, Any]:
    return await create_lesson(
        principal,
        course_id,
        title=body.title,
        content=body.content,
        description=body.description,
        video_url=body.video_url,
        duration=body.duration,
        order=body.order,
    )
