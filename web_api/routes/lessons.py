"""
Lesson routes.

Endpoints:
- GET /api/lessons/{lesson_id} - Get a lesson with its course summary
- PUT /api/lessons/{lesson_id} - Partially update a lesson (admin)
- DELETE /api/lessons/{lesson_id} - Delete a lesson (admin)
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from core.authz import Principal
from core.catalog import delete_lesson, get_lesson, update_lesson
from web_api.auth import get_principal

router = APIRouter(prefix="/api/lessons", tags=["lessons"])


class UpdateLessonRequest(BaseModel):
    """
    Partial lesson update.

    Only fields present in the JSON body are applied; an explicit null
    clears description or videoUrl.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    content: str | None = None
    video_url: str | None = Field(None, alias="videoUrl")
    duration: int | str | None = None
    order: int | str | None = None
    is_active: bool | None = Field(None, alias="isActive")


@router.get("/{lesson_id}")
async def get_lesson_endpoint(lesson_id: int) -> dict[str, Any]:
    return await get_lesson(lesson_id)


@router.put("/{lesson_id}")
async def update_lesson_endpoint(
    lesson_id: int,
    body: UpdateLessonRequest,
    principal: Principal | None = Depends(get_principal),
) -> dict[str, Any]:
    return await update_lesson(principal, lesson_id, body.model_dump(exclude_unset=True))


@router.delete("/{lesson_id}")
async def delete_lesson_endpoint(
    lesson_id: int,
    principal: Principal | None = Depends(get_principal),
) -> dict[str, Any]:
    await delete_lesson(principal, lesson_id)
    return {"message": "Lesson deleted successfully"}
