"""Progress tracking API routes.

Endpoints:
- GET /api/progress - List the caller's progress records
- GET /api/progress/{progress_id} - Get one of the caller's progress records
- PUT /api/progress/{progress_id} - Update completion for one record
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from core.authz import Principal
from core.enrollment import get_progress, list_progress, update_progress
from web_api.auth import get_principal

router = APIRouter(prefix="/api/progress", tags=["progress"])


class ProgressUpdateRequest(BaseModel):
    """Partial progress update; only fields present in the body are applied."""

    model_config = ConfigDict(populate_by_name=True)

    completion_percentage: int | None = Field(None, alias="completionPercentage")
    completed_lessons: int | None = Field(None, alias="completedLessons")
    total_lessons: int | None = Field(None, alias="totalLessons")


@router.get("")
async def list_progress_endpoint(
    principal: Principal | None = Depends(get_principal),
) -> list[dict[str, Any]]:
    return await list_progress(principal)


@router.get("/{progress_id}")
async def get_progress_endpoint(
    progress_id: int,
    principal: Principal | None = Depends(get_principal),
) -> dict[str, Any]:
    return await get_progress(principal, progress_id)


@router.put("/{progress_id}")
async def update_progress_endpoint(
    progress_id: int,
    body: ProgressUpdateRequest,
    principal: Principal | None = Depends(get_principal),
) -> dict[str, Any]:
    """Update progress. Non-owners get 404, exactly as for a missing record."""
    return await update_progress(
        principal, progress_id, body.model_dump(exclude_unset=True)
    )
