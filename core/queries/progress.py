"""Queries for enrollment progress records."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import courses, enrollments, progress
from .columns import prefixed, unprefix


async def create_progress(
    conn: AsyncConnection,
    enrollment_id: int,
    total_lessons: int,
) -> dict[str, Any]:
    """Create the initial (empty) progress record for an enrollment."""
    result = await conn.execute(
        insert(progress)
        .values(
            enrollment_id=enrollment_id,
            completion_percentage=0,
            completed_lessons=0,
            total_lessons=total_lessons,
        )
        .returning(progress)
    )
    return dict(result.mappings().first())


async def get_owned_progress(
    conn: AsyncConnection,
    progress_id: int,
    user_id: int,
) -> dict[str, Any] | None:
    """
    Get a progress record only if its enrollment belongs to the user.

    Absent and not-owned are indistinguishable to the caller: both return None.
    """
    result = await conn.execute(
        select(progress)
        .join(enrollments, progress.c.enrollment_id == enrollments.c.enrollment_id)
        .where(
            (progress.c.progress_id == progress_id)
            & (enrollments.c.user_id == user_id)
        )
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def update_progress(
    conn: AsyncConnection,
    progress_id: int,
    **updates: Any,
) -> dict[str, Any] | None:
    """Update a progress record, stamping last_accessed_date and updated_at."""
    now = datetime.now(timezone.utc)
    updates["last_accessed_date"] = now
    updates["updated_at"] = now
    result = await conn.execute(
        update(progress)
        .where(progress.c.progress_id == progress_id)
        .values(**updates)
        .returning(progress)
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def list_progress_for_user(
    conn: AsyncConnection,
    user_id: int,
    progress_id: int | None = None,
) -> list[dict[str, Any]]:
    """
    List a user's progress records, most recently updated first.

    Each record carries its enrollment, and the enrollment its course.
    Pass progress_id to restrict the result to one record.
    """
    query = (
        select(
            *prefixed(progress, "p"),
            *prefixed(enrollments, "e"),
            *prefixed(courses, "c"),
        )
        .join(enrollments, progress.c.enrollment_id == enrollments.c.enrollment_id)
        .join(courses, enrollments.c.course_id == courses.c.course_id)
        .where(enrollments.c.user_id == user_id)
        .order_by(progress.c.updated_at.desc(), progress.c.progress_id.desc())
    )
    if progress_id is not None:
        query = query.where(progress.c.progress_id == progress_id)

    result = await conn.execute(query)
    rows = []
    for row in result.mappings():
        record = unprefix(row, progress, "p")
        record["enrollment"] = unprefix(row, enrollments, "e")
        record["enrollment"]["course"] = unprefix(row, courses, "c")
        rows.append(record)
    return rows
