"""Course and lesson queries using SQLAlchemy Core."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import courses, lessons

LESSON_SUMMARY_COLUMNS = (
    lessons.c.lesson_id,
    lessons.c.course_id,
    lessons.c.title,
    lessons.c.description,
    lessons.c.duration,
    lessons.c.order,
    lessons.c.created_at,
)


# --- Courses ---


async def list_active_courses(conn: AsyncConnection) -> list[dict[str, Any]]:
    """All active courses, newest first."""
    result = await conn.execute(
        select(courses)
        .where(courses.c.is_active.is_(True))
        .order_by(courses.c.created_at.desc(), courses.c.course_id.desc())
    )
    return [dict(row) for row in result.mappings()]


async def get_course_by_id(
    conn: AsyncConnection,
    course_id: int,
) -> dict[str, Any] | None:
    result = await conn.execute(select(courses).where(courses.c.course_id == course_id))
    row = result.mappings().first()
    return dict(row) if row else None


async def create_course(conn: AsyncConnection, **values: Any) -> dict[str, Any]:
    """Insert a course and return the created record."""
    result = await conn.execute(insert(courses).values(**values).returning(courses))
    return dict(result.mappings().first())


async def delete_course(conn: AsyncConnection, course_id: int) -> bool:
    """Hard-delete a course. Lessons and enrollments cascade. Returns False if absent."""
    result = await conn.execute(
        delete(courses).where(courses.c.course_id == course_id).returning(courses.c.course_id)
    )
    return result.first() is not None


# --- Lessons ---


async def list_active_lessons(
    conn: AsyncConnection,
    course_id: int,
) -> list[dict[str, Any]]:
    """
    Active lessons of a course by ascending order, ties in creation order.

    Rows are summaries; content and video_url come from get_lesson_with_course.
    """
    result = await conn.execute(
        select(*LESSON_SUMMARY_COLUMNS)
        .where((lessons.c.course_id == course_id) & lessons.c.is_active.is_(True))
        .order_by(lessons.c.order.asc(), lessons.c.lesson_id.asc())
    )
    return [dict(row) for row in result.mappings()]


async def get_lesson_with_course(
    conn: AsyncConnection,
    lesson_id: int,
) -> dict[str, Any] | None:
    """Get a lesson with a course summary (id, title, instructor)."""
    result = await conn.execute(
        select(
            lessons,
            courses.c.title.label("course_title"),
            courses.c.instructor.label("course_instructor"),
        )
        .join(courses, lessons.c.course_id == courses.c.course_id)
        .where(lessons.c.lesson_id == lesson_id)
    )
    row = result.mappings().first()
    if not row:
        return None

    lesson = {column.name: row[column.name] for column in lessons.c}
    lesson["course"] = {
        "course_id": row["course_id"],
        "title": row["course_title"],
        "instructor": row["course_instructor"],
    }
    return lesson


async def create_lesson(conn: AsyncConnection, **values: Any) -> dict[str, Any]:
    """Insert a lesson and return the created record."""
    result = await conn.execute(insert(lessons).values(**values).returning(lessons))
    return dict(result.mappings().first())


async def update_lesson(
    conn: AsyncConnection,
    lesson_id: int,
    **updates: Any,
) -> dict[str, Any] | None:
    """Update a lesson by ID and return the updated record, or None if absent."""
    updates["updated_at"] = datetime.now(timezone.utc)
    result = await conn.execute(
        update(lessons)
        .where(lessons.c.lesson_id == lesson_id)
        .values(**updates)
        .returning(lessons)
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def delete_lesson(conn: AsyncConnection, lesson_id: int) -> bool:
    """Delete a lesson. Returns False if it did not exist."""
    result = await conn.execute(
        delete(lessons).where(lessons.c.lesson_id == lesson_id).returning(lessons.c.lesson_id)
    )
    return result.first() is not None
