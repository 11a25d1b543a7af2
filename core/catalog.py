"""
Course catalog: courses and their lessons.

All logic for catalog changes lives here. API endpoints delegate to this module.
Reads need no principal; every write requires an ADMIN.
"""

import logging
from typing import Any, Mapping

from .authz import Principal, require_admin
from .database import get_connection, get_transaction
from .errors import NotFoundError, ValidationError
from .queries import courses as course_queries
from .validation import (
    is_blank,
    optional_text,
    parse_int,
    parse_positive_int,
    parse_price,
    require_text,
)

logger = logging.getLogger(__name__)

DEFAULT_LESSON_DURATION = 30  # minutes
DEFAULT_LESSON_ORDER = 0

# Keys update_lesson understands; anything else in the payload is ignored
LESSON_UPDATE_FIELDS = (
    "title",
    "description",
    "content",
    "video_url",
    "duration",
    "order",
    "is_active",
)


# --- Courses ---


async def list_courses() -> list[dict[str, Any]]:
    """Active courses, newest first."""
    async with get_connection() as conn:
        return await course_queries.list_active_courses(conn)


async def get_course(course_id: int) -> dict[str, Any]:
    """
    Get one course with its active lessons.

    Raises:
        NotFoundError: no such course
    """
    async with get_connection() as conn:
        course = await course_queries.get_course_by_id(conn, course_id)
        if not course:
            raise NotFoundError("Course not found")
        course["lessons"] = await course_queries.list_active_lessons(conn, course_id)
    return course


async def create_course(
    principal: Principal | None,
    title: Any,
    description: Any,
    instructor: Any,
    duration: Any,
    price: Any = None,
) -> dict[str, Any]:
    """
    Create a course.

    Price never causes a rejection: absent, unparseable or negative values
    are stored as 0.

    Raises:
        Unauthorized: caller is not an admin
        ValidationError: a required field is missing, or duration is not a
            positive integer
    """
    require_admin(principal)

    values = {
        "title": require_text(title, "title"),
        "description": require_text(description, "description"),
        "instructor": require_text(instructor, "instructor"),
    }
    if is_blank(duration):
        raise ValidationError("duration is required")
    values["duration"] = parse_positive_int(duration, "duration")
    values["price"] = parse_price(price)

    async with get_transaction() as conn:
        course = await course_queries.create_course(conn, **values)

    logger.info("Course %s created by admin %s", course["course_id"], principal.id)
    return course


async def delete_course(principal: Principal | None, course_id: int) -> None:
    """
    Hard-delete a course together with its lessons, enrollments and progress.

    Raises:
        Unauthorized: caller is not an admin
        NotFoundError: no such course
    """
    require_admin(principal)

    async with get_transaction() as conn:
        deleted = await course_queries.delete_course(conn, course_id)

    if not deleted:
        raise NotFoundError("Course not found")
    logger.info("Course %s deleted by admin %s", course_id, principal.id)


# --- Lessons ---


async def list_lessons(course_id: int) -> list[dict[str, Any]]:
    """Active lessons of a course by ascending order."""
    async with get_connection() as conn:
        return await course_queries.list_active_lessons(conn, course_id)


async def get_lesson(lesson_id: int) -> dict[str, Any]:
    """Get a lesson with its course summary. Raises NotFoundError if absent."""
    async with get_connection() as conn:
        lesson = await course_queries.get_lesson_with_course(conn, lesson_id)
    if not lesson:
        raise NotFoundError("Lesson not found")
    return lesson


async def create_lesson(
    principal: Principal | None,
    course_id: int,
    title: Any,
    content: Any,
    description: Any = None,
    video_url: Any = None,
    duration: Any = None,
    order: Any = None,
) -> dict[str, Any]:
    """
    Create a lesson in a course.

    Duration and order fall back to their defaults when absent or
    unparseable (a non-positive duration also falls back).

    Raises:
        Unauthorized: caller is not an admin
        ValidationError: title or content missing
        NotFoundError: course does not exist
    """
    require_admin(principal)

    parsed_duration = parse_int(duration)
    if parsed_duration is None or parsed_duration <= 0:
        parsed_duration = DEFAULT_LESSON_DURATION
    parsed_order = parse_int(order)

    values = {
        "course_id": course_id,
        "title": require_text(title, "title"),
        "content": require_text(content, "content"),
        "description": optional_text(description),
        "video_url": optional_text(video_url),
        "duration": parsed_duration,
        "order": DEFAULT_LESSON_ORDER if parsed_order is None else parsed_order,
        "is_active": True,
    }

    async with get_transaction() as conn:
        if not await course_queries.get_course_by_id(conn, course_id):
            raise NotFoundError("Course not found")
        lesson = await course_queries.create_lesson(conn, **values)

    logger.info("Lesson %s added to course %s", lesson["lesson_id"], course_id)
    return lesson


def _lesson_updates(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Build column updates from the keys explicitly present in fields.

    Absent keys are left untouched; an explicit None or empty string clears
    description and video_url.
    """
    updates: dict[str, Any] = {}

    if "title" in fields:
        updates["title"] = require_text(fields["title"], "title")
    if "content" in fields:
        updates["content"] = require_text(fields["content"], "content")
    if "description" in fields:
        updates["description"] = optional_text(fields["description"])
    if "video_url" in fields:
        updates["video_url"] = optional_text(fields["video_url"])
    if "duration" in fields:
        updates["duration"] = parse_positive_int(fields["duration"], "duration")
    if "order" in fields:
        order = parse_int(fields["order"])
        if order is None:
            raise ValidationError("order must be an integer")
        updates["order"] = order
    if "is_active" in fields:
        if not isinstance(fields["is_active"], bool):
            raise ValidationError("is_active must be a boolean")
        updates["is_active"] = fields["is_active"]

    return updates


async def update_lesson(
    principal: Principal | None,
    lesson_id: int,
    fields: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Apply a partial update to a lesson.

    Raises:
        Unauthorized: caller is not an admin
        ValidationError: a present field has an unusable value
        NotFoundError: no such lesson
    """
    require_admin(principal)
    updates = _lesson_updates(
        {key: value for key, value in fields.items() if key in LESSON_UPDATE_FIELDS}
    )

    async with get_transaction() as conn:
        lesson = await course_queries.update_lesson(conn, lesson_id, **updates)

    if not lesson:
        raise NotFoundError("Lesson not found")
    return lesson


async def delete_lesson(principal: Principal | None, lesson_id: int) -> None:
    """
    Delete a lesson.

    Raises:
        Unauthorized: caller is not an admin
        NotFoundError: no such lesson
    """
    require_admin(principal)

    async with get_transaction() as conn:
        deleted = await course_queries.delete_lesson(conn, lesson_id)

    if not deleted:
        raise NotFoundError("Lesson not found")
    logger.info("Lesson %s deleted by admin %s", lesson_id, principal.id)
