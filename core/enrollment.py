"""
Enrollment and progress tracking.

An enrollment and its progress record are created together in one
transaction and never exist apart. Progress is only visible to the student
who owns the enrollment; anyone else gets NotFoundError, the same as for a
missing record.
"""

import logging
import math
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError

from .authz import Principal, require_authenticated
from .database import get_connection, get_transaction, is_unique_violation
from .enums import EnrollmentStatus
from .errors import ConflictError, NotFoundError, ValidationError
from .queries import courses as course_queries
from .queries import enrollments as enrollment_queries
from .queries import progress as progress_queries
from .validation import parse_int, parse_positive_int

logger = logging.getLogger(__name__)

# Fixed lesson count for new progress records, independent of the course's
# actual lessons (see DESIGN.md, open questions)
DEFAULT_TOTAL_LESSONS = 10

PROGRESS_UPDATE_FIELDS = ("completion_percentage", "completed_lessons", "total_lessons")


def completed_lessons_for(completion_percentage: int, total_lessons: int) -> int:
    """Lessons completed at a given percentage: floor(pct / 100 * total)."""
    return math.floor(completion_percentage * total_lessons / 100)


async def enroll(principal: Principal | None, course_id: int) -> dict[str, Any]:
    """
    Enroll the caller in a course.

    Returns:
        The enrollment with its course and its fresh progress record

    Raises:
        Unauthorized: no principal
        NotFoundError: course does not exist
        ConflictError: caller is already enrolled in the course
    """
    principal = require_authenticated(principal)

    async with get_transaction() as conn:
        course = await course_queries.get_course_by_id(conn, course_id)
        if not course:
            raise NotFoundError("Course not found")

        if await enrollment_queries.get_enrollment(conn, principal.id, course_id):
            raise ConflictError("Already enrolled in this course")

        try:
            enrollment = await enrollment_queries.create_enrollment(
                conn, principal.id, course_id, EnrollmentStatus.ACTIVE
            )
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            # A concurrent enroll for the same pair committed first
            raise ConflictError("Already enrolled in this course")

        enrollment["progress"] = await progress_queries.create_progress(
            conn, enrollment["enrollment_id"], DEFAULT_TOTAL_LESSONS
        )

    enrollment["course"] = course
    logger.info("User %s enrolled in course %s", principal.id, course_id)
    return enrollment


async def list_enrollments(principal: Principal | None) -> list[dict[str, Any]]:
    """The caller's enrollments with course and progress, newest first."""
    principal = require_authenticated(principal)
    async with get_connection() as conn:
        return await enrollment_queries.list_enrollments_for_user(conn, principal.id)


async def list_progress(principal: Principal | None) -> list[dict[str, Any]]:
    """The caller's progress records with enrollment and course, latest update first."""
    principal = require_authenticated(principal)
    async with get_connection() as conn:
        return await progress_queries.list_progress_for_user(conn, principal.id)


async def get_progress(principal: Principal | None, progress_id: int) -> dict[str, Any]:
    """
    Get one of the caller's progress records.

    Raises:
        Unauthorized: no principal
        NotFoundError: absent, or owned by someone else
    """
    principal = require_authenticated(principal)
    async with get_connection() as conn:
        records = await progress_queries.list_progress_for_user(
            conn, principal.id, progress_id=progress_id
        )
    if not records:
        raise NotFoundError("Progress not found")
    return records[0]


def _progress_updates(
    current: Mapping[str, Any],
    fields: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Resolve a partial progress update into consistent column values.

    completed_lessons is always derived from the resulting percentage and
    total and is what gets stored. A caller-supplied value must equal the
    derived one, or be one below it: web clients compute
    floor(pct / 100 * total) in floating point, which lands just under the
    whole number for pairs such as 57% of 100.
    """
    percentage = current["completion_percentage"]
    total = current["total_lessons"]

    if "completion_percentage" in fields:
        percentage = parse_int(fields["completion_percentage"])
        if percentage is None or not 0 <= percentage <= 100:
            raise ValidationError("completion_percentage must be between 0 and 100")
    if "total_lessons" in fields:
        total = parse_positive_int(fields["total_lessons"], "total_lessons")

    completed = completed_lessons_for(percentage, total)
    if "completed_lessons" in fields:
        supplied = parse_int(fields["completed_lessons"])
        if supplied is None or not completed - 1 <= supplied <= completed:
            raise ValidationError(
                f"completed_lessons must be {completed} for "
                f"{percentage}% of {total} lessons"
            )

    return {
        "completion_percentage": percentage,
        "completed_lessons": completed,
        "total_lessons": total,
    }


async def update_progress(
    principal: Principal | None,
    progress_id: int,
    fields: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Update the caller's progress record and stamp last_accessed_date.

    Only completion_percentage, completed_lessons and total_lessons are
    read from fields, each only when present.

    Raises:
        Unauthorized: no principal
        NotFoundError: absent, or owned by someone else (nothing is written)
        ValidationError: values out of range or inconsistent
    """
    principal = require_authenticated(principal)
    fields = {key: value for key, value in fields.items() if key in PROGRESS_UPDATE_FIELDS}

    async with get_transaction() as conn:
        current = await progress_queries.get_owned_progress(conn, progress_id, principal.id)
        if not current:
            logger.warning(
                "Progress %s not found for user %s", progress_id, principal.id
            )
            raise NotFoundError("Progress not found")

        updates = _progress_updates(current, fields)
        await progress_queries.update_progress(conn, progress_id, **updates)
        records = await progress_queries.list_progress_for_user(
            conn, principal.id, progress_id=progress_id
        )

    return records[0]
