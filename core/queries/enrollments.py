"""Enrollment queries using SQLAlchemy Core."""

from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncConnection

from ..enums import EnrollmentStatus
from ..tables import courses, enrollments, progress
from .columns import prefixed, unprefix


async def get_enrollment(
    conn: AsyncConnection,
    user_id: int,
    course_id: int,
) -> dict[str, Any] | None:
    """Get the enrollment for a (user, course) pair, if any."""
    result = await conn.execute(
        select(enrollments).where(
            (enrollments.c.user_id == user_id) & (enrollments.c.course_id == course_id)
        )
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def create_enrollment(
    conn: AsyncConnection,
    user_id: int,
    course_id: int,
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE,
) -> dict[str, Any]:
    """
    Insert an enrollment and return it.

    Raises IntegrityError if the pair is already enrolled; the unique
    constraint is the final arbiter between concurrent inserts.
    """
    result = await conn.execute(
        insert(enrollments)
        .values(user_id=user_id, course_id=course_id, status=status)
        .returning(enrollments)
    )
    return dict(result.mappings().first())


async def list_enrollments_for_user(
    conn: AsyncConnection,
    user_id: int,
) -> list[dict[str, Any]]:
    """
    List a user's enrollments, newest first.

    Each enrollment carries the full course record and its progress record.
    """
    result = await conn.execute(
        select(
            *prefixed(enrollments, "e"),
            *prefixed(courses, "c"),
            *prefixed(progress, "p"),
        )
        .join(courses, enrollments.c.course_id == courses.c.course_id)
        .outerjoin(progress, progress.c.enrollment_id == enrollments.c.enrollment_id)
        .where(enrollments.c.user_id == user_id)
        .order_by(
            enrollments.c.enrollment_date.desc(), enrollments.c.enrollment_id.desc()
        )
    )

    rows = []
    for row in result.mappings():
        enrollment = unprefix(row, enrollments, "e")
        enrollment["course"] = unprefix(row, courses, "c")
        enrollment["progress"] = unprefix(row, progress, "p")
        rows.append(enrollment)
    return rows
