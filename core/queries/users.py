"""User-related database queries using SQLAlchemy Core."""

from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncConnection

from ..enums import UserRole
from ..tables import courses, enrollments, users


def public_user(row: dict[str, Any]) -> dict[str, Any]:
    """Copy of a user record without the password hash."""
    return {key: value for key, value in row.items() if key != "password_hash"}


async def get_user_by_email(
    conn: AsyncConnection,
    email: str,
    include_password: bool = False,
) -> dict[str, Any] | None:
    """Get a user by email. The password hash is only included on request."""
    result = await conn.execute(select(users).where(users.c.email == email))
    row = result.mappings().first()
    if not row:
        return None
    return dict(row) if include_password else public_user(dict(row))


async def create_user(
    conn: AsyncConnection,
    name: str,
    email: str,
    password_hash: str,
    role: UserRole,
    college: str | None = None,
) -> dict[str, Any]:
    """Create a new user and return the created record (password hash stripped)."""
    result = await conn.execute(
        insert(users)
        .values(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            college=college,
        )
        .returning(users)
    )
    row = result.mappings().first()
    return public_user(dict(row))


async def list_students_by_college(
    conn: AsyncConnection,
    college: str | None,
) -> list[dict[str, Any]]:
    """
    List students of one college with their enrollments.

    College match is exact; a NULL college only matches NULL.
    Each enrollment carries a course summary (id and title only).
    """
    college_filter = (
        users.c.college.is_(None) if college is None else users.c.college == college
    )
    result = await conn.execute(
        select(
            users.c.user_id,
            users.c.name,
            users.c.email,
            users.c.college,
            users.c.created_at,
            users.c.updated_at,
        )
        .where((users.c.role == UserRole.STUDENT) & college_filter)
        .order_by(users.c.created_at, users.c.user_id)
    )
    students = [dict(row) for row in result.mappings()]
    if not students:
        return []

    by_id = {student["user_id"]: student for student in students}
    for student in students:
        student["enrollments"] = []

    enrollment_result = await conn.execute(
        select(
            enrollments.c.enrollment_id,
            enrollments.c.user_id,
            enrollments.c.enrollment_date,
            enrollments.c.status,
            courses.c.course_id,
            courses.c.title,
        )
        .join(courses, enrollments.c.course_id == courses.c.course_id)
        .where(enrollments.c.user_id.in_(list(by_id)))
        .order_by(enrollments.c.enrollment_date.desc(), enrollments.c.enrollment_id.desc())
    )
    for row in enrollment_result.mappings():
        by_id[row["user_id"]]["enrollments"].append(
            {
                "enrollment_id": row["enrollment_id"],
                "enrollment_date": row["enrollment_date"],
                "status": row["status"],
                "course": {"course_id": row["course_id"], "title": row["title"]},
            }
        )

    return students
