"""
Student roster management, scoped by college.

Admins only see and create students of their own college. College is a plain
string attribute; an exact match is the whole tenancy rule.
"""

import logging
from typing import Any

from .auth import create_account
from .authz import Principal, require_admin
from .database import get_connection
from .enums import UserRole
from .queries import users as user_queries
from .validation import optional_text

logger = logging.getLogger(__name__)


async def create_student(
    principal: Principal | None,
    name: Any,
    email: Any,
    password: Any,
    college: Any = None,
) -> dict[str, Any]:
    """
    Create a student account.

    When college is omitted the student joins the creating admin's college.

    Returns:
        The created user, without its password hash

    Raises:
        Unauthorized: caller is not an admin
        ValidationError: name, email or password missing
        ConflictError: email already registered
    """
    admin = require_admin(principal)
    college = optional_text(college) or admin.college

    student = await create_account(
        name, email, password, UserRole.STUDENT, college=college
    )
    logger.info(
        "Admin %s created student %s (college=%s)",
        admin.id,
        student["user_id"],
        college,
    )
    return student


async def list_students(principal: Principal | None) -> list[dict[str, Any]]:
    """
    List the students of the caller's college with their enrollments.

    Raises:
        Unauthorized: caller is not an admin
    """
    admin = require_admin(principal)
    async with get_connection() as conn:
        return await user_queries.list_students_by_college(conn, admin.college)
