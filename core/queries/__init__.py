"""Query layer for database operations using SQLAlchemy Core."""

from .courses import (
    create_course,
    create_lesson,
    delete_course,
    delete_lesson,
    get_course_by_id,
    get_lesson_with_course,
    list_active_courses,
    list_active_lessons,
    update_lesson,
)
from .enrollments import create_enrollment, get_enrollment, list_enrollments_for_user
from .progress import (
    create_progress,
    get_owned_progress,
    list_progress_for_user,
    update_progress,
)
from .users import (
    create_user,
    get_user_by_email,
    list_students_by_college,
    public_user,
)

__all__ = [
    # Users
    "get_user_by_email",
    "create_user",
    "list_students_by_college",
    "public_user",
    # Courses
    "list_active_courses",
    "get_course_by_id",
    "create_course",
    "delete_course",
    # Lessons
    "list_active_lessons",
    "get_lesson_with_course",
    "create_lesson",
    "update_lesson",
    "delete_lesson",
    # Enrollments
    "get_enrollment",
    "create_enrollment",
    "list_enrollments_for_user",
    # Progress
    "create_progress",
    "get_owned_progress",
    "update_progress",
    "list_progress_for_user",
]
