"""
Core business logic - platform-agnostic.
Can be used by the web API, scripts, or any other interface.
"""

# Database (SQLAlchemy)
from .database import get_connection, get_transaction, get_engine, close_engine, is_configured

# Errors
from .errors import (
    ServiceError, ValidationError, ConflictError, NotFoundError, Unauthorized, InternalError
)

# Authorization
from .authz import Principal, require_authenticated, require_role, require_admin

# Enums
from .enums import UserRole, EnrollmentStatus

# Accounts (async functions - must be awaited)
from .auth import create_account, register_user, authenticate_user

# Course catalog (async)
from .catalog import (
    list_courses, get_course, create_course, delete_course,
    list_lessons, get_lesson, create_lesson, update_lesson, delete_lesson,
)

# Roster (async)
from .roster import create_student, list_students

# Enrollment and progress (async)
from .enrollment import (
    enroll, list_enrollments, list_progress, get_progress, update_progress,
    completed_lessons_for, DEFAULT_TOTAL_LESSONS,
)

__all__ = [
    # Database (SQLAlchemy)
    'get_connection', 'get_transaction', 'get_engine', 'close_engine', 'is_configured',
    # Errors
    'ServiceError', 'ValidationError', 'ConflictError', 'NotFoundError', 'Unauthorized',
    'InternalError',
    # Authorization
    'Principal', 'require_authenticated', 'require_role', 'require_admin',
    # Enums
    'UserRole', 'EnrollmentStatus',
    # Accounts
    'create_account', 'register_user', 'authenticate_user',
    # Course catalog
    'list_courses', 'get_course', 'create_course', 'delete_course',
    'list_lessons', 'get_lesson', 'create_lesson', 'update_lesson', 'delete_lesson',
    # Roster
    'create_student', 'list_students',
    # Enrollment and progress
    'enroll', 'list_enrollments', 'list_progress', 'get_progress', 'update_progress',
    'completed_lessons_for', 'DEFAULT_TOTAL_LESSONS',
]
