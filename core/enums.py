"""SQLAlchemy enum definitions for the database schema."""

import enum

from sqlalchemy import Enum as SQLEnum


# =====================================================
# Python Enum Classes
# =====================================================


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    STUDENT = "STUDENT"


class EnrollmentStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"


# =====================================================
# SQLAlchemy Enum Types
# =====================================================

user_role_enum = SQLEnum(UserRole, name="user_role")
enrollment_status_enum = SQLEnum(EnrollmentStatus, name="enrollment_status")
