"""SQLAlchemy Core table definitions for the database schema."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    Table,
    Text,
    UniqueConstraint,
    func,
)

from .enums import enrollment_status_enum, user_role_enum

# Naming convention for constraints (helps Alembic generate better names)
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
metadata = MetaData(naming_convention=convention)


# =====================================================
# 1. USERS
# =====================================================
users = Table(
    "users",
    metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("email", Text, nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("role", user_role_enum, nullable=False),
    Column("college", Text),  # plain-string tenancy filter for admin rosters
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    Index("idx_users_role_college", "role", "college"),
)


# =====================================================
# 2. COURSES
# =====================================================
courses = Table(
    "courses",
    metadata,
    Column("course_id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("description", Text, nullable=False),
    Column("instructor", Text, nullable=False),
    Column("duration", Integer, nullable=False),  # hours
    Column("price", Numeric(10, 2), nullable=False, server_default="0"),
    Column("is_active", Boolean, nullable=False, server_default="1"),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    CheckConstraint("duration > 0", name="duration_positive"),
    CheckConstraint("price >= 0", name="price_non_negative"),
    Index("idx_courses_is_active", "is_active"),
)


# =====================================================
# 3. LESSONS
# =====================================================
lessons = Table(
    "lessons",
    metadata,
    Column("lesson_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "course_id",
        Integer,
        ForeignKey("courses.course_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("content", Text, nullable=False),
    Column("video_url", Text),
    Column("duration", Integer, nullable=False, server_default="30"),  # minutes
    Column("order", Integer, nullable=False, server_default="0"),
    Column("is_active", Boolean, nullable=False, server_default="1"),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    Index("idx_lessons_course_id", "course_id"),
)


# =====================================================
# 4. ENROLLMENTS
# =====================================================
enrollments = Table(
    "enrollments",
    metadata,
    Column("enrollment_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "course_id",
        Integer,
        ForeignKey("courses.course_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("status", enrollment_status_enum, nullable=False),
    Column("enrollment_date", DateTime(timezone=True), server_default=func.now()),
    Index("idx_enrollments_user_id", "user_id"),
    Index("idx_enrollments_course_id", "course_id"),
    UniqueConstraint(
        "user_id", "course_id", name="uq_enrollments_user_id_course_id"
    ),
)


# =====================================================
# 5. PROGRESS
# =====================================================
# Exactly one row per enrollment, created in the same transaction.
progress = Table(
    "progress",
    metadata,
    Column("progress_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "enrollment_id",
        Integer,
        ForeignKey("enrollments.enrollment_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("completion_percentage", Integer, nullable=False, server_default="0"),
    Column("completed_lessons", Integer, nullable=False, server_default="0"),
    Column("total_lessons", Integer, nullable=False),
    Column("last_accessed_date", DateTime(timezone=True), server_default=func.now()),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    CheckConstraint(
        "completion_percentage >= 0 AND completion_percentage <= 100",
        name="completion_percentage_range",
    ),
    CheckConstraint("total_lessons > 0", name="total_lessons_positive"),
    CheckConstraint(
        "completed_lessons >= 0 AND completed_lessons <= total_lessons",
        name="completed_lessons_range",
    ),
)
