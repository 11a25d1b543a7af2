"""Initial schema: users, courses, lessons, enrollments, progress.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Ownership edges cascade on delete: course -> lessons, course/user ->
enrollments, enrollment -> progress.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role = sa.Enum("ADMIN", "STUDENT", name="user_role")
enrollment_status = sa.Enum("ACTIVE", name="enrollment_status")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("college", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("user_id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )
    op.create_index("idx_users_role_college", "users", ["role", "college"])

    op.create_table(
        "courses",
        sa.Column("course_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("instructor", sa.Text(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), server_default="0", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default="1", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("duration > 0", name=op.f("ck_courses_duration_positive")),
        sa.CheckConstraint("price >= 0", name=op.f("ck_courses_price_non_negative")),
        sa.PrimaryKeyConstraint("course_id", name=op.f("pk_courses")),
    )
    op.create_index("idx_courses_is_active", "courses", ["is_active"])

    op.create_table(
        "lessons",
        sa.Column("lesson_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("duration", sa.Integer(), server_default="30", nullable=False),
        sa.Column("order", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default="1", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["course_id"],
            ["courses.course_id"],
            name=op.f("fk_lessons_course_id_courses"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("lesson_id", name=op.f("pk_lessons")),
    )
    op.create_index("idx_lessons_course_id", "lessons", ["course_id"])

    op.create_table(
        "enrollments",
        sa.Column("enrollment_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("status", enrollment_status, nullable=False),
        sa.Column(
            "enrollment_date", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.user_id"],
            name=op.f("fk_enrollments_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["course_id"],
            ["courses.course_id"],
            name=op.f("fk_enrollments_course_id_courses"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("enrollment_id", name=op.f("pk_enrollments")),
        sa.UniqueConstraint(
            "user_id", "course_id", name="uq_enrollments_user_id_course_id"
        ),
    )
    op.create_index("idx_enrollments_user_id", "enrollments", ["user_id"])
    op.create_index("idx_enrollments_course_id", "enrollments", ["course_id"])

    op.create_table(
        "progress",
        sa.Column("progress_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("enrollment_id", sa.Integer(), nullable=False),
        sa.Column(
            "completion_percentage", sa.Integer(), server_default="0", nullable=False
        ),
        sa.Column("completed_lessons", sa.Integer(), server_default="0", nullable=False),
        sa.Column("total_lessons", sa.Integer(), nullable=False),
        sa.Column(
            "last_accessed_date", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint(
            "completion_percentage >= 0 AND completion_percentage <= 100",
            name=op.f("ck_progress_completion_percentage_range"),
        ),
        sa.CheckConstraint(
            "total_lessons > 0", name=op.f("ck_progress_total_lessons_positive")
        ),
        sa.CheckConstraint(
            "completed_lessons >= 0 AND completed_lessons <= total_lessons",
            name=op.f("ck_progress_completed_lessons_range"),
        ),
        sa.ForeignKeyConstraint(
            ["enrollment_id"],
            ["enrollments.enrollment_id"],
            name=op.f("fk_progress_enrollment_id_enrollments"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("progress_id", name=op.f("pk_progress")),
        sa.UniqueConstraint("enrollment_id", name=op.f("uq_progress_enrollment_id")),
    )


def downgrade() -> None:
    op.drop_table("progress")
    op.drop_index("idx_enrollments_course_id", table_name="enrollments")
    op.drop_index("idx_enrollments_user_id", table_name="enrollments")
    op.drop_table("enrollments")
    op.drop_index("idx_lessons_course_id", table_name="lessons")
    op.drop_table("lessons")
    op.drop_index("idx_courses_is_active", table_name="courses")
    op.drop_table("courses")
    op.drop_index("idx_users_role_college", table_name="users")
    op.drop_table("users")
    enrollment_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
