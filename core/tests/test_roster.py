"""Tests for college-scoped student management."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select

from core.authz import Principal
from core.auth import authenticate_user, create_account
from core.catalog import create_course
from core.database import get_connection
from core.enrollment import enroll
from core.enums import UserRole
from core.errors import ConflictError, Unauthorized, ValidationError
from core.roster import create_student, list_students
from core.tables import users


async def _admin_of(college, email):
    user = await create_account("Admin", email, "secret-password", UserRole.ADMIN, college)
    return Principal(id=user["user_id"], role=UserRole.ADMIN, college=college)


class TestCreateStudent:

    @pytest.mark.asyncio
    async def test_inherits_admin_college(self, admin):
        created = await create_student(admin, "Carol", "carol@mit.edu", "pw-12345")

        assert created["role"] == UserRole.STUDENT
        assert created["college"] == "MIT"
        assert "password_hash" not in created

    @pytest.mark.asyncio
    async def test_explicit_college_kept(self, admin):
        created = await create_student(
            admin, "Dan", "dan@harvard.edu", "pw-12345", college="Harvard"
        )
        assert created["college"] == "Harvard"

    @pytest.mark.asyncio
    async def test_created_student_can_log_in(self, admin):
        await create_student(admin, "Erin", "erin@mit.edu", "pw-12345")

        user = await authenticate_user("erin@mit.edu", "pw-12345")

        assert user["email"] == "erin@mit.edu"
        with pytest.raises(Unauthorized):
            await authenticate_user("erin@mit.edu", "wrong")

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, admin, student):
        """alice@mit.edu already exists via the student fixture."""
        with pytest.raises(ConflictError):
            await create_student(admin, "Alice Again", "alice@mit.edu", "pw-12345")

        async with get_connection() as conn:
            result = await conn.execute(
                select(users.c.password_hash).where(users.c.email == "alice@mit.edu")
            )
            hashes = result.scalars().all()
        assert len(hashes) == 1
        assert hashes[0] != "correct horse battery staple"

    @pytest.mark.asyncio
    async def test_lost_email_race_is_conflict(self, admin, student):
        """The unique index catches a duplicate the pre-insert lookup missed."""
        with patch(
            "core.auth.user_queries.get_user_by_email",
            new_callable=AsyncMock,
            return_value=None,
        ):
            with pytest.raises(ConflictError):
                await create_account(
                    "Alice Again", "alice@mit.edu", "pw-12345", UserRole.STUDENT, "MIT"
                )

        async with get_connection() as conn:
            result = await conn.execute(
                select(func.count()).select_from(users).where(users.c.email == "alice@mit.edu")
            )
            assert result.scalar() == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,email,password",
        [("", "x@mit.edu", "pw"), ("X", None, "pw"), ("X", "x@mit.edu", "  ")],
    )
    async def test_missing_fields_rejected(self, admin, name, email, password):
        with pytest.raises(ValidationError):
            await create_student(admin, name, email, password)

    @pytest.mark.asyncio
    async def test_student_cannot_create(self, student):
        with pytest.raises(Unauthorized):
            await create_student(student, "Frank", "frank@mit.edu", "pw-12345")


class TestListStudents:

    @pytest.mark.asyncio
    async def test_only_own_college(self, admin, student, other_student):
        """An MIT admin never sees Harvard students."""
        harvard_admin = await _admin_of("Harvard", "admin@harvard.edu")
        await create_student(harvard_admin, "Hank", "hank@harvard.edu", "pw-12345")

        mit = await list_students(admin)
        harvard = await list_students(harvard_admin)

        assert {s["email"] for s in mit} == {"alice@mit.edu", "bob@mit.edu"}
        assert {s["email"] for s in harvard} == {"hank@harvard.edu"}
        assert all(s["college"] == "MIT" for s in mit)

    @pytest.mark.asyncio
    async def test_admins_not_listed(self, admin, student):
        listed = await list_students(admin)
        assert [s["user_id"] for s in listed] == [student.id]
        assert "password_hash" not in listed[0]

    @pytest.mark.asyncio
    async def test_admin_without_college_sees_unaffiliated_students(self, db_engine):
        loose_admin = await _admin_of(None, "root@example.com")
        await create_account("Ivy", "ivy@example.com", "pw-12345", UserRole.STUDENT, None)

        listed = await list_students(loose_admin)

        assert [s["email"] for s in listed] == ["ivy@example.com"]

    @pytest.mark.asyncio
    async def test_includes_enrollments_with_course_summary(self, admin, student):
        course = await create_course(admin, "Algorithms", "Sorting", "Dr. Knuth", 8)
        await enroll(student, course["course_id"])

        listed = await list_students(admin)

        enrollments = listed[0]["enrollments"]
        assert len(enrollments) == 1
        assert enrollments[0]["course"] == {
            "course_id": course["course_id"],
            "title": "Algorithms",
        }

    @pytest.mark.asyncio
    async def test_student_cannot_list(self, student):
        with pytest.raises(Unauthorized):
            await list_students(student)
