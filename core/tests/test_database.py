"""Tests for database helpers."""

import sqlite3
from types import SimpleNamespace

from sqlalchemy.exc import IntegrityError

from core.database import get_sync_database_url, is_unique_violation


def _integrity_error(orig):
    return IntegrityError("INSERT ...", {}, orig)


class TestIsUniqueViolation:

    def test_postgres_unique_violation(self):
        assert is_unique_violation(_integrity_error(SimpleNamespace(sqlstate="23505")))

    def test_postgres_foreign_key_violation(self):
        assert not is_unique_violation(_integrity_error(SimpleNamespace(sqlstate="23503")))

    def test_sqlite_error_names(self):
        unique = sqlite3.IntegrityError("UNIQUE constraint failed: enrollments.user_id")
        unique.sqlite_errorname = "SQLITE_CONSTRAINT_UNIQUE"
        foreign_key = sqlite3.IntegrityError("FOREIGN KEY constraint failed")
        foreign_key.sqlite_errorname = "SQLITE_CONSTRAINT_FOREIGNKEY"

        assert is_unique_violation(_integrity_error(unique))
        assert not is_unique_violation(_integrity_error(foreign_key))

    def test_falls_back_to_message(self):
        duplicate = Exception("duplicate key value violates unique constraint")
        assert is_unique_violation(_integrity_error(duplicate))
        assert not is_unique_violation(_integrity_error(Exception("null value in column")))


def test_sync_url_for_migrations(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/app")
    assert get_sync_database_url() == "postgresql://u:p@db:5432/app"

    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///local.db")
    assert get_sync_database_url() == "sqlite:///local.db"
