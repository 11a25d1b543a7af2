"""Root pytest configuration."""

import os
from pathlib import Path

import pytest_asyncio
from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

# Load environment variables before tests run
_root = Path(__file__).parent
load_dotenv(_root / ".env")
load_dotenv(_root / ".env.local", override=True)

# Test defaults; cheap bcrypt so account fixtures stay fast
os.environ.setdefault("JWT_SECRET", "test-secret-for-session-tokens-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory SQLite database installed as the app's engine.

    Schema comes from core.tables.metadata; foreign keys are enforced so
    ON DELETE CASCADE behaves as on Postgres.
    """
    from core.database import set_engine
    from core.tables import metadata

    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    set_engine(engine)
    try:
        yield engine
    finally:
        set_engine(None)
        await engine.dispose()


async def make_principal(role, email: str, college: str | None = None):
    """Create a stored user and return the Principal the web layer would build."""
    from core.auth import create_account
    from core.authz import Principal

    user = await create_account(
        name=email.split("@")[0].title(),
        email=email,
        password="correct horse battery staple",
        role=role,
        college=college,
    )
    return Principal(id=user["user_id"], role=role, college=college)


@pytest_asyncio.fixture
async def admin(db_engine):
    """An ADMIN of MIT."""
    from core.enums import UserRole

    return await make_principal(UserRole.ADMIN, "admin@mit.edu", college="MIT")


@pytest_asyncio.fixture
async def student(db_engine):
    """A STUDENT of MIT."""
    from core.enums import UserRole

    return await make_principal(UserRole.STUDENT, "alice@mit.edu", college="MIT")


@pytest_asyncio.fixture
async def other_student(db_engine):
    """A second STUDENT, used for ownership checks."""
    from core.enums import UserRole

    return await make_principal(UserRole.STUDENT, "bob@mit.edu", college="MIT")
