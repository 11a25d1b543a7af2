"""
Account creation and password checks.

Passwords are hashed with bcrypt (passlib) in a worker thread so hashing
never blocks the event loop.
"""

import asyncio
import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError

from .config import get_bcrypt_rounds
from .database import get_connection, get_transaction, is_unique_violation
from .enums import UserRole
from .errors import ConflictError, Unauthorized
from .queries import users as user_queries
from .validation import is_blank, require_text

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_bcrypt_rounds(),
)


def normalize_password(password: str) -> str:
    """bcrypt only reads 72 bytes; truncate after UTF-8 encoding."""
    encoded = password.encode("utf-8")
    if len(encoded) > 72:
        encoded = encoded[:72]
    return encoded.decode("utf-8", errors="ignore")


async def hash_password(password: str) -> str:
    """Return a salted one-way hash of the password."""
    return await asyncio.to_thread(pwd_context.hash, normalize_password(password))


async def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash."""
    return await asyncio.to_thread(
        pwd_context.verify, normalize_password(password), password_hash
    )


async def create_account(
    name: str | None,
    email: str | None,
    password: str | None,
    role: UserRole,
    college: str | None = None,
) -> dict:
    """
    Create a user account with a hashed password.

    Returns:
        The created user without its password hash

    Raises:
        ValidationError: name, email or password is missing
        ConflictError: email is already registered
    """
    name = require_text(name, "name")
    email = require_text(email, "email")
    require_text(password, "password")  # validated only; hashed as given

    password_hash = await hash_password(password)

    async with get_transaction() as conn:
        if await user_queries.get_user_by_email(conn, email):
            raise ConflictError("User with this email already exists")
        try:
            user = await user_queries.create_user(
                conn,
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
                college=college,
            )
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            # Lost a race with a concurrent registration for the same email
            raise ConflictError("User with this email already exists")

    logger.info("Created %s account %s", role.value, user["user_id"])
    return user


async def register_user(
    name: str | None,
    email: str | None,
    password: str | None,
    college: str | None = None,
) -> dict:
    """Self-registration. Always creates a STUDENT."""
    return await create_account(
        name, email, password, UserRole.STUDENT, college=college or None
    )


async def authenticate_user(email: str | None, password: str | None) -> dict:
    """
    Check credentials and return the user (without password hash).

    Raises:
        Unauthorized: unknown email or wrong password (same message for both)
    """
    if is_blank(email) or is_blank(password):
        raise Unauthorized("Invalid credentials")

    async with get_connection() as conn:
        user = await user_queries.get_user_by_email(
            conn, str(email).strip(), include_password=True
        )

    if not user or not await verify_password(password, user["password_hash"]):
        raise Unauthorized("Invalid credentials")

    return user_queries.public_user(user)
