"""
Authorization policy shared by every service operation.

The principal comes from the identity layer (web_api/auth.py) and is trusted
as-is. Guards run once at the top of a service call.
"""

from dataclasses import dataclass

from .enums import UserRole
from .errors import Unauthorized


@dataclass(frozen=True)
class Principal:
    """The authenticated caller: identity, role and college."""

    id: int
    role: UserRole
    college: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def require_authenticated(principal: Principal | None) -> Principal:
    """Raise Unauthorized if there is no principal."""
    if principal is None:
        raise Unauthorized("Authentication required")
    return principal


def require_role(principal: Principal | None, role: UserRole) -> Principal:
    """Raise Unauthorized unless the principal holds the given role."""
    principal = require_authenticated(principal)
    if principal.role != role:
        raise Unauthorized(f"{role.value.capitalize()} access required")
    return principal


def require_admin(principal: Principal | None) -> Principal:
    return require_role(principal, UserRole.ADMIN)
