"""
Console roles

Shared role vocabulary used by every service package.
"""
from enum import Enum
from typing import Union

from core.exceptions import PermissionDeniedError


class UserRole(str, Enum):
    """Console user roles"""
    SELLER = "Seller"
    AGENT = "Agent"
    ADMIN = "Admin"
    SUPER_ADMIN = "SuperAdmin"

    @property
    def is_admin(self) -> bool:
        """SuperAdmin carries every Admin privilege"""
        return self in (UserRole.ADMIN, UserRole.SUPER_ADMIN)


def coerce_role(role: Union[UserRole, str]) -> UserRole:
    """Resolve a role name (case-insensitive) to a UserRole

    Raises:
        PermissionDeniedError: role is not one the console knows
    """
    if isinstance(role, UserRole):
        return role
    if isinstance(role, str):
        for member in UserRole:
            if role.strip().lower() in (member.value.lower(), member.name.lower()):
                return member
    raise PermissionDeniedError(f"Unknown role: {role!r}")


__all__ = ["UserRole", "coerce_role"]
