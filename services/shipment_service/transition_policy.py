"""
Role transition policy

Decides which target statuses a role may set. Pure functions, no I/O.
"""
from typing import FrozenSet, Union

from core.exceptions import PermissionDeniedError, ValidationError
from core.roles import UserRole, coerce_role

from .models import ShipmentStatus
from .status_taxonomy import ALL_STATUSES, get_status_label


# Flat allow-list: agents get the same targets whatever the current status.
# The backend remains the authority on legality.
AGENT_ALLOWED_STATUSES: FrozenSet[ShipmentStatus] = frozenset({
    ShipmentStatus.DELIVERED,
    ShipmentStatus.POSTPONED,
    ShipmentStatus.CUSTOMER_UNREACHABLE,
    ShipmentStatus.REJECTED_NO_SHIPPING_FEES,
    ShipmentStatus.REJECTED_WITH_SHIPPING_FEES,
    ShipmentStatus.PARTIALLY_DELIVERED,
    ShipmentStatus.RETURNED,
})

ADMIN_ALLOWED_STATUSES: FrozenSet[ShipmentStatus] = frozenset(ALL_STATUSES)

_CREATOR_ROLES = frozenset({UserRole.SELLER, UserRole.ADMIN, UserRole.SUPER_ADMIN})


def allowed_next_statuses(
    role: Union[UserRole, str],
    current_status: ShipmentStatus
) -> FrozenSet[ShipmentStatus]:
    """
    Statuses the role may set next

    Unknown roles and sellers get an empty set.
    """
    try:
        role = coerce_role(role)
    except PermissionDeniedError:
        return frozenset()

    if role == UserRole.AGENT:
        return AGENT_ALLOWED_STATUSES
    if role.is_admin:
        return ADMIN_ALLOWED_STATUSES
    return frozenset()


def can_change_status(role: Union[UserRole, str]) -> bool:
    """True if the role may transition existing shipments at all"""
    try:
        role = coerce_role(role)
    except PermissionDeniedError:
        return False
    return role == UserRole.AGENT or role.is_admin


def can_create_shipment(role: Union[UserRole, str]) -> bool:
    try:
        return coerce_role(role) in _CREATOR_ROLES
    except PermissionDeniedError:
        return False


def can_assign_agents(role: Union[UserRole, str]) -> bool:
    try:
        return coerce_role(role).is_admin
    except PermissionDeniedError:
        return False


def validate_transition(
    role: Union[UserRole, str],
    current_status: ShipmentStatus,
    target_status: ShipmentStatus
) -> None:
    """
    Validate a status change for a role

    The same-status check runs before the role check.

    Raises:
        ValidationError: target equals current status
        PermissionDeniedError: role may not set the target status
    """
    if target_status == current_status:
        raise ValidationError(
            f"Shipment is already {get_status_label(current_status)}; select a different status"
        )

    if not can_change_status(role):
        raise PermissionDeniedError(
            f"Role {getattr(role, 'value', role)} cannot change shipment status"
        )

    if target_status not in allowed_next_statuses(role, current_status):
        raise PermissionDeniedError(
            f"Role {coerce_role(role).value} cannot set status {get_status_label(target_status)}"
        )
