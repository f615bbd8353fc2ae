"""
Shipment status vocabulary

The closed set of statuses plus parsing and classification helpers.
Transition rules live in transition_policy.
"""
import re
from typing import Any, FrozenSet, Tuple

from core.exceptions import ValidationError

from .models import ShipmentStatus


ALL_STATUSES: Tuple[ShipmentStatus, ...] = tuple(ShipmentStatus)

IN_PROGRESS_STATUSES: FrozenSet[ShipmentStatus] = frozenset({
    ShipmentStatus.IN_PICKUP_STAGE,
    ShipmentStatus.IN_WAREHOUSE,
    ShipmentStatus.DELIVERED_TO_AGENT,
    ShipmentStatus.POSTPONED,
    ShipmentStatus.CUSTOMER_UNREACHABLE,
    ShipmentStatus.PARTIALLY_DELIVERED,
})

REJECTED_STATUSES: FrozenSet[ShipmentStatus] = frozenset({
    ShipmentStatus.REJECTED_NO_SHIPPING_FEES,
    ShipmentStatus.REJECTED_WITH_SHIPPING_FEES,
    ShipmentStatus.CANCELED_BY_MERCHANT,
    ShipmentStatus.REJECTED_BY_US,
    ShipmentStatus.RETURNED,
})


def _normalize(text: str) -> str:
    return re.sub(r"[\s_\-]", "", text).lower()


_BY_NORMALIZED_NAME = {_normalize(s.value): s for s in ShipmentStatus}


def parse_status(value: Any) -> ShipmentStatus:
    """
    Resolve a status from a member, its name or its numeric wire code

    Accepts "InPickupStage", "in_pickup_stage", "In Pickup Stage", 1 or "1".

    Raises:
        ValidationError: value is not a shipment status
    """
    if isinstance(value, ShipmentStatus):
        return value

    if isinstance(value, int) and not isinstance(value, bool):
        status = ShipmentStatus.from_wire_code(value)
        if status is not None:
            return status
    elif isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            status = ShipmentStatus.from_wire_code(int(text))
            if status is not None:
                return status
        status = _BY_NORMALIZED_NAME.get(_normalize(text))
        if status is not None:
            return status

    raise ValidationError(f"Invalid shipment status: {value!r}")


def is_valid_status(value: Any) -> bool:
    """Total check: True iff value resolves to a shipment status"""
    try:
        parse_status(value)
    except ValidationError:
        return False
    return True


def get_status_label(status: ShipmentStatus) -> str:
    """Human readable label, e.g. "Rejected No Shipping Fees" """
    return re.sub(r"(?<!^)(?=[A-Z])", " ", parse_status(status).value)


def is_in_progress_status(status: ShipmentStatus) -> bool:
    return parse_status(status) in IN_PROGRESS_STATUSES


def is_completed_status(status: ShipmentStatus) -> bool:
    return parse_status(status) == ShipmentStatus.DELIVERED


def is_rejected_status(status: ShipmentStatus) -> bool:
    return parse_status(status) in REJECTED_STATUSES
