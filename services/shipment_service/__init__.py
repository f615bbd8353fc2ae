"""
Shipment Service Package

Status taxonomy, role transition policy, bulk transitions and the shipment
lifecycle service.
"""

from .models import *
from .bulk import BulkTransitionCoordinator
from .shipment_service import ShipmentService
from .status_taxonomy import (
    ALL_STATUSES,
    get_status_label,
    is_valid_status,
    parse_status,
)
from .transition_policy import (
    AGENT_ALLOWED_STATUSES,
    allowed_next_statuses,
    validate_transition,
)

__all__ = [
    "ShipmentService",
    "BulkTransitionCoordinator",
    "ShipmentStatus",
    "Shipment",
    "ShipmentCreateRequest",
    "ShipmentCreationResult",
    "StatusChangeResult",
    "AgentAssignmentResult",
    "BulkStatusChangeResult",
    "BulkAgentAssignmentResult",
    "BulkFailureReason",
    "ALL_STATUSES",
    "AGENT_ALLOWED_STATUSES",
    "allowed_next_statuses",
    "validate_transition",
    "get_status_label",
    "is_valid_status",
    "parse_status",
]
