"""
Shipment Service Business Logic

Role-checked status changes, shipment creation and agent assignment. Every
check that can be made locally runs before the first backend call.
"""

from typing import Any, Optional, Sequence, Union
from datetime import datetime, timezone
import logging

from core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    TransportError,
    ValidationError,
)
from core.roles import UserRole, coerce_role

from .bulk import BulkTransitionCoordinator
from .models import (
    AgentAssignmentResult,
    BulkAgentAssignmentResult,
    BulkFailureReason,
    BulkStatusChangeResult,
    ShipmentCreateRequest,
    ShipmentCreationResult,
    ShipmentStatus,
    StatusChangeResult,
)
from .protocols import ShipmentBackendProtocol, ShipmentEventListenerProtocol
from .status_taxonomy import parse_status
from .transition_policy import (
    can_assign_agents,
    can_change_status,
    can_create_shipment,
    validate_transition,
)

logger = logging.getLogger(__name__)


def _sync_warning(outcome: Any) -> Optional[str]:
    """Warning carried by a listener outcome (e.g. a SyncResult), if any"""
    return getattr(outcome, "warning", None)


class ShipmentService:
    """
    Shipment lifecycle business logic

    Validates requests against the role policy, persists accepted changes
    through the backend and forwards the resulting events to the listener.
    """

    def __init__(
        self,
        backend: ShipmentBackendProtocol,
        listener: Optional[ShipmentEventListenerProtocol] = None,
        prefer_batch: bool = False,
        actor_name: str = "",
        actor_id: Optional[str] = None
    ):
        """
        Initialize Shipment Service

        Args:
            backend: Shipment backend (dependency injection)
            listener: Receives created/assigned/status-changed events (optional)
            prefer_batch: Use the backend batch endpoint for bulk changes
            actor_name: Display name of the acting user, used in notifications
            actor_id: Identifier of the acting user
        """
        self.backend = backend
        self.listener = listener
        self.actor_name = actor_name
        self.actor_id = actor_id
        self.bulk = BulkTransitionCoordinator(
            backend,
            prefer_batch=prefer_batch,
            on_item_succeeded=self._status_changed,
        )

    # Status changes

    async def request_status_change(
        self,
        role: Union[UserRole, str],
        shipment_id: str,
        target_status: Union[ShipmentStatus, str],
        current_status: Optional[Union[ShipmentStatus, str]] = None,
        notes: Optional[str] = None
    ) -> StatusChangeResult:
        """
        Change the status of one shipment

        Args:
            role: Acting role
            shipment_id: Shipment to change
            target_status: Requested status
            current_status: Status the caller is showing; when given, the
                same-status check runs without fetching
            notes: Optional note stored with the change

        Raises:
            PermissionDeniedError: role may not change this status (no calls made)
            ValidationError: target is invalid or equals the current status
            NotFoundError: shipment does not exist
            TransportError: backend call failed
        """
        role = coerce_role(role)
        if not can_change_status(role):
            logger.warning(f"Rejected status change on {shipment_id}: role {role.value}")
            raise PermissionDeniedError(f"Role {role.value} cannot change shipment status")

        target = parse_status(target_status)

        if current_status is not None:
            current = parse_status(current_status)
        else:
            current = await self.backend.fetch_shipment_status(shipment_id)

        try:
            validate_transition(role, current, target)
        except (ValidationError, PermissionDeniedError) as e:
            logger.warning(f"Rejected status change on {shipment_id}: {e}")
            raise

        await self.backend.persist_status_transition(shipment_id, target, notes)
        logger.info(f"Shipment {shipment_id} status changed: {current.value} -> {target.value}")

        warning = await self._status_changed(shipment_id, current, target)

        return StatusChangeResult(
            shipment_id=shipment_id,
            old_status=current,
            new_status=target,
            changed_at=datetime.now(timezone.utc),
            warning=warning,
        )

    async def request_bulk_status_change(
        self,
        role: Union[UserRole, str],
        shipment_ids: Sequence[str],
        target_status: Union[ShipmentStatus, str]
    ) -> BulkStatusChangeResult:
        """Change many shipments to one status; see BulkTransitionCoordinator"""
        return await self.bulk.apply_bulk(role, target_status, shipment_ids)

    # Creation

    async def create_shipment(
        self,
        role: Union[UserRole, str],
        request: ShipmentCreateRequest
    ) -> ShipmentCreationResult:
        """
        Create a shipment in New status

        Raises:
            PermissionDeniedError: role may not create shipments
            TransportError: backend call failed
        """
        role = coerce_role(role)
        if not can_create_shipment(role):
            raise PermissionDeniedError(f"Role {role.value} cannot create shipments")

        payload = request.model_dump(mode="json")
        payload["status"] = ShipmentStatus.NEW.value
        shipment = await self.backend.create_shipment(payload)
        logger.info(f"Shipment created: {shipment.shipment_id} for seller {request.seller_id}")

        warning = None
        if self.listener:
            warning = _sync_warning(await self.listener.on_order_created(
                order_id=shipment.shipment_id,
                order_number=shipment.order_number or shipment.shipment_id,
                seller_name=request.seller_name or self.actor_name,
                seller_id=request.seller_id,
            ))
        return ShipmentCreationResult(shipment=shipment, warning=warning)

    # Agent assignment

    async def assign_agent(
        self,
        role: Union[UserRole, str],
        shipment_id: str,
        agent_id: str,
        agent_name: str = "",
        order_number: Optional[str] = None
    ) -> AgentAssignmentResult:
        """
        Assign a delivery agent to one shipment

        Raises:
            PermissionDeniedError: role may not assign agents
            ValidationError: agent_id or shipment_id is empty
            NotFoundError: shipment does not exist
            TransportError: backend call failed
        """
        role = coerce_role(role)
        if not can_assign_agents(role):
            raise PermissionDeniedError(f"Role {role.value} cannot assign agents")
        if not agent_id:
            raise ValidationError("Please select an agent")
        if not shipment_id:
            raise ValidationError(f"Invalid ID {shipment_id!r}")

        await self.backend.persist_agent_assignment(shipment_id, agent_id)
        logger.info(f"Shipment {shipment_id} assigned to agent {agent_id}")

        warning = None
        if self.listener:
            warning = _sync_warning(await self.listener.on_order_assigned(
                order_id=shipment_id,
                order_number=order_number or shipment_id,
                agent_name=agent_name,
                assigned_agent_id=agent_id,
            ))
        return AgentAssignmentResult(shipment_id=shipment_id, agent_id=agent_id, warning=warning)

    async def request_bulk_agent_assignment(
        self,
        role: Union[UserRole, str],
        shipment_ids: Sequence[str],
        agent_id: str,
        agent_name: str = ""
    ) -> BulkAgentAssignmentResult:
        """
        Assign one agent to many shipments, item by item

        Raises:
            PermissionDeniedError: role may not assign agents (no calls made)
            ValidationError: agent_id is empty
        """
        role = coerce_role(role)
        if not can_assign_agents(role):
            raise PermissionDeniedError(f"Role {role.value} cannot assign agents")
        if not agent_id:
            raise ValidationError("Please select an agent")

        result = BulkAgentAssignmentResult(agent_id=agent_id)
        for shipment_id in dict.fromkeys(shipment_ids):
            try:
                assigned = await self.assign_agent(role, shipment_id, agent_id, agent_name)
            except (NotFoundError, ValidationError) as e:
                result.record_failure(shipment_id, BulkFailureReason.NOT_FOUND, str(e))
            except TransportError as e:
                result.record_failure(shipment_id, BulkFailureReason.TRANSPORT_ERROR, str(e))
            else:
                result.record_success(shipment_id)
                if assigned.warning:
                    result.warnings.append(assigned.warning)

        logger.info(
            f"Bulk assignment to agent {agent_id}: "
            f"{len(result.succeeded)} succeeded, {len(result.failed)} failed"
        )
        return result

    async def _status_changed(
        self,
        shipment_id: str,
        old_status: ShipmentStatus,
        new_status: ShipmentStatus
    ) -> Optional[str]:
        if not self.listener:
            return None
        return _sync_warning(await self.listener.on_status_changed(
            order_id=shipment_id,
            order_number=shipment_id,
            old_status=old_status,
            new_status=new_status,
            changed_by=self.actor_name,
            changed_by_id=self.actor_id,
        ))
