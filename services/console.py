"""
Shipping Console

Session facade binding the acting user to the shipment, deactivation and
notification services. Build one with services.factory.create_console.
"""

import logging
from datetime import date, datetime
from typing import Any, Iterable, Optional, Sequence, Tuple, Union

from core.exceptions import PermissionDeniedError
from core.roles import UserRole, coerce_role

from .deactivation_service import (
    DeactivationResponse,
    DeactivationService,
    DeactivationState,
    DeactivationWindow,
    EntityKind,
)
from .notification_service import (
    Notification,
    NotificationCounterReconciler,
    NotificationCounters,
    SyncResult,
)
from .shipment_service import (
    AgentAssignmentResult,
    BulkAgentAssignmentResult,
    BulkStatusChangeResult,
    ShipmentCreateRequest,
    ShipmentCreationResult,
    ShipmentService,
    ShipmentStatus,
    StatusChangeResult,
)

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


class ShippingConsole:
    """
    Operations available to one signed-in user

    Shipment operations fire their events into the session's notification
    reconciler, so counters follow every successful change.
    """

    def __init__(
        self,
        role: Union[UserRole, str],
        shipments: ShipmentService,
        deactivation: DeactivationService,
        notifications: NotificationCounterReconciler,
        user_id: Optional[str] = None,
        clients: Iterable[Any] = ()
    ):
        self.role = coerce_role(role)
        self.user_id = user_id
        self.shipments = shipments
        self.deactivation = deactivation
        self.notifications = notifications
        self._clients = list(clients)

    # Shipments

    async def request_status_change(
        self,
        shipment_id: str,
        target_status: Union[ShipmentStatus, str],
        current_status: Optional[Union[ShipmentStatus, str]] = None,
        notes: Optional[str] = None
    ) -> StatusChangeResult:
        return await self.shipments.request_status_change(
            self.role, shipment_id, target_status, current_status=current_status, notes=notes
        )

    async def request_bulk_status_change(
        self,
        shipment_ids: Sequence[str],
        target_status: Union[ShipmentStatus, str]
    ) -> BulkStatusChangeResult:
        return await self.shipments.request_bulk_status_change(self.role, shipment_ids, target_status)

    async def create_shipment(self, request: ShipmentCreateRequest) -> ShipmentCreationResult:
        return await self.shipments.create_shipment(self.role, request)

    async def assign_agent(
        self,
        shipment_id: str,
        agent_id: str,
        agent_name: str = "",
        order_number: Optional[str] = None
    ) -> AgentAssignmentResult:
        return await self.shipments.assign_agent(
            self.role, shipment_id, agent_id, agent_name=agent_name, order_number=order_number
        )

    async def request_bulk_agent_assignment(
        self,
        shipment_ids: Sequence[str],
        agent_id: str,
        agent_name: str = ""
    ) -> BulkAgentAssignmentResult:
        return await self.shipments.request_bulk_agent_assignment(
            self.role, shipment_ids, agent_id, agent_name=agent_name
        )

    # Account deactivation (admin only)

    def _require_admin(self, action: str) -> None:
        if not self.role.is_admin:
            logger.warning(f"Rejected {action}: role {self.role.value}")
            raise PermissionDeniedError(f"Role {self.role.value} cannot {action}")

    async def schedule_deactivation(
        self,
        entity_kind: Union[EntityKind, str],
        entity_id: str,
        to_date: Optional[DateLike],
        from_date: Optional[DateLike] = None,
        now: Optional[datetime] = None
    ) -> DeactivationResponse:
        self._require_admin("schedule deactivation periods")
        return await self.deactivation.schedule_deactivation(
            entity_kind, entity_id, to_date, from_date=from_date, now=now
        )

    async def clear_deactivation(
        self,
        entity_kind: Union[EntityKind, str],
        entity_id: str
    ) -> DeactivationResponse:
        self._require_admin("clear deactivation periods")
        return await self.deactivation.clear_deactivation(entity_kind, entity_id)

    def get_deactivation_state(
        self,
        window: DeactivationWindow,
        now: Optional[datetime] = None
    ) -> DeactivationState:
        """Pure classification; open to every role"""
        return self.deactivation.get_deactivation_state(window, now)

    async def get_entity_deactivation_state(
        self,
        entity_kind: Union[EntityKind, str],
        entity_id: str,
        now: Optional[datetime] = None
    ) -> DeactivationState:
        self._require_admin("read deactivation periods")
        return await self.deactivation.get_entity_state(entity_kind, entity_id, now)

    # Notifications

    @property
    def counters(self) -> NotificationCounters:
        return self.notifications.counters

    @property
    def notification_list(self) -> Tuple[Notification, ...]:
        return self.notifications.notifications

    async def on_order_created(self, order_id: str, order_number: str, seller_name: str,
                               seller_id: Optional[str] = None) -> SyncResult:
        """Feed an order created elsewhere (e.g. by another session)"""
        return await self.notifications.on_order_created(order_id, order_number, seller_name, seller_id)

    async def on_order_assigned(self, order_id: str, order_number: str, agent_name: str,
                                assigned_agent_id: Optional[str] = None) -> SyncResult:
        return await self.notifications.on_order_assigned(
            order_id, order_number, agent_name, assigned_agent_id
        )

    async def on_status_changed(
        self,
        order_id: str,
        order_number: str,
        old_status: Union[ShipmentStatus, str],
        new_status: Union[ShipmentStatus, str],
        changed_by: str,
        changed_by_id: Optional[str] = None,
        seller_id: Optional[str] = None
    ) -> SyncResult:
        return await self.notifications.on_status_changed(
            order_id, order_number, old_status, new_status, changed_by,
            changed_by_id=changed_by_id, seller_id=seller_id,
        )

    async def mark_as_read(self, notification_id: str) -> SyncResult:
        return await self.notifications.mark_as_read(notification_id)

    async def mark_all_as_read(self) -> SyncResult:
        return await self.notifications.mark_all_as_read()

    async def clear_all(self) -> SyncResult:
        return await self.notifications.clear_all()

    async def refresh_notifications(self) -> SyncResult:
        return await self.notifications.refresh()

    # Lifecycle

    async def close(self):
        """Close every backend client owned by this console"""
        for client in self._clients:
            await client.close()
        self._clients = []
        logger.debug(f"Console closed for {self.role.value} {self.user_id}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
