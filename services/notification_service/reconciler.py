"""
Notification Counter Reconciler

Single writer of a viewer session's notifications and counters. Domain events
update local state first and are then relayed to the backend; a failed relay
is logged and reported as a warning, never rolled back.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple, Union

from core.exceptions import ConsoleError
from core.roles import UserRole, coerce_role
from services.shipment_service.models import ShipmentStatus
from services.shipment_service.status_taxonomy import get_status_label, parse_status

from .models import (
    Notification,
    NotificationCounters,
    NotificationType,
    OrderAssignedEvent,
    OrderCreatedEvent,
    StatusChangedEvent,
    SyncResult,
)
from .protocols import NotificationBackendProtocol

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotificationCounterReconciler:
    """
    Notification state for one viewer (role + id)

    Implements the shipment event listener interface, so it can be handed to
    ShipmentService directly.
    """

    def __init__(
        self,
        backend: NotificationBackendProtocol,
        viewer_role: Union[UserRole, str],
        viewer_id: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.backend = backend
        self.viewer_role = coerce_role(viewer_role)
        self.viewer_id = viewer_id
        self._clock = clock or _utcnow
        self._notifications: List[Notification] = []
        self._new_orders_count = 0
        self._today_orders_count = 0

    # Read-only views

    @property
    def notifications(self) -> Tuple[Notification, ...]:
        """Newest first"""
        return tuple(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    @property
    def new_orders_count(self) -> int:
        return self._new_orders_count

    @property
    def today_orders_count(self) -> int:
        return self._today_orders_count

    @property
    def counters(self) -> NotificationCounters:
        return NotificationCounters(
            unread_count=self.unread_count,
            new_orders_count=self._new_orders_count,
            today_orders_count=self._today_orders_count,
        )

    # Domain events

    async def on_order_created(
        self,
        order_id: str,
        order_number: str,
        seller_name: str,
        seller_id: Optional[str] = None
    ) -> SyncResult:
        if self.viewer_role.is_admin:
            self._new_orders_count += 1
            self._today_orders_count += 1
            self._prepend(
                NotificationType.ORDER_CREATED,
                title="New Order Created",
                message=f"New order {order_number} created by {seller_name}",
                order_id=order_id,
                order_number=order_number,
            )

        event = OrderCreatedEvent(
            order_id=order_id,
            order_number=order_number,
            seller_name=seller_name,
            seller_id=seller_id or "unknown",
        )
        return await self._sync(
            f"relay order_created for {order_id}",
            self.backend.relay_order_created(event),
        )

    async def on_order_assigned(
        self,
        order_id: str,
        order_number: str,
        agent_name: str,
        assigned_agent_id: Optional[str] = None
    ) -> SyncResult:
        # No assigned id means a broadcast to every agent session
        targeted = assigned_agent_id is None or assigned_agent_id == self.viewer_id
        if self.viewer_role == UserRole.AGENT and targeted:
            self._prepend(
                NotificationType.ORDER_ASSIGNED,
                title="New Order Assigned",
                message=f"You have been assigned order {order_number}",
                order_id=order_id,
                order_number=order_number,
            )

        event = OrderAssignedEvent(
            order_id=order_id,
            order_number=order_number,
            agent_id=assigned_agent_id or "unknown",
            agent_name=agent_name,
        )
        return await self._sync(
            f"relay order_assigned for {order_id}",
            self.backend.relay_order_assigned(event),
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
        old_status = parse_status(old_status)
        new_status = parse_status(new_status)

        if self.viewer_role == UserRole.SELLER or self.viewer_role.is_admin:
            self._prepend(
                NotificationType.STATUS_CHANGED,
                title="Order Status Changed",
                message=(
                    f'Order {order_number} status changed from '
                    f'"{get_status_label(old_status)}" to "{get_status_label(new_status)}" '
                    f'by {changed_by}'
                ),
                order_id=order_id,
                order_number=order_number,
                old_status=old_status,
                new_status=new_status,
                changed_by=changed_by,
            )

        if old_status == ShipmentStatus.NEW and self.viewer_role.is_admin:
            self._new_orders_count = max(0, self._new_orders_count - 1)

        event = StatusChangedEvent(
            order_id=order_id,
            order_number=order_number,
            old_status=old_status,
            new_status=new_status,
            changed_by=changed_by,
            changed_by_id=changed_by_id or "unknown",
            seller_id=seller_id,
        )
        return await self._sync(
            f"relay status_changed for {order_id}",
            self.backend.relay_status_changed(event),
        )

    # Read state

    async def mark_as_read(self, notification_id: str) -> SyncResult:
        """Mark one notification read; unknown ids leave local state unchanged"""
        self._notifications = [
            n.model_copy(update={"read": True}) if n.notification_id == notification_id else n
            for n in self._notifications
        ]
        return await self._sync(
            f"mark notification {notification_id} as read",
            self.backend.persist_mark_as_read(notification_id),
        )

    async def mark_all_as_read(self) -> SyncResult:
        self._notifications = [n.model_copy(update={"read": True}) for n in self._notifications]
        return await self._sync(
            "mark all notifications as read",
            self.backend.persist_mark_all_as_read(),
        )

    async def clear_all(self) -> SyncResult:
        """Drop every notification; order counters are untouched"""
        self._notifications = []
        return await self._sync(
            "clear notifications",
            self.backend.persist_clear_all(),
        )

    # Reconciliation

    async def refresh(self) -> SyncResult:
        """
        Replace local state with the backend's view

        Each part is replaced independently: a failing counter fetch does
        not prevent the notification list from being replaced.
        """
        warnings = []

        try:
            self._notifications = list(await self.backend.fetch_notifications())
        except ConsoleError as e:
            logger.error(f"Failed to load notifications: {e}")
            warnings.append(f"Failed to load notifications: {e}")

        if self.viewer_role.is_admin:
            try:
                self._new_orders_count = max(0, await self.backend.fetch_new_orders_count())
            except ConsoleError as e:
                logger.error(f"Failed to load new orders count: {e}")
                warnings.append(f"Failed to load new orders count: {e}")

            try:
                self._today_orders_count = max(0, await self.backend.fetch_today_orders_count())
            except ConsoleError as e:
                logger.error(f"Failed to load today's orders count: {e}")
                warnings.append(f"Failed to load today's orders count: {e}")

        if warnings:
            return SyncResult(synced=False, warning="; ".join(warnings))
        logger.debug(f"Notifications refreshed for {self.viewer_role.value} {self.viewer_id}")
        return SyncResult()

    # Internals

    def _prepend(self, notification_type: NotificationType, **fields) -> Notification:
        notification = Notification(
            notification_id=f"notif_{uuid.uuid4().hex}",
            type=notification_type,
            read=False,
            timestamp=self._clock(),
            **fields,
        )
        self._notifications.insert(0, notification)
        return notification

    async def _sync(self, action: str, call) -> SyncResult:
        try:
            await call
        except ConsoleError as e:
            logger.error(f"Failed to {action}: {e}")
            return SyncResult(synced=False, warning=f"Failed to {action}: {e}")
        return SyncResult()
