"""
Notification Backend Client

HTTP client for the /notifications endpoints
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

import pydantic

from core.exceptions import TransportError, ValidationError
from core.service_client_base import BaseServiceClient
from services.shipment_service.status_taxonomy import parse_status

from ..models import (
    Notification,
    OrderAssignedEvent,
    OrderCreatedEvent,
    StatusChangedEvent,
)

logger = logging.getLogger(__name__)


def _optional_status(raw: Any):
    if raw is None:
        return None
    try:
        return parse_status(raw)
    except ValidationError as e:
        raise TransportError(f"Unrecognised status {raw!r} in notification") from e


def _count(data: Any, path: str) -> int:
    if isinstance(data, dict):
        data = data.get("count")
    if isinstance(data, bool) or not isinstance(data, int):
        raise TransportError(f"Malformed count from {path}")
    return data


class NotificationClient(BaseServiceClient):
    """Client for notification storage and event fan-out"""

    service_name = "notifications"

    def _notification_from_payload(self, data: Dict[str, Any]) -> Notification:
        if not isinstance(data, dict):
            raise TransportError("Malformed notification payload")
        try:
            return Notification(
                notification_id=str(data.get("id")),
                type=data.get("type"),
                title=data.get("title") or "",
                message=data.get("message") or "",
                read=bool(data.get("read", False)),
                timestamp=data.get("timestamp") or datetime.now(timezone.utc),
                order_id=data.get("orderId"),
                order_number=data.get("orderNumber"),
                old_status=_optional_status(data.get("oldStatus")),
                new_status=_optional_status(data.get("newStatus")),
                changed_by=data.get("changedBy"),
            )
        except pydantic.ValidationError as e:
            raise TransportError(f"Invalid notification {data.get('id')!r}: {e}") from e

    async def fetch_notifications(self) -> List[Notification]:
        """Get all notifications for the current user"""
        data = await self.get("/notifications")
        if data is None:
            return []
        if not isinstance(data, list):
            raise TransportError("Malformed notification list")
        return [self._notification_from_payload(item) for item in data]

    async def fetch_new_orders_count(self) -> int:
        """Count of orders still in New status"""
        return _count(await self.get("/notifications/new-orders-count"), "new-orders-count")

    async def fetch_today_orders_count(self) -> int:
        """Count of orders created today"""
        return _count(await self.get("/notifications/today-orders-count"), "today-orders-count")

    async def persist_mark_as_read(self, notification_id: str) -> None:
        await self.patch(f"/notifications/{notification_id}/read")

    async def persist_mark_all_as_read(self) -> None:
        await self.patch("/notifications/mark-all-read")

    async def persist_clear_all(self) -> None:
        await self.delete("/notifications/clear")

    async def relay_order_created(self, event: OrderCreatedEvent) -> None:
        await self.post(
            "/notifications/order-created",
            json={
                "orderId": event.order_id,
                "orderNumber": event.order_number,
                "sellerName": event.seller_name,
                "sellerId": event.seller_id,
            },
        )

    async def relay_order_assigned(self, event: OrderAssignedEvent) -> None:
        await self.post(
            "/notifications/order-assigned",
            json={
                "orderId": event.order_id,
                "orderNumber": event.order_number,
                "agentId": event.agent_id,
                "agentName": event.agent_name,
            },
        )

    async def relay_status_changed(self, event: StatusChangedEvent) -> None:
        body = {
            "orderId": event.order_id,
            "orderNumber": event.order_number,
            "oldStatus": event.old_status.value,
            "newStatus": event.new_status.value,
            "changedBy": event.changed_by,
            "changedById": event.changed_by_id,
        }
        if event.seller_id:
            body["sellerId"] = event.seller_id
        await self.post("/notifications/status-changed", json=body)
        logger.debug(f"Relayed status change for {event.order_id}")
