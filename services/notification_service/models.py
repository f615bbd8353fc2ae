"""
Notification Service Models

In-app notifications, derived counters and the event payloads relayed to the
backend.
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime, timezone
from enum import Enum

from services.shipment_service.models import ShipmentStatus


class NotificationType(str, Enum):
    """Notification types"""
    ORDER_CREATED = "order_created"
    ORDER_ASSIGNED = "order_assigned"
    STATUS_CHANGED = "status_changed"


class Notification(BaseModel):
    """In-app notification held by a viewer session"""
    model_config = ConfigDict(populate_by_name=True)

    notification_id: str = Field(..., alias="id")
    type: NotificationType
    title: str
    message: str
    read: bool = False
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    order_id: Optional[str] = None
    order_number: Optional[str] = None
    old_status: Optional[ShipmentStatus] = None
    new_status: Optional[ShipmentStatus] = None
    changed_by: Optional[str] = None


class NotificationCounters(BaseModel):
    """Snapshot of the derived counters for one viewer"""
    unread_count: int = Field(default=0, ge=0)
    new_orders_count: int = Field(default=0, ge=0)
    today_orders_count: int = Field(default=0, ge=0)


class SyncResult(BaseModel):
    """Outcome of the backend half of a notification operation

    A failed sync never undoes the local change; the warning is meant for a
    non-fatal toast.
    """
    synced: bool = True
    warning: Optional[str] = None


# Event payloads relayed to the backend

class OrderCreatedEvent(BaseModel):
    """Relayed when a shipment is created"""
    order_id: str
    order_number: str
    seller_name: str
    seller_id: str = "unknown"


class OrderAssignedEvent(BaseModel):
    """Relayed when a shipment is assigned to an agent"""
    order_id: str
    order_number: str
    agent_id: str = "unknown"
    agent_name: str


class StatusChangedEvent(BaseModel):
    """Relayed when a shipment changes status"""
    order_id: str
    order_number: str
    old_status: ShipmentStatus
    new_status: ShipmentStatus
    changed_by: str
    changed_by_id: str = "unknown"
    seller_id: Optional[str] = None
