"""
Notification Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import List, Protocol, runtime_checkable

from .models import (
    Notification,
    OrderAssignedEvent,
    OrderCreatedEvent,
    StatusChangedEvent,
)


@runtime_checkable
class NotificationBackendProtocol(Protocol):
    """
    Interface for the notification backend.

    Implementations raise NotFoundError / TransportError from core.exceptions.
    """

    # Reads
    async def fetch_notifications(self) -> List[Notification]:
        """All notifications of the current user"""
        ...

    async def fetch_new_orders_count(self) -> int:
        """Orders still in New status (admin backend)"""
        ...

    async def fetch_today_orders_count(self) -> int:
        """Orders created today (admin backend)"""
        ...

    # Read-state writes
    async def persist_mark_as_read(self, notification_id: str) -> None:
        ...

    async def persist_mark_all_as_read(self) -> None:
        ...

    async def persist_clear_all(self) -> None:
        ...

    # Event relays, fanned out to other sessions by the backend
    async def relay_order_created(self, event: OrderCreatedEvent) -> None:
        ...

    async def relay_order_assigned(self, event: OrderAssignedEvent) -> None:
        ...

    async def relay_status_changed(self, event: StatusChangedEvent) -> None:
        ...
