"""
Shipment Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .models import Shipment, ShipmentStatus


@runtime_checkable
class ShipmentBackendProtocol(Protocol):
    """
    Interface for the shipment backend.

    Implementations raise NotFoundError / TransportError from core.exceptions.
    """

    async def fetch_shipment_status(self, shipment_id: str) -> ShipmentStatus:
        """Fetch the current status of a shipment"""
        ...

    async def persist_status_transition(
        self,
        shipment_id: str,
        new_status: ShipmentStatus,
        notes: Optional[str] = None
    ) -> None:
        """Persist a single status change"""
        ...

    async def persist_agent_assignment(self, shipment_id: str, agent_id: str) -> None:
        """Assign a delivery agent to a shipment"""
        ...

    async def create_shipment(self, payload: Dict[str, Any]) -> Shipment:
        """Create a shipment (always in New status)"""
        ...


@runtime_checkable
class BulkShipmentBackendProtocol(ShipmentBackendProtocol, Protocol):
    """Shipment backend that also offers a batch status endpoint"""

    async def persist_bulk_status_transition(
        self,
        shipment_ids: List[str],
        new_status: ShipmentStatus
    ) -> None:
        """Persist one status for many shipments in one call"""
        ...


@runtime_checkable
class ShipmentEventListenerProtocol(Protocol):
    """
    Receives shipment domain events after the backend accepted them.

    Implemented by the notification reconciler. A handler may return an
    outcome with a `warning` attribute; it is passed on to the caller.
    """

    async def on_order_created(
        self,
        order_id: str,
        order_number: str,
        seller_name: str,
        seller_id: Optional[str] = None
    ) -> Any:
        ...

    async def on_order_assigned(
        self,
        order_id: str,
        order_number: str,
        agent_name: str,
        assigned_agent_id: Optional[str] = None
    ) -> Any:
        ...

    async def on_status_changed(
        self,
        order_id: str,
        order_number: str,
        old_status: ShipmentStatus,
        new_status: ShipmentStatus,
        changed_by: str,
        changed_by_id: Optional[str] = None,
        seller_id: Optional[str] = None
    ) -> Any:
        ...
