"""
Shipment Backend Client

HTTP client for the backend's Order endpoints
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import pydantic

from core.exceptions import TransportError, ValidationError
from core.service_client_base import BaseServiceClient

from ..models import Shipment, ShipmentStatus
from ..status_taxonomy import parse_status

logger = logging.getLogger(__name__)


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value)) if value is not None else Decimal("0")
    except InvalidOperation:
        return Decimal("0")


class ShipmentClient(BaseServiceClient):
    """Client for the Order endpoints of a role backend"""

    service_name = "shipments"

    def _status_from_payload(self, data: Dict[str, Any], url_hint: str) -> ShipmentStatus:
        raw = data.get("statusOrder", data.get("status"))
        try:
            return parse_status(raw)
        except ValidationError as e:
            raise TransportError(f"Unrecognised status {raw!r} from {url_hint}") from e

    def _shipment_from_payload(self, data: Dict[str, Any]) -> Shipment:
        if not isinstance(data, dict) or data.get("id") is None:
            raise TransportError("Malformed shipment payload")
        agent_id = data.get("agentId")
        seller_id = data.get("sellerId")
        status = self._status_from_payload(data, "/Order")
        try:
            return Shipment(
                shipment_id=str(data["id"]),
                status=status,
                seller_id=str(seller_id) if seller_id is not None else None,
                agent_id=str(agent_id) if agent_id is not None else None,
                order_number=data.get("orderNumber") or data.get("trackingNumber"),
                price=_decimal(data.get("totalPrice", data.get("price"))),
                delivery_cost=_decimal(data.get("deliveryCost")),
                created_at=data.get("createdAt"),
            )
        except pydantic.ValidationError as e:
            raise TransportError(f"Malformed shipment payload for {data['id']}: {e}") from e

    async def fetch_shipment(self, shipment_id: str) -> Shipment:
        """Get shipment by ID"""
        if not shipment_id:
            raise ValidationError(f"Invalid ID {shipment_id!r}")
        data = await self.get(f"/Order/{shipment_id}")
        return self._shipment_from_payload(data)

    async def fetch_shipment_status(self, shipment_id: str) -> ShipmentStatus:
        """Get the current status of a shipment"""
        if not shipment_id:
            raise ValidationError(f"Invalid ID {shipment_id!r}")
        data = await self.get(f"/Order/{shipment_id}")
        if not isinstance(data, dict):
            raise TransportError(f"Malformed shipment payload for {shipment_id}")
        return self._status_from_payload(data, f"/Order/{shipment_id}")

    async def persist_status_transition(
        self,
        shipment_id: str,
        new_status: ShipmentStatus,
        notes: Optional[str] = None
    ) -> None:
        """Update the status of one shipment"""
        await self.patch(
            f"/Order/{shipment_id}/status",
            json={"status": new_status.value, "notes": notes},
        )

    async def persist_bulk_status_transition(
        self,
        shipment_ids: List[str],
        new_status: ShipmentStatus
    ) -> None:
        """Update the status of many shipments in one call"""
        await self.patch(
            "/Order/ChangeSatuseOrders",
            json={"statusOrder": new_status.wire_code, "orderIdS": list(shipment_ids)},
        )

    async def persist_agent_assignment(self, shipment_id: str, agent_id: str) -> None:
        """Assign a delivery agent"""
        await self.patch(f"/Order/{shipment_id}/assign", json={"agentId": agent_id})

    async def create_shipment(self, payload: Dict[str, Any]) -> Shipment:
        """Create a shipment"""
        body = {_camel(k): v for k, v in payload.items() if v is not None}
        data = await self.post("/Order", json=body)
        shipment = self._shipment_from_payload(data)
        logger.debug(f"Backend created shipment {shipment.shipment_id}")
        return shipment
