"""
Shipment Fixtures

Factories for shipment requests and backend payloads.
"""
from decimal import Decimal
from typing import Any, Dict, Optional

from services.shipment_service.models import ShipmentCreateRequest, ShipmentStatus

from .common import make_order_number, make_seller_id, make_shipment_id


def make_shipment_create_request(
    seller_id: Optional[str] = None,
    seller_name: str = "Test Seller",
    price: Decimal = Decimal("250.00"),
    **overrides
) -> ShipmentCreateRequest:
    """Build a valid ShipmentCreateRequest"""
    data = {
        "seller_id": seller_id or make_seller_id(),
        "seller_name": seller_name,
        "customer_name": "Test Customer",
        "customer_phone": "01000000000",
        "address": "12 Test Street",
        "zone_id": "zone_1",
        "price": price,
        "delivery_cost": Decimal("30.00"),
    }
    data.update(overrides)
    return ShipmentCreateRequest(**data)


def make_order_payload(
    shipment_id: Optional[str] = None,
    status: Any = ShipmentStatus.NEW.value,
    **overrides
) -> Dict[str, Any]:
    """Backend /Order/{id} JSON body"""
    payload = {
        "id": shipment_id or make_shipment_id(),
        "statusOrder": status,
        "sellerId": make_seller_id(),
        "agentId": None,
        "orderNumber": make_order_number(),
        "totalPrice": 250.0,
        "deliveryCost": 30.0,
        "createdAt": "2025-01-15T10:00:00Z",
    }
    payload.update(overrides)
    return payload
