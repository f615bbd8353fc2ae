"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - common.py: Base ID generators, timestamps
    - shipment_fixtures.py: Shipment requests and backend payloads
"""

# Common utilities
from .common import (
    make_seller_id,
    make_shipment_id,
    make_order_number,
    today,
    make_backend_config,
)

# Shipment fixtures
from .shipment_fixtures import (
    make_shipment_create_request,
    make_order_payload,
)

__all__ = [
    "make_seller_id",
    "make_shipment_id",
    "make_order_number",
    "today",
    "make_backend_config",
    "make_shipment_create_request",
    "make_order_payload",
]
