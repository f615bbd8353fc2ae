"""
Shipment Service Clients Module

HTTP clients for the shipment backend
"""

from .shipment_client import ShipmentClient

__all__ = [
    "ShipmentClient",
]
