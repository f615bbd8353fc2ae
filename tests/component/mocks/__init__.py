"""
Component Test Mocks

Mock backends implementing the service Protocols. Each records its calls and
can be told to raise.
"""

from .shipment_mocks import MockBulkShipmentBackend, MockShipmentBackend, MockShipmentListener
from .deactivation_mocks import MockDeactivationBackend
from .notification_mocks import MockNotificationBackend

__all__ = [
    "MockShipmentBackend",
    "MockBulkShipmentBackend",
    "MockShipmentListener",
    "MockDeactivationBackend",
    "MockNotificationBackend",
]
