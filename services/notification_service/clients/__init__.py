"""
Notification Service Clients Module

HTTP clients for the notification backend
"""

from .notification_client import NotificationClient

__all__ = [
    "NotificationClient",
]
