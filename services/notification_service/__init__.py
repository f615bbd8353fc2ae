"""
Notification Service Package

Per-viewer notifications and order counters.
"""

from .models import *
from .reconciler import NotificationCounterReconciler

__all__ = [
    "NotificationCounterReconciler",
    "Notification",
    "NotificationCounters",
    "NotificationType",
    "SyncResult",
    "OrderCreatedEvent",
    "OrderAssignedEvent",
    "StatusChangedEvent",
]
