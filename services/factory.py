"""
Shipping Console Factory

Factory functions for creating a console with real HTTP backends.
This is the ONLY place that wires the httpx clients into the services.

Usage:
    from services.factory import create_console
    async with create_console("Admin", user_id="usr_1", token=token) as console:
        await console.request_status_change("ord_1", "Delivered")
"""
from typing import Optional, Union

import httpx

from core.config import ConsoleConfig, get_settings
from core.roles import UserRole, coerce_role

from .console import ShippingConsole
from .deactivation_service import DeactivationPrecision, DeactivationService
from .notification_service import NotificationCounterReconciler
from .shipment_service import ShipmentService


def create_console(
    role: Union[UserRole, str],
    user_id: Optional[str] = None,
    token: Optional[str] = None,
    config: Optional[ConsoleConfig] = None,
    actor_name: str = "",
    precision: DeactivationPrecision = DeactivationPrecision.CALENDAR_DAY,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ShippingConsole:
    """
    Create a ShippingConsole for one signed-in user.

    Shipment and notification calls go to the role's backend; deactivation
    periods always live on the admin backend.

    Args:
        role: Acting role
        user_id: Acting user's id (targets agent assignment notifications)
        token: Bearer token for every backend
        config: Console configuration (defaults to global settings)
        actor_name: Display name used in status change notifications
        precision: Deactivation window precision
        transport: httpx transport for every client (tests pass a MockTransport)

    Returns:
        Configured ShippingConsole; close it (or use it as an async context
        manager) to release the HTTP clients.
    """
    # Import real clients here (not at module level)
    from .deactivation_service.clients import DeactivationClient
    from .notification_service.clients import NotificationClient
    from .shipment_service.clients import ShipmentClient

    role = coerce_role(role)
    config = config or get_settings()
    backend_config = config.backend

    def http_client() -> Optional[httpx.AsyncClient]:
        if transport is None:
            return None
        return httpx.AsyncClient(transport=transport, timeout=backend_config.http_timeout)

    shipment_client = ShipmentClient(
        role=role.value, token=token, config=backend_config, client=http_client()
    )
    notification_client = NotificationClient(
        role=role.value, token=token, config=backend_config, client=http_client()
    )
    deactivation_client = DeactivationClient(
        role=UserRole.ADMIN.value, token=token, config=backend_config, client=http_client()
    )

    reconciler = NotificationCounterReconciler(
        backend=notification_client,
        viewer_role=role,
        viewer_id=user_id,
    )
    shipments = ShipmentService(
        backend=shipment_client,
        listener=reconciler,
        prefer_batch=backend_config.use_bulk_endpoint,
        actor_name=actor_name,
        actor_id=user_id,
    )
    deactivation = DeactivationService(backend=deactivation_client, precision=precision)

    return ShippingConsole(
        role=role,
        shipments=shipments,
        deactivation=deactivation,
        notifications=reconciler,
        user_id=user_id,
        clients=[shipment_client, notification_client, deactivation_client],
    )
