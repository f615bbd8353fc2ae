"""
Backend Client Component Tests

HTTP clients exercised against httpx.MockTransport.

Usage:
    pytest tests/component/test_backend_clients.py -v
"""
import json
from datetime import datetime, timezone

import httpx
import pytest

from core.exceptions import NotFoundError, TransportError, ValidationError
from services.deactivation_service.clients import DeactivationClient
from services.deactivation_service.models import DeactivationWindow, EntityKind, WindowShape
from services.notification_service.clients import NotificationClient
from services.notification_service.models import NotificationType, StatusChangedEvent
from services.shipment_service.clients import ShipmentClient
from services.shipment_service.models import ShipmentStatus
from tests.fixtures import make_order_payload, make_shipment_create_request

pytestmark = [pytest.mark.component, pytest.mark.asyncio]


class RecordingHandler:
    """MockTransport handler that records requests and replays canned responses"""

    def __init__(self):
        self.requests = []
        self.responses = {}

    def on(self, method: str, path: str, status_code: int = 200, body=None, content: bytes = None):
        self.responses[(method, path)] = (status_code, body, content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body, content = self.responses.get(
            (request.method, request.url.path), (200, None, b"")
        )
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def handler():
    return RecordingHandler()


def build(client_cls, handler, backend_config, role="Admin", token="tok_test"):
    return client_cls(
        role=role,
        token=token,
        config=backend_config,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


# =============================================================================
# BaseServiceClient behaviour (through ShipmentClient)
# =============================================================================

class TestBaseClient:
    """Routing, auth and error classification"""

    async def test_routes_by_role_and_sends_bearer(self, handler, backend_config):
        handler.on("GET", "/api/Order/ord_1", body=make_order_payload("ord_1", status=4))
        async with build(ShipmentClient, handler, backend_config, role="Seller") as client:
            status = await client.fetch_shipment_status("ord_1")

        assert status == ShipmentStatus.DELIVERED
        assert handler.last.url.host == "seller.test"
        assert handler.last.headers["Authorization"] == "Bearer tok_test"

    async def test_superadmin_uses_admin_backend(self, handler, backend_config):
        handler.on("GET", "/api/Order/ord_1", body=make_order_payload("ord_1"))
        async with build(ShipmentClient, handler, backend_config, role="SuperAdmin") as client:
            await client.fetch_shipment_status("ord_1")
        assert handler.last.url.host == "admin.test"

    async def test_no_token_no_auth_header(self, handler, backend_config):
        handler.on("GET", "/api/Order/ord_1", body=make_order_payload("ord_1"))
        async with build(ShipmentClient, handler, backend_config, token=None) as client:
            await client.fetch_shipment_status("ord_1")
        assert "Authorization" not in handler.last.headers

    async def test_404_is_not_found(self, handler, backend_config):
        handler.on("GET", "/api/Order/ord_x", status_code=404, body={"message": "missing"})
        async with build(ShipmentClient, handler, backend_config) as client:
            with pytest.raises(NotFoundError):
                await client.fetch_shipment_status("ord_x")

    async def test_server_error_is_transport_error(self, handler, backend_config):
        handler.on("PATCH", "/api/Order/ord_1/status", status_code=500, body={"message": "boom"})
        async with build(ShipmentClient, handler, backend_config) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.persist_status_transition("ord_1", ShipmentStatus.DELIVERED)
        assert exc_info.value.status_code == 500

    async def test_network_failure_is_transport_error(self, backend_config):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = ShipmentClient(
            config=backend_config,
            client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)),
        )
        async with client:
            with pytest.raises(TransportError):
                await client.fetch_shipment_status("ord_1")

    async def test_undecodable_body_is_transport_error(self, handler, backend_config):
        handler.on("GET", "/api/Order/ord_1", content=b"<html>oops</html>")
        async with build(ShipmentClient, handler, backend_config) as client:
            with pytest.raises(TransportError):
                await client.fetch_shipment_status("ord_1")

    async def test_unknown_status_is_transport_error(self, handler, backend_config):
        handler.on("GET", "/api/Order/ord_1", body=make_order_payload("ord_1", status="Teleported"))
        async with build(ShipmentClient, handler, backend_config) as client:
            with pytest.raises(TransportError):
                await client.fetch_shipment_status("ord_1")


# =============================================================================
# ShipmentClient
# =============================================================================

class TestShipmentClient:
    """Order endpoints"""

    async def test_status_transition_body(self, handler, backend_config):
        async with build(ShipmentClient, handler, backend_config) as client:
            await client.persist_status_transition("ord_1", ShipmentStatus.POSTPONED, "call tomorrow")

        assert handler.last.method == "PATCH"
        assert handler.last.url.path == "/api/Order/ord_1/status"
        assert handler.last_json() == {"status": "Postponed", "notes": "call tomorrow"}

    async def test_bulk_transition_uses_wire_code(self, handler, backend_config):
        async with build(ShipmentClient, handler, backend_config) as client:
            await client.persist_bulk_status_transition(["ord_1", "ord_2"], ShipmentStatus.RETURNED)

        assert handler.last.url.path == "/api/Order/ChangeSatuseOrders"
        assert handler.last_json() == {"statusOrder": 11, "orderIdS": ["ord_1", "ord_2"]}

    async def test_assign_agent(self, handler, backend_config):
        async with build(ShipmentClient, handler, backend_config) as client:
            await client.persist_agent_assignment("ord_1", "agt_1")
        assert handler.last.url.path == "/api/Order/ord_1/assign"
        assert handler.last_json() == {"agentId": "agt_1"}

    async def test_create_shipment(self, handler, backend_config):
        handler.on("POST", "/api/Order", body=make_order_payload("ord_new", orderNumber="ORD-9"))
        request = make_shipment_create_request(seller_id="sel_1")

        async with build(ShipmentClient, handler, backend_config) as client:
            shipment = await client.create_shipment(request.model_dump(mode="json"))

        body = handler.last_json()
        assert body["sellerId"] == "sel_1"
        assert body["customerName"] == "Test Customer"
        assert "notes" not in body
        assert shipment.shipment_id == "ord_new"
        assert shipment.order_number == "ORD-9"
        assert shipment.status == ShipmentStatus.NEW

    async def test_fetch_shipment(self, handler, backend_config):
        handler.on("GET", "/api/Order/ord_1", body=make_order_payload("ord_1", status="InWarehouse", agentId=17))
        async with build(ShipmentClient, handler, backend_config) as client:
            shipment = await client.fetch_shipment("ord_1")
        assert shipment.status == ShipmentStatus.IN_WAREHOUSE
        assert shipment.agent_id == "17"

    async def test_malformed_field_is_transport_error(self, handler, backend_config):
        handler.on("POST", "/api/Order", body=make_order_payload("ord_new", createdAt="not-a-date"))

        async with build(ShipmentClient, handler, backend_config) as client:
            with pytest.raises(TransportError):
                await client.create_shipment(make_shipment_create_request().model_dump(mode="json"))

    async def test_blank_id_rejected_without_call(self, handler, backend_config):
        async with build(ShipmentClient, handler, backend_config) as client:
            with pytest.raises(ValidationError):
                await client.fetch_shipment_status("")
        assert handler.requests == []


# =============================================================================
# DeactivationClient
# =============================================================================

class TestDeactivationClient:
    """Deactivation period endpoints"""

    async def test_agent_window_posted(self, handler, backend_config):
        to_at = datetime(2025, 3, 20, 23, 59, tzinfo=timezone.utc)
        window = DeactivationWindow(entity_id="agt_1", entity_kind=EntityKind.AGENT, to_at=to_at)

        async with build(DeactivationClient, handler, backend_config) as client:
            await client.persist_deactivation_window(EntityKind.AGENT, "agt_1", window)

        assert handler.last.url.path == "/api/Agent/SetDeactivationPeriod"
        assert handler.last_json() == {
            "agentId": "agt_1",
            "deactivationFrom": None,
            "deactivationTo": to_at.isoformat(),
        }

    async def test_seller_clear_is_delete(self, handler, backend_config):
        window = DeactivationWindow.cleared(EntityKind.SELLER, "sel_1")
        async with build(DeactivationClient, handler, backend_config) as client:
            await client.persist_deactivation_window(EntityKind.SELLER, "sel_1", window)
        assert handler.last.method == "DELETE"
        assert handler.last.url.path == "/api/Seller/sel_1/deactivation-period"

    async def test_fetch_window(self, handler, backend_config):
        handler.on("GET", "/api/Seller/sel_1", body={
            "id": "sel_1",
            "deactivationFrom": "2025-03-01T00:00:00Z",
            "deactivationTo": "2025-03-05T23:59:59Z",
        })
        async with build(DeactivationClient, handler, backend_config) as client:
            window = await client.fetch_deactivation_window(EntityKind.SELLER, "sel_1")
        assert window.shape == WindowShape.BOUNDED

    async def test_fetch_lock_flag_window(self, handler, backend_config):
        handler.on("GET", "/api/Agent/agt_1", body={"id": "agt_1", "isLock": True, "date": "2025-03-05T23:59:59Z"})
        async with build(DeactivationClient, handler, backend_config) as client:
            window = await client.fetch_deactivation_window(EntityKind.AGENT, "agt_1")
        assert window.shape == WindowShape.TO_ONLY

    async def test_fetch_invalid_dates(self, handler, backend_config):
        handler.on("GET", "/api/Agent/agt_1", body={"id": "agt_1", "deactivationTo": "not-a-date"})
        async with build(DeactivationClient, handler, backend_config) as client:
            with pytest.raises(TransportError):
                await client.fetch_deactivation_window(EntityKind.AGENT, "agt_1")


# =============================================================================
# NotificationClient
# =============================================================================

class TestNotificationClient:
    """Notification endpoints"""

    async def test_fetch_notifications(self, handler, backend_config):
        handler.on("GET", "/api/notifications", body=[{
            "id": "n1",
            "type": "status_changed",
            "title": "Order Status Changed",
            "message": "moved",
            "read": False,
            "timestamp": "2025-03-10T12:00:00Z",
            "orderId": "ord_1",
            "oldStatus": "New",
            "newStatus": 4,
        }])
        async with build(NotificationClient, handler, backend_config) as client:
            notifications = await client.fetch_notifications()

        assert len(notifications) == 1
        assert notifications[0].type == NotificationType.STATUS_CHANGED
        assert notifications[0].new_status == ShipmentStatus.DELIVERED

    async def test_counts(self, handler, backend_config):
        handler.on("GET", "/api/notifications/new-orders-count", body={"count": 3})
        handler.on("GET", "/api/notifications/today-orders-count", body=8)
        async with build(NotificationClient, handler, backend_config) as client:
            assert await client.fetch_new_orders_count() == 3
            assert await client.fetch_today_orders_count() == 8

    async def test_malformed_count(self, handler, backend_config):
        handler.on("GET", "/api/notifications/new-orders-count", body={"count": "many"})
        async with build(NotificationClient, handler, backend_config) as client:
            with pytest.raises(TransportError):
                await client.fetch_new_orders_count()

    async def test_relay_status_changed(self, handler, backend_config):
        event = StatusChangedEvent(
            order_id="ord_1",
            order_number="ORD-1",
            old_status=ShipmentStatus.NEW,
            new_status=ShipmentStatus.IN_PICKUP_STAGE,
            changed_by="Ops",
        )
        async with build(NotificationClient, handler, backend_config) as client:
            await client.relay_status_changed(event)

        assert handler.last.url.path == "/api/notifications/status-changed"
        assert handler.last_json() == {
            "orderId": "ord_1",
            "orderNumber": "ORD-1",
            "oldStatus": "New",
            "newStatus": "InPickupStage",
            "changedBy": "Ops",
            "changedById": "unknown",
        }

    async def test_read_state_endpoints(self, handler, backend_config):
        async with build(NotificationClient, handler, backend_config) as client:
            await client.persist_mark_as_read("n1")
            await client.persist_mark_all_as_read()
            await client.persist_clear_all()

        assert [(r.method, r.url.path) for r in handler.requests] == [
            ("PATCH", "/api/notifications/n1/read"),
            ("PATCH", "/api/notifications/mark-all-read"),
            ("DELETE", "/api/notifications/clear"),
        ]
