"""
Common/Shared Fixtures

Base factories and generators used across the test layers.
"""
import uuid
from datetime import date, datetime, timezone


def make_seller_id() -> str:
    """Generate a unique seller ID"""
    return f"sel_test_{uuid.uuid4().hex[:12]}"


def make_shipment_id() -> str:
    """Generate a unique shipment ID"""
    return f"ord_test_{uuid.uuid4().hex[:12]}"


def make_order_number() -> str:
    """Generate a unique human-facing order number"""
    return f"ORD-{uuid.uuid4().hex[:8].upper()}"


def today() -> date:
    return datetime.now(timezone.utc).date()


def make_backend_config(use_bulk_endpoint: bool = False):
    """Backend endpoints pointing at unroutable test hosts"""
    from core.config import BackendConfig

    return BackendConfig(
        admin_api_url="http://admin.test/api",
        seller_api_url="http://seller.test/api",
        agent_api_url="http://agent.test/api",
        http_timeout=5.0,
        use_bulk_endpoint=use_bulk_endpoint,
    )
