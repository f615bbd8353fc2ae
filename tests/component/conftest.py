"""
Component Test Layer Configuration

Services wired to in-memory mock backends; HTTP clients exercised through
httpx.MockTransport.

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ.setdefault("ENV", "testing")

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import (
    MockBulkShipmentBackend,
    MockDeactivationBackend,
    MockNotificationBackend,
    MockShipmentBackend,
    MockShipmentListener,
)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "component: Component tests with mocked backends")


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_shipment_backend():
    """Fresh MockShipmentBackend"""
    return MockShipmentBackend()


@pytest.fixture
def mock_bulk_backend():
    """MockShipmentBackend that also exposes the batch endpoint"""
    return MockBulkShipmentBackend()


@pytest.fixture
def mock_listener():
    """Records shipment events"""
    return MockShipmentListener()


@pytest.fixture
def mock_deactivation_backend():
    """Fresh MockDeactivationBackend"""
    return MockDeactivationBackend()


@pytest.fixture
def mock_notification_backend():
    """Fresh MockNotificationBackend"""
    return MockNotificationBackend()
