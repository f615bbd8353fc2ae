"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/  : Component tests (services with mocked backends, httpx MockTransport)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys
from typing import List

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

# Set testing environment BEFORE any imports of core.config
os.environ.setdefault("ENV", "testing")

# Import shared fixtures from tests/fixtures
from tests.fixtures import (
    make_backend_config,
    make_shipment_id,
)


# =============================================================================
# Test Configuration
# =============================================================================

@pytest.fixture
def backend_config():
    """Backend endpoints pointing at unroutable test hosts"""
    return make_backend_config()


# =============================================================================
# Test Data
# =============================================================================

@pytest.fixture
def shipment_ids() -> List[str]:
    """Five unique shipment ids"""
    return [make_shipment_id() for _ in range(5)]


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "component: Component tests")
    config.addinivalue_line("markers", "unit: Unit tests")
