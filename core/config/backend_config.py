#!/usr/bin/env python3
"""Backend endpoint configuration

The console talks to one REST backend per role family. Admin and SuperAdmin
share the admin backend; sellers and agents each have their own.
"""
import os
from dataclasses import dataclass
from typing import Optional

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class BackendConfig:
    """Role backend endpoints"""

    # ===========================================
    # Role backends
    # ===========================================
    admin_api_url: str = "http://localhost:5000/api"
    seller_api_url: str = "http://localhost:8080/api"
    agent_api_url: str = "http://localhost:8081/api"

    # ===========================================
    # Transport
    # ===========================================
    http_timeout: float = 30.0
    use_bulk_endpoint: bool = False

    def url_for_role(self, role: Optional[str]) -> str:
        """Resolve the backend base URL for a role name (e.g. "SuperAdmin")"""
        role = getattr(role, "value", role)
        routes = {
            "SuperAdmin": self.admin_api_url,
            "Admin": self.admin_api_url,
            "Seller": self.seller_api_url,
            "Agent": self.agent_api_url,
        }
        return routes.get(role, self.agent_api_url).rstrip('/')

    @classmethod
    def from_env(cls) -> 'BackendConfig':
        """Load backend configuration from environment variables"""
        return cls(
            admin_api_url=os.getenv("ADMIN_API_URL", "http://localhost:5000/api"),
            seller_api_url=os.getenv("SELLER_API_URL", "http://localhost:8080/api"),
            agent_api_url=os.getenv("AGENT_API_URL", "http://localhost:8081/api"),
            http_timeout=_float(os.getenv("HTTP_TIMEOUT", "30"), 30.0),
            use_bulk_endpoint=_bool(os.getenv("USE_BULK_ENDPOINT", "false")),
        )
