"""
Base Backend Client for the Shipping Console

Base class for every backend client. Handles role routing, bearer auth and
maps transport failures onto the console error taxonomy.
"""

import httpx
import logging
from typing import Optional, Dict, Any
from abc import ABC

from core.config import BackendConfig, get_settings
from core.exceptions import NotFoundError, TransportError

logger = logging.getLogger(__name__)


class BaseServiceClient(ABC):
    """
    Backend client base class

    Handles:
    1. Role -> backend URL routing
    2. Bearer token authentication
    3. HTTP client management
    4. Error classification (NotFoundError / TransportError)

    Example:
        class ShipmentClient(BaseServiceClient):
            service_name = "shipments"

            async def fetch_shipment(self, shipment_id: str):
                return await self.get(f"/Order/{shipment_id}")
    """

    # Subclasses must define this
    service_name: str = None  # e.g. "shipments"

    def __init__(
        self,
        role: str = "Admin",
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        config: Optional[BackendConfig] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the backend client

        Args:
            role: Acting role, selects the backend when base_url is not given
            base_url: Explicit backend base URL
            token: Bearer token attached to every request
            timeout: Request timeout in seconds
            config: Backend configuration (defaults to global settings)
            client: Pre-built httpx.AsyncClient (tests pass one with a MockTransport)
        """
        if not self.service_name:
            raise ValueError(f"{self.__class__.__name__} must define 'service_name'")

        self.config = config or get_settings().backend
        self.role = role

        if base_url:
            self.base_url = base_url.rstrip('/')
        else:
            self.base_url = self.config.url_for_role(role)

        default_headers = self._build_default_headers(token)

        if client is not None:
            client.headers.update(default_headers)
            self.client = client
        else:
            self.client = httpx.AsyncClient(
                timeout=timeout or self.config.http_timeout,
                headers=default_headers
            )

        logger.debug(
            f"Initialized {self.service_name} client: {self.base_url} "
            f"(role={role}, auth={'bearer' if token else 'none'})"
        )

    def _build_default_headers(self, token: Optional[str]) -> Dict[str, str]:
        """Build default request headers"""
        headers = {
            "Content-Type": "application/json",
            "User-Agent": f"shipping-console/{self.service_name}"
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
        logger.debug(f"Closed {self.service_name} client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ========================================
    # HTTP helpers
    # ========================================

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Send a request and decode the JSON body

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            NotFoundError: backend answered 404
            TransportError: any other failure at or below the HTTP boundary
        """
        url = f"{self.base_url}{path if path.startswith('/') else '/' + path}"
        try:
            response = await self.client.request(method, url, json=json, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"{self.service_name}: timeout on {method} {url}")
            raise TransportError(f"Request timed out: {e}", url=url) from e
        except httpx.HTTPError as e:
            logger.error(f"{self.service_name}: {method} {url} failed: {e}")
            raise TransportError(f"Request failed: {e}", url=url) from e

        if response.status_code == 404:
            logger.warning(f"{self.service_name}: not found {method} {url}")
            raise NotFoundError(f"Not found: {path}")

        if response.status_code >= 400:
            logger.error(
                f"{self.service_name}: {method} {url} returned "
                f"{response.status_code} - {response.text}"
            )
            raise TransportError(
                f"API Error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                url=url
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON from {url}", status_code=response.status_code, url=url
            ) from e

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET request"""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        """POST request"""
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        """PATCH request"""
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        """DELETE request"""
        return await self.request("DELETE", path)


__all__ = ["BaseServiceClient"]
