"""
Deactivation Backend Client

HTTP client for the admin backend's account deactivation endpoints
"""

import logging
from typing import Any, Dict, Optional

import pydantic

from core.exceptions import TransportError
from core.service_client_base import BaseServiceClient

from ..models import DeactivationWindow, EntityKind, WindowShape

logger = logging.getLogger(__name__)


# Resource path per account kind
_RESOURCES = {
    EntityKind.AGENT: "Agent",
    EntityKind.SELLER: "Seller",
    EntityKind.ADMIN: "User",
}


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class DeactivationClient(BaseServiceClient):
    """Client for account deactivation periods (admin backend)"""

    service_name = "deactivation"

    def _window_from_payload(
        self,
        entity_kind: EntityKind,
        entity_id: str,
        data: Dict[str, Any]
    ) -> DeactivationWindow:
        if not isinstance(data, dict):
            raise TransportError(f"Malformed {entity_kind.value} payload for {entity_id}")

        from_raw = data.get("deactivationFrom")
        to_raw = data.get("deactivationTo")
        # Agent listings only expose a lock flag and its end date
        if to_raw is None and data.get("isLock"):
            to_raw = data.get("date")

        try:
            return DeactivationWindow(
                entity_id=entity_id,
                entity_kind=entity_kind,
                from_at=from_raw or None,
                to_at=to_raw or None,
            )
        except pydantic.ValidationError as e:
            raise TransportError(f"Invalid deactivation dates for {entity_id}: {e}") from e

    async def fetch_deactivation_window(
        self,
        entity_kind: EntityKind,
        entity_id: str
    ) -> DeactivationWindow:
        """Read the window from the account record"""
        data = await self.get(f"/{_RESOURCES[entity_kind]}/{entity_id}")
        return self._window_from_payload(entity_kind, entity_id, data)

    async def persist_deactivation_window(
        self,
        entity_kind: EntityKind,
        entity_id: str,
        window: DeactivationWindow
    ) -> None:
        """Store or clear the window"""
        if entity_kind == EntityKind.AGENT:
            # Agents clear by posting null bounds
            await self.post(
                "/Agent/SetDeactivationPeriod",
                json={
                    "agentId": entity_id,
                    "deactivationFrom": _iso(window.from_at),
                    "deactivationTo": _iso(window.to_at),
                },
            )
            return

        path = f"/{_RESOURCES[entity_kind]}/{entity_id}/deactivation-period"
        if window.shape == WindowShape.UNSET:
            await self.delete(path)
        else:
            await self.post(
                path,
                json={"fromDate": _iso(window.from_at), "toDate": _iso(window.to_at)},
            )
        logger.debug(f"Persisted {window.shape.value} window for {entity_kind.value} {entity_id}")
