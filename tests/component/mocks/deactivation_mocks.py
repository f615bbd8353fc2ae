"""
Deactivation Service - Mock Dependencies
"""
from typing import Dict, Tuple

from core.exceptions import NotFoundError
from services.deactivation_service.models import DeactivationWindow, EntityKind

from .base import CallRecorder


class MockDeactivationBackend(CallRecorder):
    """Mock deactivation backend (DeactivationBackendProtocol)

    Accounts must be registered with set_account; others raise NotFoundError.
    """

    def __init__(self):
        super().__init__()
        self._windows: Dict[Tuple[EntityKind, str], DeactivationWindow] = {}

    def set_account(self, entity_kind: EntityKind, entity_id: str, window: DeactivationWindow = None):
        self._windows[(entity_kind, entity_id)] = window or DeactivationWindow.cleared(entity_kind, entity_id)

    def window_of(self, entity_kind: EntityKind, entity_id: str) -> DeactivationWindow:
        return self._windows[(entity_kind, entity_id)]

    async def fetch_deactivation_window(self, entity_kind: EntityKind, entity_id: str) -> DeactivationWindow:
        self._log_call("fetch_deactivation_window", entity_kind=entity_kind, entity_id=entity_id)
        if (entity_kind, entity_id) not in self._windows:
            raise NotFoundError(f"Not found: {entity_kind.value} {entity_id}")
        return self._windows[(entity_kind, entity_id)]

    async def persist_deactivation_window(
        self,
        entity_kind: EntityKind,
        entity_id: str,
        window: DeactivationWindow
    ) -> None:
        self._log_call(
            "persist_deactivation_window",
            entity_kind=entity_kind, entity_id=entity_id, window=window,
        )
        if (entity_kind, entity_id) not in self._windows:
            raise NotFoundError(f"Not found: {entity_kind.value} {entity_id}")
        self._windows[(entity_kind, entity_id)] = window
