"""
Deactivation Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Protocol, runtime_checkable

from .models import DeactivationWindow, EntityKind


@runtime_checkable
class DeactivationBackendProtocol(Protocol):
    """
    Interface for the account deactivation backend.

    Implementations raise NotFoundError / TransportError from core.exceptions.
    """

    async def fetch_deactivation_window(
        self,
        entity_kind: EntityKind,
        entity_id: str
    ) -> DeactivationWindow:
        """Fetch the stored window (UNSET when none is stored)"""
        ...

    async def persist_deactivation_window(
        self,
        entity_kind: EntityKind,
        entity_id: str,
        window: DeactivationWindow
    ) -> None:
        """Store a window; an UNSET window clears the stored one"""
        ...
