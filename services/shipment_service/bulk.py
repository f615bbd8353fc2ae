"""
Bulk Transition Coordinator

Applies one target status to an ordered list of shipments. Every item is
validated against its freshly fetched status and reported on its own; one
failure never aborts the rest of the batch.
"""
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, Union

from core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    TransportError,
    ValidationError,
)
from core.roles import UserRole, coerce_role

from .models import BulkFailureReason, BulkStatusChangeResult, ShipmentStatus
from .protocols import BulkShipmentBackendProtocol, ShipmentBackendProtocol
from .status_taxonomy import parse_status
from .transition_policy import can_change_status, validate_transition

logger = logging.getLogger(__name__)

# (shipment_id, old_status, new_status) -> sync warning or None
ItemSucceededHook = Callable[[str, ShipmentStatus, ShipmentStatus], Awaitable[Optional[str]]]


class BulkTransitionCoordinator:
    """Sequential, per-item bulk status changes"""

    def __init__(
        self,
        backend: ShipmentBackendProtocol,
        prefer_batch: bool = False,
        on_item_succeeded: Optional[ItemSucceededHook] = None
    ):
        """
        Args:
            backend: Shipment backend
            prefer_batch: Persist validated items with one batch call when the
                backend offers it; a failed batch fails each of those items
            on_item_succeeded: Awaited once per persisted item, in order; a
                returned warning is collected into the result
        """
        self.backend = backend
        self.prefer_batch = prefer_batch
        self.on_item_succeeded = on_item_succeeded

    @property
    def uses_batch(self) -> bool:
        return self.prefer_batch and isinstance(self.backend, BulkShipmentBackendProtocol)

    async def apply_bulk(
        self,
        role: Union[UserRole, str],
        target_status: Union[ShipmentStatus, str],
        shipment_ids: Sequence[str]
    ) -> BulkStatusChangeResult:
        """
        Apply target_status to every shipment in shipment_ids

        Raises:
            PermissionDeniedError: role may not change statuses (no calls made)
            ValidationError: target_status is not a shipment status
        """
        role = coerce_role(role)
        if not can_change_status(role):
            raise PermissionDeniedError(f"Role {role.value} cannot change shipment status")
        target = parse_status(target_status)

        result = BulkStatusChangeResult(target_status=target)
        validated: List[Tuple[str, ShipmentStatus]] = []
        seen = set()

        for shipment_id in shipment_ids:
            if shipment_id in seen:
                continue
            seen.add(shipment_id)

            current = await self._fetch_current(shipment_id, result)
            if current is None:
                continue

            try:
                validate_transition(role, current, target)
            except ValidationError as e:
                result.record_failure(shipment_id, BulkFailureReason.SAME_STATUS, str(e))
                continue
            except PermissionDeniedError as e:
                result.record_failure(shipment_id, BulkFailureReason.NOT_PERMITTED, str(e))
                continue

            if self.uses_batch:
                validated.append((shipment_id, current))
            else:
                await self._persist_one(shipment_id, current, target, result)

        if validated:
            await self._persist_batch(validated, target, result)

        logger.info(
            f"Bulk status change to {target.value}: "
            f"{len(result.succeeded)} succeeded, {len(result.failed)} failed"
        )
        return result

    async def _fetch_current(
        self,
        shipment_id: str,
        result: BulkStatusChangeResult
    ) -> Optional[ShipmentStatus]:
        try:
            return await self.backend.fetch_shipment_status(shipment_id)
        except (NotFoundError, ValidationError) as e:
            result.record_failure(shipment_id, BulkFailureReason.NOT_FOUND, str(e))
        except TransportError as e:
            logger.error(f"Failed to fetch status of shipment {shipment_id}: {e}")
            result.record_failure(shipment_id, BulkFailureReason.TRANSPORT_ERROR, str(e))
        return None

    async def _persist_one(
        self,
        shipment_id: str,
        current: ShipmentStatus,
        target: ShipmentStatus,
        result: BulkStatusChangeResult
    ) -> None:
        try:
            await self.backend.persist_status_transition(shipment_id, target)
        except NotFoundError as e:
            result.record_failure(shipment_id, BulkFailureReason.NOT_FOUND, str(e))
            return
        except TransportError as e:
            logger.error(f"Failed to persist status of shipment {shipment_id}: {e}")
            result.record_failure(shipment_id, BulkFailureReason.TRANSPORT_ERROR, str(e))
            return

        result.record_success(shipment_id)
        await self._item_succeeded(shipment_id, current, target, result)

    async def _persist_batch(
        self,
        validated: List[Tuple[str, ShipmentStatus]],
        target: ShipmentStatus,
        result: BulkStatusChangeResult
    ) -> None:
        try:
            await self.backend.persist_bulk_status_transition(
                [shipment_id for shipment_id, _ in validated], target
            )
        except (NotFoundError, TransportError) as e:
            logger.error(f"Batch status change to {target.value} failed: {e}")
            reason = (
                BulkFailureReason.NOT_FOUND if isinstance(e, NotFoundError)
                else BulkFailureReason.TRANSPORT_ERROR
            )
            for shipment_id, _ in validated:
                result.record_failure(shipment_id, reason, str(e))
            return

        for shipment_id, current in validated:
            result.record_success(shipment_id)
            await self._item_succeeded(shipment_id, current, target, result)

    async def _item_succeeded(
        self,
        shipment_id: str,
        current: ShipmentStatus,
        target: ShipmentStatus,
        result: BulkStatusChangeResult
    ) -> None:
        if not self.on_item_succeeded:
            return
        warning = await self.on_item_succeeded(shipment_id, current, target)
        if warning:
            result.warnings.append(warning)
