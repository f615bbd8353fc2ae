"""
Deactivation Service Business Logic

Scheduling and clearing of temporary account deactivation windows. The
evaluator is only used for display and authorization decisions; the write
path accepts the administrator's dates once basic validation passes.
"""

from typing import Optional, Union
from datetime import date, datetime, timezone
import logging

from core.exceptions import ValidationError

from .evaluator import as_utc, end_of_day, get_deactivation_state, start_of_day
from .models import (
    DeactivationPrecision,
    DeactivationResponse,
    DeactivationState,
    DeactivationWindow,
    EntityKind,
)
from .protocols import DeactivationBackendProtocol

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


def _coerce_kind(kind: Union[EntityKind, str]) -> EntityKind:
    if isinstance(kind, EntityKind):
        return kind
    for member in EntityKind:
        if str(kind).strip().lower() == member.value.lower():
            return member
    raise ValidationError(f"Unknown entity kind: {kind!r}")


def _to_datetime(value: DateLike, end: bool) -> datetime:
    """Dates cover the whole calendar day (UTC)"""
    if isinstance(value, datetime):
        return as_utc(value)
    moment = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return end_of_day(moment) if end else start_of_day(moment)


class DeactivationService:
    """
    Account deactivation business logic

    Validates schedule requests, persists them through the backend and
    classifies accounts with the window evaluator.
    """

    def __init__(
        self,
        backend: DeactivationBackendProtocol,
        precision: DeactivationPrecision = DeactivationPrecision.INSTANT
    ):
        """
        Initialize Deactivation Service

        Args:
            backend: Deactivation backend (dependency injection)
            precision: Precision used when classifying windows
        """
        self.backend = backend
        self.precision = precision

    def get_deactivation_state(
        self,
        window: DeactivationWindow,
        now: Optional[datetime] = None
    ) -> DeactivationState:
        """Classify a window at now using the configured precision"""
        return get_deactivation_state(window, now, self.precision)

    async def get_deactivation_window(
        self,
        entity_kind: Union[EntityKind, str],
        entity_id: str
    ) -> DeactivationWindow:
        """Fetch the stored window for an account"""
        if not entity_id:
            raise ValidationError("Entity ID is required")
        return await self.backend.fetch_deactivation_window(_coerce_kind(entity_kind), entity_id)

    async def get_entity_state(
        self,
        entity_kind: Union[EntityKind, str],
        entity_id: str,
        now: Optional[datetime] = None
    ) -> DeactivationState:
        """Fetch an account's window and classify it"""
        window = await self.get_deactivation_window(entity_kind, entity_id)
        return self.get_deactivation_state(window, now)

    async def schedule_deactivation(
        self,
        entity_kind: Union[EntityKind, str],
        entity_id: str,
        to_date: Optional[DateLike],
        from_date: Optional[DateLike] = None,
        now: Optional[datetime] = None
    ) -> DeactivationResponse:
        """
        Schedule (or overwrite) a deactivation window

        Without from_date the account is deactivated immediately until to_date.

        Raises:
            ValidationError: to_date missing, not in the future, or before from_date
            NotFoundError: account does not exist
            TransportError: backend call failed
        """
        kind = _coerce_kind(entity_kind)
        if not entity_id:
            raise ValidationError("Entity ID is required")
        if to_date is None:
            raise ValidationError("Please select an end date")

        now = as_utc(now) if now is not None else datetime.now(timezone.utc)
        to_at = _to_datetime(to_date, end=True)
        if to_at <= now:
            logger.warning(f"Rejected deactivation for {kind.value} {entity_id}: end date {to_at} is past")
            raise ValidationError("End date must be in the future")

        from_at = _to_datetime(from_date, end=False) if from_date is not None else None
        if from_at is not None and to_at < from_at:
            raise ValidationError("End date must be after start date")

        window = DeactivationWindow(
            entity_id=entity_id,
            entity_kind=kind,
            from_at=from_at,
            to_at=to_at,
        )
        await self.backend.persist_deactivation_window(kind, entity_id, window)
        logger.info(
            f"Deactivation period set for {kind.value} {entity_id}: "
            f"{from_at.isoformat() if from_at else 'now'} -> {to_at.isoformat()}"
        )

        return DeactivationResponse(
            window=window,
            state=self.get_deactivation_state(window, now),
            message="Deactivation period set successfully",
        )

    async def clear_deactivation(
        self,
        entity_kind: Union[EntityKind, str],
        entity_id: str
    ) -> DeactivationResponse:
        """
        Clear an account's window (both bounds absent)

        Raises:
            NotFoundError: account does not exist
            TransportError: backend call failed
        """
        kind = _coerce_kind(entity_kind)
        if not entity_id:
            raise ValidationError("Entity ID is required")

        window = DeactivationWindow.cleared(kind, entity_id)
        await self.backend.persist_deactivation_window(kind, entity_id, window)
        logger.info(f"Deactivation period cleared for {kind.value} {entity_id}")

        return DeactivationResponse(
            window=window,
            state=DeactivationState.ACTIVE,
            message="Deactivation period cleared",
        )
