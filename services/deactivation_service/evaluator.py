"""
Deactivation window evaluator

Pure functions classifying an account from its window and the current
instant. Naive datetimes are read as UTC. Both bounds are always compared at
the same precision.
"""
from datetime import datetime, time, timezone
from typing import Optional, Tuple

from .models import (
    DeactivationPrecision,
    DeactivationState,
    DeactivationWindow,
    WindowShape,
)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _now(now: Optional[datetime]) -> datetime:
    return as_utc(now) if now is not None else datetime.now(timezone.utc)


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max, tzinfo=value.tzinfo)


def _bounds(
    window: DeactivationWindow,
    precision: DeactivationPrecision
) -> Tuple[Optional[datetime], Optional[datetime]]:
    start = as_utc(window.from_at) if window.from_at is not None else None
    end = as_utc(window.to_at) if window.to_at is not None else None
    if precision == DeactivationPrecision.CALENDAR_DAY:
        start = start_of_day(start) if start is not None else None
        end = end_of_day(end) if end is not None else None
    return start, end


def is_currently_deactivated(
    window: DeactivationWindow,
    now: Optional[datetime] = None,
    precision: DeactivationPrecision = DeactivationPrecision.INSTANT
) -> bool:
    """
    True iff now falls inside the window

    A window with only an end date is deactivated from now until that end.
    A window with only a start date stays deactivated from the start onwards.
    """
    now = _now(now)
    start, end = _bounds(window, precision)
    shape = window.shape

    if shape == WindowShape.UNSET:
        return False
    if shape == WindowShape.TO_ONLY:
        return now <= end
    if shape == WindowShape.FROM_ONLY:
        return start <= now
    return start <= now <= end


def is_scheduled_for_future(
    window: DeactivationWindow,
    now: Optional[datetime] = None,
    precision: DeactivationPrecision = DeactivationPrecision.INSTANT
) -> bool:
    """True iff the window has a start that lies after now"""
    start, _ = _bounds(window, precision)
    return start is not None and start > _now(now)


def is_active(
    window: DeactivationWindow,
    now: Optional[datetime] = None,
    precision: DeactivationPrecision = DeactivationPrecision.INSTANT
) -> bool:
    return not is_currently_deactivated(window, now, precision)


def get_deactivation_state(
    window: DeactivationWindow,
    now: Optional[datetime] = None,
    precision: DeactivationPrecision = DeactivationPrecision.INSTANT
) -> DeactivationState:
    """Classify the account as active, currently deactivated or scheduled"""
    now = _now(now)
    if is_currently_deactivated(window, now, precision):
        return DeactivationState.CURRENTLY_DEACTIVATED
    if is_scheduled_for_future(window, now, precision):
        return DeactivationState.SCHEDULED_FUTURE
    return DeactivationState.ACTIVE
