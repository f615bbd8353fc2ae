"""
Deactivation Service Models

Scheduled account deactivation windows for agents, sellers and admins.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from enum import Enum


class EntityKind(str, Enum):
    """Kinds of accounts that can be deactivated"""
    AGENT = "Agent"
    SELLER = "Seller"
    ADMIN = "Admin"


class WindowShape(str, Enum):
    """Which bounds a window carries"""
    UNSET = "unset"
    FROM_ONLY = "from_only"
    TO_ONLY = "to_only"  # deactivated immediately until `to`
    BOUNDED = "bounded"


class DeactivationState(str, Enum):
    """Classification of an account at a given instant"""
    ACTIVE = "active"
    CURRENTLY_DEACTIVATED = "currently_deactivated"
    SCHEDULED_FUTURE = "scheduled_future"


class DeactivationPrecision(str, Enum):
    """How window bounds are compared with now"""
    INSTANT = "instant"
    CALENDAR_DAY = "calendar_day"  # from -> start of day, to -> end of day


class DeactivationWindow(BaseModel):
    """Deactivation interval for one account; both bounds optional"""
    model_config = ConfigDict(frozen=True)

    entity_id: str
    entity_kind: EntityKind
    from_at: Optional[datetime] = None
    to_at: Optional[datetime] = None

    @property
    def shape(self) -> WindowShape:
        if self.from_at is None and self.to_at is None:
            return WindowShape.UNSET
        if self.to_at is None:
            return WindowShape.FROM_ONLY
        if self.from_at is None:
            return WindowShape.TO_ONLY
        return WindowShape.BOUNDED

    @classmethod
    def cleared(cls, entity_kind: EntityKind, entity_id: str) -> "DeactivationWindow":
        return cls(entity_id=entity_id, entity_kind=entity_kind)


class DeactivationResponse(BaseModel):
    """Result of scheduling or clearing a window"""
    window: DeactivationWindow
    state: DeactivationState
    message: str
