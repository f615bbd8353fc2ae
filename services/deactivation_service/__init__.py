"""
Deactivation Service Package

Temporary account deactivation windows and their evaluator.
"""

from .models import *
from .deactivation_service import DeactivationService
from .evaluator import (
    get_deactivation_state,
    is_active,
    is_currently_deactivated,
    is_scheduled_for_future,
)

__all__ = [
    "DeactivationService",
    "DeactivationWindow",
    "DeactivationResponse",
    "DeactivationState",
    "DeactivationPrecision",
    "EntityKind",
    "WindowShape",
    "get_deactivation_state",
    "is_active",
    "is_currently_deactivated",
    "is_scheduled_for_future",
]
