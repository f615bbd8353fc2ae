#!/usr/bin/env python3
"""
Core Module for the Shipping Console

Shared components used by every service package.

COMPONENTS:
    - config/: environment-driven configuration (backend endpoints, logging)
    - exceptions.py: console error taxonomy
    - roles.py: user roles
    - service_client_base.py: base class for the backend HTTP clients

USAGE:
    from core.config import get_settings
    from core.exceptions import ValidationError

    settings = get_settings()
    settings.logging.configure()
"""

from .exceptions import (
    ConsoleError,
    NotFoundError,
    PermissionDeniedError,
    TransportError,
    ValidationError,
)
from .roles import UserRole, coerce_role

# Export public API
__all__ = [
    "ConsoleError",
    "NotFoundError",
    "PermissionDeniedError",
    "TransportError",
    "ValidationError",
    "UserRole",
    "coerce_role",
]

__version__ = "1.0.0"
