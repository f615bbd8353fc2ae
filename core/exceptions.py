"""
Console error taxonomy

Every failure the core reports belongs to one of four kinds. Callers pick the
user-facing message by kind; the core only guarantees the classification.
"""
from typing import Optional


class ConsoleError(Exception):
    """Base exception for shipping console errors"""
    pass


class ValidationError(ConsoleError):
    """Request is malformed or breaks an invariant checked before any network call"""
    pass


class PermissionDeniedError(ConsoleError):
    """The acting role may not perform the requested operation"""
    pass


class NotFoundError(ConsoleError):
    """Referenced shipment or entity does not resolve at the backend"""
    pass


class TransportError(ConsoleError):
    """Backend call failed at or below the HTTP boundary

    Covers network failures, timeouts, non-2xx responses and undecodable
    bodies. ``status_code`` and ``url`` are kept for logging only.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


__all__ = [
    "ConsoleError",
    "ValidationError",
    "PermissionDeniedError",
    "NotFoundError",
    "TransportError",
]
