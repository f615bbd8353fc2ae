"""
Deactivation Service Clients Module

HTTP clients for the account deactivation backend
"""

from .deactivation_client import DeactivationClient

__all__ = [
    "DeactivationClient",
]
