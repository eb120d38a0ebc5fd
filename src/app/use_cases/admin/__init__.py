"""
Admin Use Cases

Maintenance operations for internal service integrations.
"""

from .purge_expired_use_case import PurgeExpiredResponse, PurgeExpiredUseCase

__all__ = [
    "PurgeExpiredUseCase",
    "PurgeExpiredResponse",
]
