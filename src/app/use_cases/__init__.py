"""
Use Cases

Organized into domain folders:
- auth/: Authentication and session lifecycle
- admin/: Maintenance operations
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    LogoutAllSessionsUseCase,
    AuthenticateUseCase,
)
from .admin import PurgeExpiredUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "LogoutAllSessionsUseCase",
    "AuthenticateUseCase",
    # Admin
    "PurgeExpiredUseCase",
]
