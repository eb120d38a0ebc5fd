"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .logout_all_sessions_use_case import LogoutAllSessionsUseCase
from .authenticate_use_case import AuthenticateUseCase
from .session_manager import SessionManager
from .policy import AuthPolicy
from .dtos import (
    RegisterCommand,
    LoginCommand,
    ClientInfo,
    UserInfo,
    TokenPair,
    AuthResponse,
    LogoutResponse,
    LogoutAllResponse,
    AuthenticatedUser,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "LogoutAllSessionsUseCase",
    "AuthenticateUseCase",
    # Session pool and policy
    "SessionManager",
    "AuthPolicy",
    # DTOs - Commands
    "RegisterCommand",
    "LoginCommand",
    "ClientInfo",
    # DTOs - Responses
    "UserInfo",
    "TokenPair",
    "AuthResponse",
    "LogoutResponse",
    "LogoutAllResponse",
    "AuthenticatedUser",
]
