"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import UserRole

from .user import User, UserPublic
from .refresh_token import RefreshToken
from .token_blacklist import TokenBlacklist
from .login_attempt import LoginAttempt

__all__ = [
    # Enums
    "UserRole",
    # Entities
    "User",
    "UserPublic",
    "RefreshToken",
    "TokenBlacklist",
    "LoginAttempt",
]
