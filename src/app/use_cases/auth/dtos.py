"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User, UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Registration intent, mapped from the HTTP request by the API layer"""

    email: str
    first_name: str
    last_name: str
    password: str


class LoginCommand(BaseModel):
    """Login intent"""

    email: str
    password: str


class ClientInfo(BaseModel):
    """Request metadata stored with sessions and login attempts"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    device_info: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User information in authentication responses (never the password)"""

    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=UserRole(user.role).value,
            is_active=user.is_active,
            created_at=user.created_at,
        )


class TokenPair(BaseModel):
    """Access + refresh token pair; also the refresh use case response"""

    access_token: str
    refresh_token: str


class AuthResponse(BaseModel):
    """Response for register and login use cases"""

    user: UserInfo
    access_token: str
    refresh_token: str


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    message: str


class LogoutAllResponse(BaseModel):
    """Response for logout-all-sessions use case"""

    message: str
    revoked_count: int


class AuthenticatedUser(BaseModel):
    """Identity resolved from a bearer access token"""

    user_id: str
    user: UserInfo
    role: str
