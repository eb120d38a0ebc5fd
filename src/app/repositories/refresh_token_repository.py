from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import RefreshToken


class IRefreshTokenRepository(ABC):
    """Refresh token repository interface - application layer"""

    @abstractmethod
    async def create(self, refresh_token: RefreshToken) -> RefreshToken:
        """Persist a newly issued refresh token"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        """Get stored refresh token by its token string"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[RefreshToken]:
        """Get all stored refresh tokens for a user"""
        pass

    @abstractmethod
    async def delete_by_token(self, token: str) -> bool:
        """
        Delete a refresh token. Idempotent.

        Returns True only for the caller whose statement removed the row,
        so concurrent callers consuming the same token see exactly one True.
        """
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete all refresh tokens for a user. Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self) -> int:
        """Delete refresh tokens whose expires_at has passed. Returns count."""
        pass

    @abstractmethod
    async def count_by_user_id(self, user_id: UUID) -> int:
        """Count stored refresh tokens for a user"""
        pass

    @abstractmethod
    async def delete_oldest_by_user_id(self, user_id: UUID) -> bool:
        """Delete the user's earliest-created refresh token. No-op if none."""
        pass
