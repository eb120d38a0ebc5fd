from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import TokenBlacklist


class ITokenBlacklistRepository(ABC):
    """Token blacklist repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: TokenBlacklist) -> bool:
        """Blacklist a token. Returns False if the token was already blacklisted."""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[TokenBlacklist]:
        """Get blacklist entry by token string"""
        pass

    @abstractmethod
    async def is_blacklisted(self, token: str) -> bool:
        """True if token is blacklisted and the entry has not expired (expired entries are purged)"""
        pass

    @abstractmethod
    async def delete_expired(self) -> int:
        """Delete expired blacklist entries. Returns count."""
        pass

    @abstractmethod
    async def blacklist_user_tokens(self, user_id: UUID, reason: str) -> int:
        """Blacklist every live refresh token of a user, copying each token's expiry. Returns count."""
        pass
