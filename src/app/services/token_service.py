from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class TokenClaims(BaseModel):
    """Identity claims carried by access and refresh tokens"""

    user_id: str
    email: str
    role: str


class ITokenService(ABC):
    """Signed token issuance and verification - application layer"""

    @abstractmethod
    def issue_access_token(self, claims: TokenClaims) -> str:
        """Issue a short-lived access token"""
        pass

    @abstractmethod
    def issue_refresh_token(self, claims: TokenClaims) -> str:
        """Issue a long-lived refresh token"""
        pass

    @abstractmethod
    def verify_access_token(self, token: str) -> Optional[TokenClaims]:
        """Return claims, or None if the token is invalid or expired"""
        pass

    @abstractmethod
    def verify_refresh_token(self, token: str) -> Optional[TokenClaims]:
        """Return claims, or None if the token is invalid or expired"""
        pass
