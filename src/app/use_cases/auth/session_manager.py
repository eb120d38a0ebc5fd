"""
Session Manager

Issues access/refresh token pairs and keeps each user's session pool bounded.
Shared by register, login and refresh.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from src.app.services.token_service import ITokenService, TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import RefreshToken, User, UserRole
from .dtos import ClientInfo, TokenPair
from .policy import AuthPolicy

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Business Rules:
    - Token claims are {user_id, email, role} taken from the stored user
    - Session pool is bounded by evict-then-insert: when the user already
      holds max_sessions refresh tokens, the oldest one is deleted before
      the new one is stored. Issuance is never rejected.
    - Stored refresh tokens expire after refresh_token_days

    Must be used inside an entered UnitOfWork; the caller commits.
    """

    def __init__(self, uow: UnitOfWork, token_service: ITokenService, policy: AuthPolicy):
        self.uow = uow
        self.token_service = token_service
        self.policy = policy

    async def issue(self, user: User, client: Optional[ClientInfo] = None) -> TokenPair:
        client = client or ClientInfo()
        claims = TokenClaims(
            user_id=str(user.id),
            email=user.email,
            role=UserRole(user.role).value,
        )
        tokens = TokenPair(
            access_token=self.token_service.issue_access_token(claims),
            refresh_token=self.token_service.issue_refresh_token(claims),
        )

        await self.manage_user_sessions(user.id)

        await self.uow.refresh_tokens.create(
            RefreshToken(
                token=tokens.refresh_token,
                user_id=user.id,
                expires_at=utcnow() + timedelta(days=self.policy.refresh_token_days),
                device_info=client.device_info,
                ip_address=client.ip_address,
                user_agent=client.user_agent,
            )
        )
        return tokens

    async def manage_user_sessions(self, user_id: UUID) -> None:
        session_count = await self.uow.refresh_tokens.count_by_user_id(user_id)
        if session_count >= self.policy.max_sessions:
            evicted = await self.uow.refresh_tokens.delete_oldest_by_user_id(user_id)
            if evicted:
                logger.info(f"Evicted oldest session for user {user_id}")
