"""
Refresh Token Use Case

Handles token refresh with single-use refresh token rotation.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.token_service import ITokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import ClientInfo, TokenPair
from .policy import AuthPolicy
from .session_manager import SessionManager

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Blacklisted token: TOKEN_REVOKED; an expired blacklist entry is purged
      and the purge is committed whatever the outcome
    - Bad signature, malformed or expired JWT: INVALID_TOKEN
    - No stored row (already rotated, logged out, evicted): INVALID_REFRESH_TOKEN
    - Stored row past expires_at: row deleted, REFRESH_TOKEN_EXPIRED
    - User missing or inactive: USER_INACTIVE
    - Rotation: the old row is deleted before a new pair is issued; only the
      caller whose delete removed the row may continue, so a token is good
      for exactly one refresh even under concurrent use
    """

    def __init__(self, uow: UnitOfWork, token_service: ITokenService, policy: AuthPolicy):
        self.uow = uow
        self.token_service = token_service
        self.sessions = SessionManager(uow, token_service, policy)

    async def execute(
        self, refresh_token: str, client: Optional[ClientInfo] = None
    ) -> Result[TokenPair]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate
            client: Request metadata stored with the new session

        Returns:
            Result with the new TokenPair, or Error
        """
        async with self.uow:
            revoked = await self.uow.token_blacklist.is_blacklisted(refresh_token)
            # The lookup purges an expired entry; keep that even if refresh fails below
            await self.uow.commit()
            if revoked:
                return Return.err(Error("TOKEN_REVOKED", "Token has been revoked"))

            claims = self.token_service.verify_refresh_token(refresh_token)
            if claims is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

            stored_token = await self.uow.refresh_tokens.get_by_token(refresh_token)
            if stored_token is None or str(stored_token.user_id) != claims.user_id:
                return Return.err(
                    Error("INVALID_REFRESH_TOKEN", "Invalid refresh token")
                )

            if stored_token.expires_at < utcnow():
                await self.uow.refresh_tokens.delete_by_token(refresh_token)
                await self.uow.commit()
                return Return.err(
                    Error("REFRESH_TOKEN_EXPIRED", "Refresh token expired")
                )

            user = await self.uow.users.get_by_id(stored_token.user_id)
            if user is None or not user.is_active:
                return Return.err(Error("USER_INACTIVE", "User not found or inactive"))

            # Token rotation: consume the old token exactly once
            consumed = await self.uow.refresh_tokens.delete_by_token(refresh_token)
            if not consumed:
                logger.warning(f"Concurrent reuse of refresh token for user {user.id}")
                return Return.err(
                    Error("INVALID_REFRESH_TOKEN", "Invalid refresh token")
                )

            tokens = await self.sessions.issue(user, client)

            await self.uow.commit()

            logger.info(f"Refresh token rotated for user {user.id}")

            return Return.ok(tokens)
