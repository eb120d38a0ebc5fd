"""
Logout Use Case

Ends a single session. Fail-soft: an unknown token is not an error.
"""

import logging

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenBlacklist
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)

LOGOUT_REASON = "user logout"


class LogoutUseCase:
    """
    Business Rules:
    - A stored token is blacklisted (its user id and expiry copied) and deleted
    - A token that is already gone (rotated, expired, evicted, logged out)
      is ignored; logout always succeeds and repeating it has no effect
    - Concurrent logouts of one token both succeed: the blacklist insert
      and the delete each take effect at most once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[LogoutResponse]:
        async with self.uow:
            stored_token = await self.uow.refresh_tokens.get_by_token(refresh_token)
            if stored_token is None:
                logger.info("Logout for unknown or already consumed refresh token")
                return Return.ok(LogoutResponse(message="Logged out successfully"))

            user_id = stored_token.user_id
            await self.uow.token_blacklist.create(
                TokenBlacklist(
                    token=refresh_token,
                    user_id=user_id,
                    reason=LOGOUT_REASON,
                    expires_at=stored_token.expires_at,
                )
            )

            deleted = await self.uow.refresh_tokens.delete_by_token(refresh_token)

            await self.uow.commit()

            if deleted:
                logger.info(f"User logged out: {user_id}")
            else:
                logger.info(f"Refresh token of user {user_id} was already logged out")

            return Return.ok(LogoutResponse(message="Logged out successfully"))
