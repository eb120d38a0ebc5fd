"""
Logout All Sessions Use Case

Ends every session of a user.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutAllResponse

logger = logging.getLogger(__name__)

LOGOUT_ALL_REASON = "logout all sessions"


class LogoutAllSessionsUseCase:
    """
    Business Rules:
    - Every live refresh token of the user is blacklisted with its own expiry,
      then all of the user's refresh tokens are deleted
    - A token created by a concurrent login between the two steps is deleted
      without a blacklist entry; neither step fails because of it
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[LogoutAllResponse]:
        async with self.uow:
            blacklisted = await self.uow.token_blacklist.blacklist_user_tokens(
                user_id, LOGOUT_ALL_REASON
            )
            deleted = await self.uow.refresh_tokens.delete_by_user_id(user_id)

            await self.uow.commit()

            logger.info(
                f"All sessions revoked for user {user_id}: "
                f"{blacklisted} blacklisted, {deleted} deleted"
            )

            return Return.ok(
                LogoutAllResponse(
                    message=f"Successfully revoked {deleted} session(s)",
                    revoked_count=deleted,
                )
            )
