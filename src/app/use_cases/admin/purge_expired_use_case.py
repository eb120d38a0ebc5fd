"""
Purge Expired Use Case

Housekeeping sweep over the token and login-attempt tables.
"""

import logging

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class PurgeExpiredResponse(BaseModel):
    """Rows removed per table"""

    refresh_tokens_deleted: int
    blacklist_entries_deleted: int
    login_attempts_deleted: int


class PurgeExpiredUseCase:
    """
    Business Rules:
    - Refresh tokens and blacklist entries past expires_at are deleted
    - Login attempts older than the retention period are deleted
    """

    def __init__(self, uow: UnitOfWork, login_attempt_retention_days: int = 30):
        self.uow = uow
        self.login_attempt_retention_days = login_attempt_retention_days

    async def execute(self) -> Result[PurgeExpiredResponse]:
        async with self.uow:
            refresh_tokens_deleted = await self.uow.refresh_tokens.delete_expired()
            blacklist_entries_deleted = await self.uow.token_blacklist.delete_expired()
            login_attempts_deleted = await self.uow.login_attempts.delete_older_than(
                self.login_attempt_retention_days
            )

            await self.uow.commit()

            logger.info(
                f"Purged {refresh_tokens_deleted} refresh tokens, "
                f"{blacklist_entries_deleted} blacklist entries, "
                f"{login_attempts_deleted} login attempts"
            )

            return Return.ok(
                PurgeExpiredResponse(
                    refresh_tokens_deleted=refresh_tokens_deleted,
                    blacklist_entries_deleted=blacklist_entries_deleted,
                    login_attempts_deleted=login_attempts_deleted,
                )
            )
