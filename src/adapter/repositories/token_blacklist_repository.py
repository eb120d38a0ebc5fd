from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.token_blacklist_repository import ITokenBlacklistRepository
from src.domain.base import utcnow
from src.domain.entities import RefreshToken, TokenBlacklist

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_INSERT_BY_DIALECT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class TokenBlacklistRepository(ITokenBlacklistRepository):
    """Token blacklist repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: TokenBlacklist) -> bool:
        """
        Insert a blacklist entry unless the token already has one.

        Concurrent revocations of the same token race on the unique token
        column; the database drops the losing insert instead of raising.
        """
        insert = _INSERT_BY_DIALECT[self.session.bind.dialect.name]
        stmt = (
            insert(TokenBlacklist)
            .values(**entry.model_dump())
            .on_conflict_do_nothing(index_elements=["token"])
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def get_by_token(self, token: str) -> Optional[TokenBlacklist]:
        stmt = select(TokenBlacklist).where(TokenBlacklist.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def is_blacklisted(self, token: str) -> bool:
        entry = await self.get_by_token(token)
        if entry is None:
            return False

        if entry.expires_at < utcnow():
            # Expired revocations no longer matter; purge lazily
            stmt = delete(TokenBlacklist).where(TokenBlacklist.token == token)
            await self.session.execute(stmt)
            await self.session.flush()
            return False

        return True

    async def delete_expired(self) -> int:
        stmt = delete(TokenBlacklist).where(TokenBlacklist.expires_at < utcnow())
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def blacklist_user_tokens(self, user_id: UUID, reason: str) -> int:
        """
        Blacklist all live refresh tokens of a user.

        Each entry copies its token's own expires_at. Tokens that already
        have a blacklist entry are skipped.
        """
        stmt = select(RefreshToken).where(RefreshToken.user_id == user_id)
        result = await self.session.exec(stmt)

        blacklisted = 0
        for refresh_token in result.all():
            inserted = await self.create(
                TokenBlacklist(
                    token=refresh_token.token,
                    user_id=user_id,
                    reason=reason,
                    expires_at=refresh_token.expires_at,
                )
            )
            blacklisted += int(inserted)
        return blacklisted
