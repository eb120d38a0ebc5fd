from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.domain.base import utcnow
from src.domain.entities import RefreshToken


class RefreshTokenRepository(IRefreshTokenRepository):
    """Refresh token repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, refresh_token: RefreshToken) -> RefreshToken:
        self.session.add(refresh_token)
        await self.session.flush()
        await self.session.refresh(refresh_token)
        return refresh_token

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> List[RefreshToken]:
        stmt = (
            select(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .order_by(RefreshToken.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_by_token(self, token: str) -> bool:
        """
        Delete a refresh token by its token string.

        The DELETE's row count is the atomic "consume": under concurrent
        rotation of the same token the database lets only one statement
        remove the row, every other caller gets False.
        """
        stmt = delete(RefreshToken).where(RefreshToken.token == token)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_user_id(self, user_id: UUID) -> int:
        stmt = delete(RefreshToken).where(RefreshToken.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self) -> int:
        stmt = delete(RefreshToken).where(RefreshToken.expires_at < utcnow())
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def count_by_user_id(self, user_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(RefreshToken)
            .where(RefreshToken.user_id == user_id)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def delete_oldest_by_user_id(self, user_id: UUID) -> bool:
        """
        Evict the user's oldest session.

        Selection and deletion happen in one statement so a concurrent
        insert or eviction cannot make us delete a row that is no longer
        the oldest.
        """
        oldest = (
            select(RefreshToken.token)
            .where(RefreshToken.user_id == user_id)
            .order_by(RefreshToken.created_at.asc())
            .limit(1)
            .scalar_subquery()
        )
        stmt = (
            delete(RefreshToken)
            .where(RefreshToken.token == oldest)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
