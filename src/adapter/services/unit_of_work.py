from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.login_attempt_repository import LoginAttemptRepository
from src.adapter.repositories.refresh_token_repository import RefreshTokenRepository
from src.adapter.repositories.token_blacklist_repository import TokenBlacklistRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """UnitOfWork over a single AsyncSession; all four repositories share it"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.users = UserRepository(self.session)
        self.refresh_tokens = RefreshTokenRepository(self.session)
        self.token_blacklist = TokenBlacklistRepository(self.session)
        self.login_attempts = LoginAttemptRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # No-op after a commit; discards pending work otherwise
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
