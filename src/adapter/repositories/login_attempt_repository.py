from datetime import timedelta

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.login_attempt_repository import ILoginAttemptRepository
from src.domain.base import utcnow
from src.domain.entities import LoginAttempt


class LoginAttemptRepository(ILoginAttemptRepository):
    """Login attempt repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, attempt: LoginAttempt) -> LoginAttempt:
        self.session.add(attempt)
        await self.session.flush()
        await self.session.refresh(attempt)
        return attempt

    async def count_recent_failures(self, email: str, window_minutes: int = 15) -> int:
        threshold = utcnow() - timedelta(minutes=window_minutes)
        stmt = (
            select(func.count())
            .select_from(LoginAttempt)
            .where(
                LoginAttempt.email == email,
                LoginAttempt.success == False,  # noqa: E712
                LoginAttempt.created_at >= threshold,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def count_recent_by_ip(self, ip_address: str, window_minutes: int = 15) -> int:
        threshold = utcnow() - timedelta(minutes=window_minutes)
        stmt = (
            select(func.count())
            .select_from(LoginAttempt)
            .where(
                LoginAttempt.ip_address == ip_address,
                LoginAttempt.created_at >= threshold,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def delete_older_than(self, max_age_days: int = 30) -> int:
        threshold = utcnow() - timedelta(days=max_age_days)
        stmt = delete(LoginAttempt).where(LoginAttempt.created_at < threshold)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
