from abc import ABC, abstractmethod

from src.app.repositories.login_attempt_repository import ILoginAttemptRepository
from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.app.repositories.token_blacklist_repository import ITokenBlacklistRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    One database transaction over the auth stores.

    Leaving the context always rolls back whatever was not committed, so a
    use case that returns an error mid-way leaves no partial writes. Objects
    loaded inside the block must not be read after it exits.
    """

    users: IUserRepository
    refresh_tokens: IRefreshTokenRepository
    token_blacklist: ITokenBlacklistRepository
    login_attempts: ILoginAttemptRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
