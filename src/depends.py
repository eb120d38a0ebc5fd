from datetime import timedelta
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.token_service import JoseTokenService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_service import ITokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticateUseCase, AuthenticatedUser, AuthPolicy

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> IPasswordHasher:
    return BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_token_service() -> ITokenService:
    return JoseTokenService(
        access_secret=ApplicationConfig.JWT_SECRET,
        refresh_secret=ApplicationConfig.JWT_REFRESH_SECRET,
        access_expires=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRES_MINUTES),
        refresh_expires=timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRES_DAYS),
        algorithm=ApplicationConfig.JWT_ALGORITHM,
    )


def get_auth_policy() -> AuthPolicy:
    return AuthPolicy(
        max_sessions=ApplicationConfig.MAX_SESSIONS,
        max_failed_attempts=ApplicationConfig.MAX_FAILED_ATTEMPTS,
        lockout_duration_minutes=ApplicationConfig.LOCKOUT_DURATION_MINUTES,
        refresh_token_days=ApplicationConfig.REFRESH_TOKEN_EXPIRES_DAYS,
        max_attempts_per_ip=ApplicationConfig.MAX_ATTEMPTS_PER_IP,
        login_attempt_retention_days=ApplicationConfig.LOGIN_ATTEMPT_RETENTION_DAYS,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """
    Dependency to authenticate the bearer access token.

    The token is verified and the user re-fetched on every request, so a
    deactivated user is rejected even while their token is unexpired.

    Returns:
        AuthenticatedUser with user_id, user and role

    Raises:
        ClientError: 401 if the token is missing, invalid or expired,
        or the user is gone or inactive
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHORIZED", "No token provided"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = AuthenticateUseCase(uow, token_service)
    result = await use_case.execute(credentials.credentials)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value
