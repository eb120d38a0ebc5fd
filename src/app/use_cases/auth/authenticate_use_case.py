"""
Authenticate Use Case

Resolves a bearer access token to the current, active user.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.token_service import ITokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from .dtos import AuthenticatedUser, UserInfo


class AuthenticateUseCase:
    """
    Business Rules:
    - Signature and expiry are verified on every request
    - Token claims only identify the subject; the user is re-fetched and
      must exist and be active, and the role comes from the stored user
    """

    def __init__(self, uow: UnitOfWork, token_service: ITokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, access_token: str) -> Result[AuthenticatedUser]:
        claims = self.token_service.verify_access_token(access_token)
        if claims is None:
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

        try:
            user_id = UUID(claims.user_id)
        except ValueError:
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)

            if user is None or not user.is_active:
                return Return.err(Error("USER_INACTIVE", "User not found or inactive"))

            return Return.ok(
                AuthenticatedUser(
                    user_id=str(user.id),
                    user=UserInfo.from_user(user),
                    role=UserRole(user.role).value,
                )
            )
