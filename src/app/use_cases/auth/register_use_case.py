"""
Register Use Case

Creates a user account and opens its first session.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.repositories.user_repository import EmailAlreadyExistsError
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_service import ITokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole
from .dtos import AuthResponse, ClientInfo, RegisterCommand, UserInfo
from .policy import AuthPolicy
from .session_manager import SessionManager
from .throttle import check_ip_throttle
from .validation import normalize_email, validate_registration

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand + ClientInfo
    - Output: Result[AuthResponse]

    Business Logic:
    1. Validate input (field-level errors), then apply the per-IP throttle
    2. Normalise email and reject duplicates (EMAIL_ALREADY_EXISTS)
    3. Hash password
    4. Create User with role=USER, is_active=True
    5. Issue access + refresh tokens, bounding the session pool
    6. Persist the refresh token with client metadata, commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: IPasswordHasher,
        token_service: ITokenService,
        policy: AuthPolicy,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.policy = policy
        self.sessions = SessionManager(uow, token_service, policy)

    async def execute(
        self, command: RegisterCommand, client: Optional[ClientInfo] = None
    ) -> Result[AuthResponse]:
        errors = validate_registration(command)
        if errors:
            return Return.err(Error("VALIDATION_ERROR", "Validation failed", details=errors))

        client = client or ClientInfo()
        email = normalize_email(command.email)

        async with self.uow:
            throttled = await check_ip_throttle(self.uow, self.policy, client)
            if throttled is not None:
                return Return.err(throttled)

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            user = User(
                email=email,
                first_name=command.first_name.strip(),
                last_name=command.last_name.strip(),
                password_hash=self.password_hasher.hash(command.password),
                role=UserRole.USER,
                is_active=True,
            )
            try:
                user = await self.uow.users.create(user)
            except EmailAlreadyExistsError:
                # Lost a race with a concurrent registration
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            tokens = await self.sessions.issue(user, client)

            await self.uow.commit()

            logger.info(f"User registered: {user.id}")

            return Return.ok(
                AuthResponse(
                    user=UserInfo.from_user(user),
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )
