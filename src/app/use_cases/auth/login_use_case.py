"""
Login Use Case

Handles credential authentication with lockout and returns a token pair.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_service import ITokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import LoginAttempt
from .dtos import AuthResponse, ClientInfo, LoginCommand, UserInfo
from .policy import AuthPolicy
from .session_manager import SessionManager
from .throttle import check_ip_throttle
from .validation import normalize_email, validate_login

logger = logging.getLogger(__name__)

UNKNOWN_IP = "unknown"


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Too many attempts from one IP within the window: TOO_MANY_ATTEMPTS
    - max_failed_attempts failures for the email within the lockout window:
      ACCOUNT_LOCKED, even with correct credentials; no attempt is recorded
    - Unknown email, inactive account and wrong password are recorded as
      failed LoginAttempts with their specific reason, but all return the
      same INVALID_CREDENTIALS error (no account enumeration)
    - Constant-time password comparison; unknown emails still pay for a hash
    - Success records a successful attempt and opens a new session
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
        self, command: LoginCommand, client: Optional[ClientInfo] = None
    ) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            command: Email and plaintext password
            client: Request metadata (IP, user agent, device)

        Returns:
            Result with AuthResponse containing user and tokens, or Error
        """
        client = client or ClientInfo()
        errors = validate_login(command)
        if errors:
            return Return.err(Error("VALIDATION_ERROR", "Validation failed", details=errors))

        email = normalize_email(command.email)
        window = self.policy.lockout_duration_minutes

        async with self.uow:
            throttled = await check_ip_throttle(self.uow, self.policy, client)
            if throttled is not None:
                return Return.err(throttled)

            failed_attempts = await self.uow.login_attempts.count_recent_failures(
                email, window
            )
            if failed_attempts >= self.policy.max_failed_attempts:
                logger.warning(f"Login rejected for locked account: {email}")
                return Return.err(
                    Error(
                        "ACCOUNT_LOCKED",
                        "Account locked due to too many failed login attempts. "
                        f"Try again in {window} minutes",
                    )
                )

            user = await self.uow.users.get_by_email(email)

            fail_reason = None
            if user is None:
                self.password_hasher.dummy_verify(command.password)
                fail_reason = "Invalid credentials"
            elif not user.is_active:
                fail_reason = "Account is inactive"
            elif not self.password_hasher.verify(command.password, user.password_hash):
                fail_reason = "Invalid credentials"

            if fail_reason is not None:
                await self._record_attempt(email, client, success=False, fail_reason=fail_reason)
                await self.uow.commit()
                logger.warning(f"Failed login for {email}: {fail_reason}")
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            await self._record_attempt(email, client, success=True)

            tokens = await self.sessions.issue(user, client)

            await self.uow.commit()

            logger.info(f"User logged in: {user.id}")

            return Return.ok(
                AuthResponse(
                    user=UserInfo.from_user(user),
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )

    async def _record_attempt(
        self,
        email: str,
        client: ClientInfo,
        success: bool,
        fail_reason: Optional[str] = None,
    ) -> None:
        await self.uow.login_attempts.create(
            LoginAttempt(
                email=email,
                ip_address=client.ip_address or UNKNOWN_IP,
                user_agent=client.user_agent,
                success=success,
                fail_reason=fail_reason,
            )
        )
