from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.utils.request import get_client_info
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_service import ITokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthenticatedUser,
    AuthPolicy,
    AuthResponse,
    ClientInfo,
    LoginCommand,
    LoginUseCase,
    LogoutAllResponse,
    LogoutAllSessionsUseCase,
    LogoutResponse,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    TokenPair,
    UserInfo,
)
from src.depends import (
    get_auth_policy,
    get_current_user,
    get_password_hasher,
    get_token_service,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Only shape is checked here; field rules are applied by the use case so
    every caller gets the same field-level VALIDATION_ERROR details.
    """

    email: str = Field(..., description="User email address")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    password: str = Field(..., description="Password (min 8 chars, mixed case, digit, special)")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    client: ClientInfo = Depends(get_client_info),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    token_service: ITokenService = Depends(get_token_service),
    policy: AuthPolicy = Depends(get_auth_policy),
):
    """
    User Registration

    Creates a new account and returns the user with an access token and a
    refresh token.

    Raises:
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Invalid input
        - 429 Too Many Requests: Too many attempts from this IP
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
        password=request.password,
    )

    use_case = RegisterUseCase(uow, password_hasher, token_service, policy)
    result = await use_case.execute(command, client)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    client: ClientInfo = Depends(get_client_info),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    token_service: ITokenService = Depends(get_token_service),
    policy: AuthPolicy = Depends(get_auth_policy),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials (uniform for unknown email,
          wrong password and inactive account) or account locked
        - 422 Unprocessable Entity: Invalid input
        - 429 Too Many Requests: Too many attempts from this IP
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, password_hasher, token_service, policy)
    result = await use_case.execute(
        LoginCommand(email=request.email, password=request.password), client
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    """Refresh token HTTP request payload"""

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=TokenPair)
async def refresh(
    request: RefreshRequest,
    client: ClientInfo = Depends(get_client_info),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
    policy: AuthPolicy = Depends(get_auth_policy),
):
    """
    Refresh Tokens

    Exchanges a refresh token for a new access/refresh pair. The presented
    refresh token is consumed and cannot be used again.

    Raises:
        - 401 Unauthorized: Revoked, invalid, expired or already used token,
          or user inactive
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshTokenUseCase(uow, token_service, policy)
    result = await use_case.execute(request.refresh_token, client)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LogoutRequest(BaseModel):
    """Logout HTTP request payload"""

    refresh_token: str = Field(..., min_length=1, description="Refresh token of the session to end")


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(request: LogoutRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Logout

    Revokes the session behind the refresh token. Always succeeds, also for
    tokens that were already rotated, logged out or expired.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/logout-all", status_code=status.HTTP_200_OK, response_model=LogoutAllResponse)
async def logout_all(
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout From All Sessions

    Revokes every session of the authenticated user.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired access token
        - 500 Internal Server Error: Server error
    """
    use_case = LogoutAllSessionsUseCase(uow)
    result = await use_case.execute(UUID(current_user.user_id))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_me(current_user: AuthenticatedUser = Depends(get_current_user)):
    """
    Current User

    Raises:
        - 401 Unauthorized: Missing, invalid or expired access token, or user inactive
    """
    return current_user.user
