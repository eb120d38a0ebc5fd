"""
Unit tests for Authenticate Use Case
"""

import pytest

from src.app.services.token_service import TokenClaims
from src.app.use_cases.auth import AuthenticateUseCase
from src.domain.entities import User, UserRole


@pytest.fixture
def user():
    return User(
        email="a@x.com",
        first_name="Jane",
        last_name="Doe",
        password_hash="hash",
        role=UserRole.ADMIN,
        is_active=True,
    )


def _access_token(token_service, user, role="USER"):
    return token_service.issue_access_token(
        TokenClaims(user_id=str(user.id), email=user.email, role=role)
    )


@pytest.mark.asyncio
async def test_authenticate_valid_token(mock_uow, token_service, user):
    mock_uow.users.get_by_id.return_value = user
    use_case = AuthenticateUseCase(mock_uow, token_service)

    result = await use_case.execute(_access_token(token_service, user))

    assert result.is_ok()
    assert result.value.user_id == str(user.id)
    assert result.value.user.email == "a@x.com"
    mock_uow.users.get_by_id.assert_called_once_with(user.id)


@pytest.mark.asyncio
async def test_authenticate_role_comes_from_stored_user(mock_uow, token_service, user):
    """A role change takes effect without waiting for the token to expire"""
    mock_uow.users.get_by_id.return_value = user
    use_case = AuthenticateUseCase(mock_uow, token_service)

    result = await use_case.execute(_access_token(token_service, user, role="USER"))

    assert result.is_ok()
    assert result.value.role == "ADMIN"


@pytest.mark.asyncio
async def test_authenticate_invalid_token(mock_uow, token_service):
    use_case = AuthenticateUseCase(mock_uow, token_service)

    result = await use_case.execute("garbage")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_authenticate_rejects_refresh_token(mock_uow, token_service, user):
    refresh_token = token_service.issue_refresh_token(
        TokenClaims(user_id=str(user.id), email=user.email, role="USER")
    )
    use_case = AuthenticateUseCase(mock_uow, token_service)

    result = await use_case.execute(refresh_token)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_authenticate_non_uuid_subject(mock_uow, token_service):
    token = token_service.issue_access_token(
        TokenClaims(user_id="not-a-uuid", email="a@x.com", role="USER")
    )
    use_case = AuthenticateUseCase(mock_uow, token_service)

    result = await use_case.execute(token)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_authenticate_inactive_user(mock_uow, token_service, user):
    user.is_active = False
    mock_uow.users.get_by_id.return_value = user
    use_case = AuthenticateUseCase(mock_uow, token_service)

    result = await use_case.execute(_access_token(token_service, user))

    assert result.is_err()
    assert result.error.code == "USER_INACTIVE"


@pytest.mark.asyncio
async def test_authenticate_deleted_user(mock_uow, token_service, user):
    mock_uow.users.get_by_id.return_value = None
    use_case = AuthenticateUseCase(mock_uow, token_service)

    result = await use_case.execute(_access_token(token_service, user))

    assert result.is_err()
    assert result.error.code == "USER_INACTIVE"
