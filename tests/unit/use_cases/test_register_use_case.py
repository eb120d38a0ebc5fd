"""
Unit tests for Register Use Case
"""

import pytest

from src.app.repositories.user_repository import EmailAlreadyExistsError
from src.app.use_cases.auth import AuthPolicy, RegisterCommand, RegisterUseCase
from src.app.use_cases.auth.dtos import ClientInfo
from src.domain.entities import RefreshToken, User


def _command(**overrides) -> RegisterCommand:
    data = {
        "email": "a@x.com",
        "first_name": "Jane",
        "last_name": "Doe",
        "password": "Passw0rd!",
    }
    data.update(overrides)
    return RegisterCommand(**data)


@pytest.mark.asyncio
async def test_successful_registration(mock_uow, password_hasher, token_service, policy):
    """Registration returns the user without password plus both tokens"""
    use_case = RegisterUseCase(mock_uow, password_hasher, token_service, policy)
    client = ClientInfo(ip_address="10.0.0.1", user_agent="pytest", device_info="{}")

    result = await use_case.execute(_command(), client)

    assert result.is_ok()
    data = result.value
    assert data.user.email == "a@x.com"
    assert data.user.first_name == "Jane"
    assert data.user.role == "USER"
    assert "password" not in data.user.model_dump()
    assert "password_hash" not in data.user.model_dump()

    claims = token_service.verify_access_token(data.access_token)
    assert claims.user_id == data.user.id
    assert claims.email == "a@x.com"
    assert claims.role == "USER"

    # Password stored hashed
    created_user = mock_uow.users.create.call_args.args[0]
    assert isinstance(created_user, User)
    assert created_user.password_hash != "Passw0rd!"
    assert password_hasher.verify("Passw0rd!", created_user.password_hash)

    # Refresh token persisted with client metadata
    stored = mock_uow.refresh_tokens.create.call_args.args[0]
    assert isinstance(stored, RefreshToken)
    assert stored.token == data.refresh_token
    assert stored.user_id == created_user.id
    assert stored.ip_address == "10.0.0.1"
    assert stored.user_agent == "pytest"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_registration_normalises_email(mock_uow, password_hasher, token_service, policy):
    use_case = RegisterUseCase(mock_uow, password_hasher, token_service, policy)

    result = await use_case.execute(_command(email="  Jane@ACME.com "))

    assert result.is_ok()
    assert result.value.user.email == "jane@acme.com"
    mock_uow.users.get_by_email.assert_called_once_with("jane@acme.com")


@pytest.mark.asyncio
async def test_registration_duplicate_email(mock_uow, password_hasher, token_service, policy):
    mock_uow.users.get_by_email.return_value = User(
        email="a@x.com", first_name="Jane", last_name="Doe", password_hash="hash"
    )
    use_case = RegisterUseCase(mock_uow, password_hasher, token_service, policy)

    result = await use_case.execute(_command())

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.users.create.assert_not_called()
    mock_uow.refresh_tokens.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_registration_duplicate_email_race(mock_uow, password_hasher, token_service, policy):
    """Unique constraint violation at insert time is reported as a conflict"""
    mock_uow.users.create.side_effect = EmailAlreadyExistsError("a@x.com")
    use_case = RegisterUseCase(mock_uow, password_hasher, token_service, policy)

    result = await use_case.execute(_command())

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_registration_validation_error(mock_uow, password_hasher, token_service, policy):
    use_case = RegisterUseCase(mock_uow, password_hasher, token_service, policy)

    result = await use_case.execute(_command(email="bad", password="short"))

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert set(result.error.details) == {"email", "password"}
    mock_uow.users.get_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_registration_hashing_failure_propagates(mock_uow, token_service, policy):
    class BrokenHasher:
        def hash(self, password):
            raise RuntimeError("hashing backend unavailable")

    use_case = RegisterUseCase(mock_uow, BrokenHasher(), token_service, policy)

    with pytest.raises(RuntimeError):
        await use_case.execute(_command())

    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_registration_ip_throttled(mock_uow, password_hasher, token_service):
    mock_uow.login_attempts.count_recent_by_ip.return_value = 3
    use_case = RegisterUseCase(
        mock_uow, password_hasher, token_service, AuthPolicy(max_attempts_per_ip=3)
    )

    result = await use_case.execute(_command(), ClientInfo(ip_address="10.0.0.1"))

    assert result.is_err()
    assert result.error.code == "TOO_MANY_ATTEMPTS"
    mock_uow.login_attempts.count_recent_by_ip.assert_called_once_with("10.0.0.1", 15)
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()
