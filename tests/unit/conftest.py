from datetime import timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.token_service import JoseTokenService
from src.app.use_cases.auth import AuthPolicy


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.refresh_tokens = MagicMock()
    uow.refresh_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.refresh_tokens.get_by_token = AsyncMock(return_value=None)
    uow.refresh_tokens.get_by_user_id = AsyncMock(return_value=[])
    uow.refresh_tokens.delete_by_token = AsyncMock(return_value=True)
    uow.refresh_tokens.delete_by_user_id = AsyncMock(return_value=0)
    uow.refresh_tokens.delete_expired = AsyncMock(return_value=0)
    uow.refresh_tokens.count_by_user_id = AsyncMock(return_value=0)
    uow.refresh_tokens.delete_oldest_by_user_id = AsyncMock(return_value=True)

    uow.token_blacklist = MagicMock()
    uow.token_blacklist.create = AsyncMock(return_value=True)
    uow.token_blacklist.get_by_token = AsyncMock(return_value=None)
    uow.token_blacklist.is_blacklisted = AsyncMock(return_value=False)
    uow.token_blacklist.delete_expired = AsyncMock(return_value=0)
    uow.token_blacklist.blacklist_user_tokens = AsyncMock(return_value=0)

    uow.login_attempts = MagicMock()
    uow.login_attempts.create = AsyncMock(side_effect=lambda attempt: attempt)
    uow.login_attempts.count_recent_failures = AsyncMock(return_value=0)
    uow.login_attempts.count_recent_by_ip = AsyncMock(return_value=0)
    uow.login_attempts.delete_older_than = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def password_hasher():
    # Minimum bcrypt cost keeps unit tests fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def token_service():
    return JoseTokenService(
        access_secret="test-access-secret",
        refresh_secret="test-refresh-secret",
        access_expires=timedelta(minutes=15),
        refresh_expires=timedelta(days=7),
    )


@pytest.fixture
def policy():
    return AuthPolicy()
