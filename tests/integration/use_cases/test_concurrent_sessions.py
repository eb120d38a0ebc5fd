"""
Concurrent use of one refresh token from independent database sessions.

Each call gets its own AsyncSession, as separate requests would, so the
database itself arbitrates who consumes or revokes the token.
"""

import asyncio
from datetime import timedelta

import pytest
from sqlmodel import select

from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.token_service import JoseTokenService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.auth import (
    AuthPolicy,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
)
from src.domain.entities import RefreshToken, TokenBlacklist

token_service = JoseTokenService(
    access_secret="test-access-secret",
    refresh_secret="test-refresh-secret",
    access_expires=timedelta(minutes=15),
    refresh_expires=timedelta(days=7),
)
policy = AuthPolicy()


async def _register(session_factory):
    async with session_factory() as session:
        use_case = RegisterUseCase(
            SqlAlchemyUnitOfWork(session), BcryptPasswordHasher(rounds=4), token_service, policy
        )
        result = await use_case.execute(
            RegisterCommand(
                email="user@acme.com",
                first_name="Jane",
                last_name="Doe",
                password="SecurePass123!",
            )
        )
    assert result.is_ok()
    return result.value


async def _refresh(session_factory, refresh_token):
    async with session_factory() as session:
        use_case = RefreshTokenUseCase(SqlAlchemyUnitOfWork(session), token_service, policy)
        return await use_case.execute(refresh_token)


async def _logout(session_factory, refresh_token):
    async with session_factory() as session:
        return await LogoutUseCase(SqlAlchemyUnitOfWork(session)).execute(refresh_token)


def _outcome(result):
    return "OK" if result.is_ok() else result.error.code


@pytest.mark.asyncio
async def test_concurrent_refresh_consumes_token_once(session_factory):
    registered = await _register(session_factory)
    token = registered.refresh_token

    results = await asyncio.gather(
        _refresh(session_factory, token), _refresh(session_factory, token)
    )

    assert sorted(_outcome(result) for result in results) == ["INVALID_REFRESH_TOKEN", "OK"]
    winner = next(result.value for result in results if result.is_ok())

    async with session_factory() as session:
        stored = (await session.exec(select(RefreshToken.token))).all()
    assert stored == [winner.refresh_token]


@pytest.mark.asyncio
async def test_concurrent_logout_succeeds_for_both(session_factory):
    registered = await _register(session_factory)
    token = registered.refresh_token

    results = await asyncio.gather(
        _logout(session_factory, token), _logout(session_factory, token)
    )

    assert [_outcome(result) for result in results] == ["OK", "OK"]

    async with session_factory() as session:
        entries = (await session.exec(select(TokenBlacklist))).all()
        stored = (await session.exec(select(RefreshToken))).all()
    assert [entry.token for entry in entries] == [token]
    assert stored == []


@pytest.mark.asyncio
async def test_refresh_after_concurrent_logout_is_revoked(session_factory):
    registered = await _register(session_factory)
    token = registered.refresh_token

    await asyncio.gather(_logout(session_factory, token), _logout(session_factory, token))

    result = await _refresh(session_factory, token)

    assert _outcome(result) == "TOKEN_REVOKED"
