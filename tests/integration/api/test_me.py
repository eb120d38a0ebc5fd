import pytest
from httpx import AsyncClient
from sqlalchemy import update

from src.domain.entities import User, UserRole


async def _register(client: AsyncClient):
    response = await client.post("/auth/register", json={
        "email": "user@acme.com",
        "first_name": "Jane",
        "last_name": "Doe",
        "password": "SecurePass123!",
    })
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_get_me(client: AsyncClient):
    registered = await _register(client)

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {registered['access_token']}"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == registered["user"]["id"]
    assert data["email"] == "user@acme.com"
    assert data["role"] == "USER"
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_get_me_without_token(client: AsyncClient):
    response = await client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_get_me_with_invalid_token(client: AsyncClient):
    response = await client.get("/auth/me", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_get_me_with_refresh_token(client: AsyncClient):
    registered = await _register(client)

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {registered['refresh_token']}"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_get_me_inactive_user(client: AsyncClient, db_session):
    """A deactivated user is rejected while their access token is still unexpired"""
    registered = await _register(client)
    await db_session.execute(update(User).values(is_active=False))
    await db_session.commit()

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {registered['access_token']}"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "USER_INACTIVE"


@pytest.mark.asyncio
async def test_get_me_reflects_current_role(client: AsyncClient, db_session):
    registered = await _register(client)
    await db_session.execute(update(User).values(role=UserRole.ADMIN))
    await db_session.commit()

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {registered['access_token']}"}
    )

    assert response.status_code == 200
    assert response.json()["role"] == "ADMIN"
