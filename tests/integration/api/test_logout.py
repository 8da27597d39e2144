import asyncio
from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from taskhub.api.utils.jwt import create_access_token, get_token_expiry
from taskhub.app.use_cases.auth.credentials import hash_token
from taskhub.domain.base import utcnow
from taskhub.domain.entities import RevokedToken
from tests.utils.api_client import bearer, build_client


@pytest.mark.asyncio
async def test_logout_revokes_token(client: AsyncClient, alice_token):
    """After logout the same token is rejected as revoked"""
    response = await client.post("/auth/logout", headers=bearer(alice_token))

    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}

    me = await client.get("/me", headers=bearer(alice_token))
    assert me.status_code == 403
    assert me.json()["code"] == "TOKEN_REVOKED"


@pytest.mark.asyncio
async def test_revocation_survives_new_session(client: AsyncClient, session_factory, alice_token):
    """Revocations are stored, not held in the process that accepted the logout"""
    await client.post("/auth/logout", headers=bearer(alice_token))

    async with session_factory() as other_session:
        async with build_client(other_session) as other_client:
            me = await other_client.get("/me", headers=bearer(alice_token))

    assert me.status_code == 403
    assert me.json()["code"] == "TOKEN_REVOKED"


@pytest.mark.asyncio
async def test_logout_leaves_other_sessions_alone(client: AsyncClient, alice_token):
    login = await client.post("/auth/login", json={"username": "alice", "password": "wonderland"})
    other_token = login.json()["token"]

    await client.post("/auth/logout", headers=bearer(alice_token))

    me = await client.get("/me", headers=bearer(other_token))
    assert me.status_code == 200


@pytest.mark.asyncio
async def test_logout_twice(client: AsyncClient, alice_token):
    first = await client.post("/auth/logout", headers=bearer(alice_token))
    second = await client.post("/auth/logout", headers=bearer(alice_token))

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()


@pytest.mark.asyncio
async def test_logout_without_token(client: AsyncClient):
    response = await client.post("/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}


@pytest.mark.asyncio
async def test_logout_purges_expired_revocations(client: AsyncClient, db_session, alice_token):
    # Arrange
    stale = RevokedToken(
        token_hash="0" * 64,
        user_id=None,
        revoked_at=utcnow() - timedelta(days=8),
        expires_at=utcnow() - timedelta(days=1),
    )
    db_session.add(stale)
    await db_session.commit()

    # Act
    await client.post("/auth/logout", headers=bearer(alice_token))

    # Assert
    rows = (await db_session.exec(select(RevokedToken))).all()
    assert [row.token_hash for row in rows] == [hash_token(alice_token)]


@pytest.mark.asyncio
async def test_logged_out_token_stays_revoked_past_exp(client: AsyncClient, alice_token):
    """Signature checks accept a token for up to a second after exp; revocation must cover it"""
    user_id = (await client.get("/me", headers=bearer(alice_token))).json()["id"]
    token = create_access_token(user_id, "alice", timedelta(seconds=2))
    await client.post("/auth/logout", headers=bearer(token))

    exp = get_token_expiry(token)
    await asyncio.sleep(max(0.0, (exp - utcnow()).total_seconds()) + 0.3)
    response = await client.get("/me", headers=bearer(token))

    assert response.status_code == 403
    assert response.json()["code"] == "TOKEN_REVOKED"
