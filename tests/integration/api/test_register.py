import asyncio

import pytest
from httpx import AsyncClient
from sqlmodel import select

from taskhub.api.utils.jwt import verify_jwt
from taskhub.domain.entities import User
from tests.utils.api_client import build_client
from tests.utils.json_compare import exclude_keys


@pytest.mark.asyncio
async def test_successful_register(client: AsyncClient, test_data):
    """A new account gets a session token and its public profile"""
    payload = test_data.payload("alice")

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Registration successful"
    assert exclude_keys(data["user"], {"id"}) == {
        "username": "alice",
        "email": "alice@acme.com",
    }
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]

    claims = verify_jwt(data["token"])
    assert claims["user_id"] == data["user"]["id"]
    assert claims["username"] == "alice"


@pytest.mark.asyncio
async def test_register_accepts_alternate_field_names(client: AsyncClient):
    response = await client.post("/auth/register", json={
        "handle": "carol",
        "contact": "carol@acme.com",
        "secret": "pa55word",
    })

    assert response.status_code == 201
    assert response.json()["user"]["username"] == "carol"


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, test_data):
    await client.post("/auth/register", json=test_data.payload("alice"))
    payload = test_data.payload("alice", email="other@acme.com")

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 409
    assert response.json() == {"error": "Username already exists", "code": "USERNAME_ALREADY_EXISTS"}


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, test_data):
    await client.post("/auth/register", json=test_data.payload("alice"))
    payload = test_data.payload("alice", username="alice2")

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 409
    assert response.json()["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_register_short_password(client: AsyncClient, test_data):
    payload = test_data.payload("alice", password="12345")

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "password" in data["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["username", "email", "password"])
async def test_register_missing_field(client: AsyncClient, test_data, missing):
    payload = test_data.payload("alice", **{missing: None})

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_register_invalid_email(client: AsyncClient, test_data):
    payload = test_data.payload("alice", email="not-an-email")

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_parallel_registrations_with_same_username(session_factory, test_data):
    """Exactly one of two simultaneous registrations for a handle succeeds"""
    first = test_data.payload("alice")
    second = test_data.payload("alice", email="alice.two@acme.com")

    async with session_factory() as s1, session_factory() as s2:
        async with build_client(s1) as c1, build_client(s2) as c2:
            responses = await asyncio.gather(
                c1.post("/auth/register", json=first),
                c2.post("/auth/register", json=second),
            )

    assert sorted(r.status_code for r in responses) == [201, 409]
    conflict = next(r for r in responses if r.status_code == 409)
    assert conflict.json()["code"] == "USERNAME_ALREADY_EXISTS"

    async with session_factory() as session:
        rows = (await session.exec(select(User).where(User.username == "alice"))).all()
    assert len(rows) == 1


@pytest.mark.asyncio
async def test_register_duplicate_email_in_other_case(client: AsyncClient, test_data):
    await client.post("/auth/register", json=test_data.payload("alice"))

    response = await client.post(
        "/auth/register", json=test_data.payload("alice", username="alice2", email="ALICE@acme.com")
    )

    assert response.status_code == 409
    assert response.json()["code"] == "EMAIL_ALREADY_EXISTS"
