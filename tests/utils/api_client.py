from httpx import ASGITransport, AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from taskhub.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from taskhub.api.app import create_app
from taskhub.depends import get_unit_of_work


def build_client(session: AsyncSession) -> AsyncClient:
    """HTTP client for a fresh app whose unit of work runs on the given session"""
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def register(client: AsyncClient, payload: dict) -> str:
    """Register an account and return its session token"""
    response = await client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
