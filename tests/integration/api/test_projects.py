import pytest
from httpx import AsyncClient

from tests.utils.api_client import bearer
from tests.utils.json_compare import exclude_keys

VOLATILE = {"id", "user_id", "created_at", "updated_at"}


async def create_project(client: AsyncClient, token: str, payload: dict) -> dict:
    response = await client.post("/projects", json=payload, headers=bearer(token))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_and_get_project(client: AsyncClient, alice_token, test_data):
    created = await create_project(client, alice_token, test_data.payload("project"))

    response = await client.get(f"/projects/{created['id']}", headers=bearer(alice_token))

    assert response.status_code == 200
    assert response.json() == created
    assert exclude_keys(created, VOLATILE) == test_data.get("project")


@pytest.mark.asyncio
async def test_create_project_defaults(client: AsyncClient, alice_token):
    created = await create_project(client, alice_token, {"name": "Inbox"})

    assert created["description"] == ""
    assert created["status"] == "active"


@pytest.mark.asyncio
async def test_create_project_ignores_user_id_in_body(client: AsyncClient, alice_token, bob_token):
    me = (await client.get("/me", headers=bearer(bob_token))).json()

    created = await create_project(client, bob_token, {"name": "Mine", "user_id": 12345})

    assert created["user_id"] == me["id"]


@pytest.mark.asyncio
async def test_create_project_without_name(client: AsyncClient, alice_token):
    response = await client.post("/projects", json={"description": "x"}, headers=bearer(alice_token))

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_create_project_invalid_status(client: AsyncClient, alice_token):
    response = await client.post(
        "/projects", json={"name": "X", "status": "paused"}, headers=bearer(alice_token)
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_list_projects_only_own_newest_first(client: AsyncClient, alice_token, bob_token):
    first = await create_project(client, alice_token, {"name": "First"})
    second = await create_project(client, alice_token, {"name": "Second"})
    await create_project(client, bob_token, {"name": "Bob's"})

    response = await client.get("/projects", headers=bearer(alice_token))

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [second["id"], first["id"]]
    assert exclude_keys(response.json(), VOLATILE) == [
        {"name": "Second", "description": "", "status": "active"},
        {"name": "First", "description": "", "status": "active"},
    ]


@pytest.mark.asyncio
async def test_update_project(client: AsyncClient, alice_token, test_data):
    created = await create_project(client, alice_token, test_data.payload("project"))

    response = await client.put(
        f"/projects/{created['id']}",
        json={"name": "Renamed", "description": "Done", "status": "completed"},
        headers=bearer(alice_token),
    )

    assert response.status_code == 200
    data = response.json()
    assert exclude_keys(data, VOLATILE) == {
        "name": "Renamed",
        "description": "Done",
        "status": "completed",
    }
    assert data["id"] == created["id"]
    assert data["user_id"] == created["user_id"]


@pytest.mark.asyncio
async def test_other_users_project_is_not_found(client: AsyncClient, alice_token, bob_token):
    """Another user's project looks exactly like a missing one"""
    project = await create_project(client, alice_token, {"name": "Private"})
    url = f"/projects/{project['id']}"

    get = await client.get(url, headers=bearer(bob_token))
    put = await client.put(url, json={"name": "Stolen"}, headers=bearer(bob_token))
    delete = await client.delete(url, headers=bearer(bob_token))
    missing = await client.get("/projects/99999", headers=bearer(bob_token))

    for response in (get, put, delete, missing):
        assert response.status_code == 404
        assert response.json() == {"error": "Project not found", "code": "PROJECT_NOT_FOUND"}

    still_there = await client.get(url, headers=bearer(alice_token))
    assert still_there.json()["name"] == "Private"


@pytest.mark.asyncio
async def test_delete_project_keeps_its_tasks(client: AsyncClient, alice_token):
    project = await create_project(client, alice_token, {"name": "Temp"})
    task = await client.post(
        "/tasks", json={"title": "Orphan", "project_id": project["id"]}, headers=bearer(alice_token)
    )
    task_id = task.json()["id"]

    response = await client.delete(f"/projects/{project['id']}", headers=bearer(alice_token))

    assert response.status_code == 200
    assert response.json() == {"message": "Project deleted successfully"}
    gone = await client.get(f"/projects/{project['id']}", headers=bearer(alice_token))
    assert gone.status_code == 404

    kept = await client.get(f"/tasks/{task_id}", headers=bearer(alice_token))
    assert kept.status_code == 200
    assert kept.json()["project_id"] is None
    assert kept.json()["project_name"] is None


@pytest.mark.asyncio
async def test_projects_require_token(client: AsyncClient):
    response = await client.get("/projects")

    assert response.status_code == 401
    assert response.json()["code"] == "MISSING_TOKEN"
