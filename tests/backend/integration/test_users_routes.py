import pytest


pytestmark = pytest.mark.asyncio


async def test_register_and_lookup_user(client):
    resp = await client.post(
        "/api/v1/users",
        json={"externalId": "ext_grace", "name": "Grace", "username": "grace", "email": "grace@example.com"},
    )
    assert resp.status_code == 200
    created = resp.json()["data"]
    assert created["reputation"] == 0

    lookup = await client.get("/api/v1/users/ext_grace")
    assert lookup.status_code == 200
    assert lookup.json()["data"]["id"] == created["id"]


async def test_duplicate_registration_is_rejected(client):
    body = {"externalId": "ext_linus", "name": "Linus", "username": "linus"}
    await client.post("/api/v1/users", json=body)

    again = await client.post("/api/v1/users", json=body)
    assert again.json()["success"] is False
    assert again.json()["error"]["code"] == "EXTERNAL_ID_EXISTS"

    same_username = await client.post(
        "/api/v1/users",
        json={"externalId": "ext_other", "name": "Other", "username": "linus"},
    )
    assert same_username.json()["error"]["code"] == "USERNAME_EXISTS"


async def test_unknown_user_is_404(client):
    resp = await client.get("/api/v1/users/ext_nobody")
    assert resp.status_code == 404
    assert resp.json() == {
        "success": False,
        "error": {"code": "NOT_FOUND", "message": "User not found: ext_nobody"},
    }
