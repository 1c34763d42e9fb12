import uuid

import pytest
from httpx import AsyncClient

from app.models.user import UserRole


async def test_update_profile(client: AsyncClient, test_user, auth_headers):
    response = await client.patch("/api/v1/users/me/profile", headers=auth_headers, json={
        "biography": "Backend engineer",
        "designation": "Staff Engineer",
        "achievements": ["Best Outgoing Student"],
        "social_links": {"linkedin": "https://www.linkedin.com/in/someone"},
    })

    assert response.status_code == 200
    user = response.json()["user"]
    assert response.json()["message"] == "Profile updated successfully"
    assert user["biography"] == "Backend engineer"
    assert user["achievements"] == ["Best Outgoing Student"]
    assert user["social_links"] == {"linkedin": "https://www.linkedin.com/in/someone", "facebook": None}


async def test_update_profile_empty_values_keep_existing(client: AsyncClient, make_user, headers_for):
    user = await make_user(biography="Original bio", address="Bengaluru")

    response = await client.patch("/api/v1/users/me/profile", headers=headers_for(user), json={
        "biography": "",
        "designation": "Lead",
    })

    data = response.json()["user"]
    assert data["biography"] == "Original bio"
    assert data["address"] == "Bengaluru"
    assert data["designation"] == "Lead"


@pytest.mark.parametrize("payload", [
    {"biography": "x" * 501},
    {"social_links": {"linkedin": "https://example.com/me"}},
    {"social_links": {"facebook": "https://linkedin.com/in/me"}},
])
async def test_update_profile_validation(client: AsyncClient, auth_headers, payload):
    response = await client.patch("/api/v1/users/me/profile", headers=auth_headers, json=payload)

    assert response.status_code == 422


async def test_get_user_by_id(client: AsyncClient, make_user, auth_headers):
    other = await make_user(name="Ravi Kumar")

    response = await client.get(f"/api/v1/users/{other.id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Ravi Kumar"
    assert "hashed_password" not in response.json()


async def test_get_user_not_found(client: AsyncClient, auth_headers):
    response = await client.get(f"/api/v1/users/{uuid.uuid4()}", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


async def test_recommendations(client: AsyncClient, make_user, headers_for):
    me = await make_user(batch=2015, branch="Civil")
    batchmate = await make_user(batch=2015, branch="Electrical")
    branchmate = await make_user(batch=2019, branch="Civil")
    await make_user(batch=2010, branch="Chemical")
    await make_user(batch=2015, branch="Civil", is_verified=False)
    await make_user(batch=2015, branch="Civil", role=UserRole.ADMIN)

    response = await client.get("/api/v1/users/recommendations", headers=headers_for(me))

    assert response.status_code == 200
    ids = {item["id"] for item in response.json()}
    assert ids == {batchmate.id, branchmate.id}
    assert set(response.json()[0]) >= {"id", "name", "branch", "batch"}


async def test_recommendations_limited(client: AsyncClient, make_user, headers_for):
    me = await make_user(batch=2012)
    for _ in range(12):
        await make_user(batch=2012)

    response = await client.get("/api/v1/users/recommendations", headers=headers_for(me))

    assert len(response.json()) == 10


async def test_verified_directory_search(client: AsyncClient, make_user, headers_for):
    me = await make_user()
    meena = await make_user(name="Meena Iyer", branch="Electronics", batch=2011)
    await make_user(name="Karthik", branch="Civil", batch=2013)
    await make_user(name="Meena Pending", is_verified=False)

    everyone = await client.get("/api/v1/users/verified", headers=headers_for(me))
    by_name = await client.get("/api/v1/users/verified", params={"search": "meena"}, headers=headers_for(me))
    by_branch = await client.get("/api/v1/users/verified", params={"search": "ELECTRON"}, headers=headers_for(me))
    by_batch = await client.get("/api/v1/users/verified", params={"search": "2011"}, headers=headers_for(me))

    assert len(everyone.json()) == 2
    assert me.id not in {item["id"] for item in everyone.json()}
    assert [item["id"] for item in by_name.json()] == [meena.id]
    assert [item["id"] for item in by_branch.json()] == [meena.id]
    assert [item["id"] for item in by_batch.json()] == [meena.id]


async def test_admin_verifies_user(client: AsyncClient, make_user, admin_auth_headers):
    pending = await make_user(is_verified=False)

    response = await client.post(f"/api/v1/users/{pending.id}/verify", headers=admin_auth_headers)

    assert response.status_code == 200
    assert response.json()["user"]["is_verified"] is True


async def test_verify_requires_admin(client: AsyncClient, make_user, auth_headers):
    pending = await make_user(is_verified=False)

    response = await client.post(f"/api/v1/users/{pending.id}/verify", headers=auth_headers)

    assert response.status_code == 403
    assert pending.is_verified is False
