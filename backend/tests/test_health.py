from httpx import AsyncClient


async def test_root_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_api_health(client: AsyncClient):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200


async def test_liveness(client: AsyncClient):
    response = await client.get("/api/v1/health/live")

    assert response.json()["status"] == "alive"


async def test_response_headers(client: AsyncClient):
    response = await client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "X-Request-ID" in response.headers


async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"


async def test_oversized_request_rejected(client: AsyncClient, auth_headers):
    response = await client.post(
        "/api/v1/users/me/profile-photo",
        headers={**auth_headers, "Content-Length": str(50 * 1024 * 1024)},
        content=b"",
    )

    assert response.status_code == 413
