"""Endpoint tests for /api/v1/user-progress.

Authentication is replaced with a UserContext holding the in-memory store.
"""

from unittest.mock import patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.auth.context import UserContext
from src.auth.dependencies import get_user_context
from src.main import create_app


BASE = "/api/v1/user-progress"


@pytest.fixture
def app(fake_client, user_id):
    app = create_app()
    app.dependency_overrides[get_user_context] = lambda: UserContext(user_id=user_id, client=fake_client)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_upsert_get_and_list(api) -> None:
    async with api:
        response = await api.put(f"{BASE}/photosynthesis", json={"mastered": True})
        assert response.status_code == 200
        assert response.json()["section"] == "photosynthesis"
        assert response.json()["mastered"] is True

        response = await api.get(f"{BASE}/photosynthesis")
        assert response.status_code == 200
        assert response.json()["mastered"] is True

        response = await api.get(BASE)
        assert response.status_code == 200
        assert [row["section"] for row in response.json()] == ["photosynthesis"]

        response = await api.get(f"{BASE}/mastered")
        assert response.json() == {"sections": ["photosynthesis"]}


@pytest.mark.asyncio
async def test_missing_section_is_404(api) -> None:
    async with api:
        response = await api.get(f"{BASE}/never-saved")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_save_twice_conflicts(api) -> None:
    async with api:
        created = await api.post(BASE, json={"section": "osmosis"})
        duplicate = await api.post(BASE, json={"section": "osmosis", "mastered": True})

    assert created.status_code == 201
    assert created.json()["mastered"] is False
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_patch_requires_existing_section(api) -> None:
    async with api:
        missing = await api.patch(f"{BASE}/osmosis", json={"mastered": True})
        await api.post(BASE, json={"section": "osmosis"})
        updated = await api.patch(f"{BASE}/osmosis", json={"mastered": True})

    assert missing.status_code == 404
    assert updated.status_code == 200
    assert updated.json()["mastered"] is True


@pytest.mark.asyncio
async def test_delete_is_204_even_when_missing(api, fake_client) -> None:
    async with api:
        await api.put(f"{BASE}/osmosis", json={"mastered": False})
        deleted = await api.delete(f"{BASE}/osmosis")
        missing = await api.delete(f"{BASE}/never-saved")

    assert deleted.status_code == 204
    assert missing.status_code == 204
    assert fake_client.rows() == []


@pytest.mark.asyncio
async def test_store_unreachable_is_503(api, fake_client) -> None:
    fake_client.fail_next(httpx.ConnectError("connection refused"))

    async with api:
        response = await api.put(f"{BASE}/osmosis", json={"mastered": True})

    assert response.status_code == 503
    assert response.json()["error"]["category"] == "EXTERNAL_SERVICE_ERROR"


@pytest.mark.asyncio
async def test_list_falls_back_to_empty_on_failure(api, fake_client) -> None:
    fake_client.fail_next(httpx.ConnectError("connection refused"))

    async with api:
        response = await api.get(BASE)

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_invalid_body_is_422(api) -> None:
    async with api:
        response = await api.post(BASE, json={"section": ""})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_requires_authentication(fake_client) -> None:
    app = create_app()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as api:
        response = await api.get(BASE)

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_health_and_security_headers(api) -> None:
    async with api:
        response = await api.get("/health")

    assert response.json() == {"status": "healthy"}
    assert response.headers["x-content-type-options"] == "nosniff"


@pytest.mark.asyncio
async def test_single_section_routes_use_repository_directly(api) -> None:
    with patch("src.progress.router.ProgressService", side_effect=AssertionError("service not expected")):
        async with api:
            saved = await api.post(BASE, json={"section": "osmosis"})
            updated = await api.patch(f"{BASE}/osmosis", json={"mastered": True})
            upserted = await api.put(f"{BASE}/mitosis", json={"mastered": False})
            fetched = await api.get(f"{BASE}/osmosis")
            deleted = await api.delete(f"{BASE}/osmosis")

    assert [r.status_code for r in (saved, updated, upserted, fetched, deleted)] == [201, 200, 200, 200, 204]
    assert fetched.json()["mastered"] is True
