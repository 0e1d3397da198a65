"""Fixtures for API tests: a real app on a temporary database."""

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from stockledger.api.main import create_app
from stockledger.application.use_cases import SeedUsersUseCase
from stockledger.config import Settings
from stockledger.infrastructure.storage.sqlite import SQLiteUserStore


@pytest.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    """Started application with the default accounts seeded."""
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        seed = SeedUsersUseCase(SQLiteUserStore(app.state.pool), app.state.password_hasher)
        await seed.execute()
        yield app


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def login(client: AsyncClient, username: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def admin_headers(client: AsyncClient) -> dict[str, str]:
    return await login(client, "admin", "admin123")


@pytest.fixture
async def user_headers(client: AsyncClient) -> dict[str, str]:
    return await login(client, "user", "user123")


@pytest.fixture
def create_item(client: AsyncClient, admin_headers: dict[str, str]):
    """POST an item as admin and return the response body."""

    async def _create(**overrides) -> dict:
        body = {
            "description": "Hammer",
            "unit": "pcs",
            "category": "tool",
            "stockIn": 10,
            "stockOut": 0,
        }
        body.update(overrides)
        response = await client.post("/api/items", json=body, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
