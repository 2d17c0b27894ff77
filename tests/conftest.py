"""
Test configuration for pytest
"""

import os
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Test environment variables
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["ENVIRONMENT"] = "test"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

from pdv.core.database import get_store  # noqa: E402
from pdv.core.store import JsonStore  # noqa: E402
from pdv.main import app  # noqa: E402


@pytest.fixture(scope="function")
def store(tmp_path) -> JsonStore:
    """A fresh record store in a temporary data directory"""
    json_store = JsonStore(tmp_path / "data")
    json_store.initialize()
    return json_store


@pytest.fixture(scope="function")
async def client(store: JsonStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, using the test store"""
    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def register_tenant(
    client: AsyncClient,
    email: str = "dono@lojax.com",
    password: str = "segredo123",
    name: str = "Dono",
    store_name: str = "Loja X",
) -> dict:
    """Register a store through the API and return the response body"""
    response = await client.post("/api/auth/register", json={
        "email": email,
        "password": password,
        "name": name,
        "storeName": store_name,
    })
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
