"""API-test fixtures.

The app runs against an in-memory journal and a manual clock injected
through dependency overrides, so no database is needed.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.mr_engine.api.dependencies import get_staking_engine
from src.mr_engine.application.service import StakingEngine
from src.mr_gateway.auth.jwt_handler import create_access_token


@pytest.fixture
async def client(staking_engine: StakingEngine) -> AsyncClient:
    app.dependency_overrides[get_staking_engine] = lambda: staking_engine
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('owner')}"}


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('alice')}"}
