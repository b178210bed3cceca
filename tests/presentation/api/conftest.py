import pytest
from httpx import ASGITransport, AsyncClient

from src.infrastructure.config.settings import Settings
from src.infrastructure.persistence.database import get_db
from src.presentation.api.app import create_app


@pytest.fixture
def app():
    return create_app(Settings())


@pytest.fixture
async def client(app, test_db):
    """HTTP client for API testing"""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
