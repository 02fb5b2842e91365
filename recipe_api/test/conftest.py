# recipe_api/test/conftest.py

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from recipe_api.adapters.inbound.api.deps import get_user_repository
from recipe_api.main import create_app
from recipe_api.test.helpers.http import BASE_URL, make_settings
from recipe_api.test.helpers.users import InMemoryUserRepository


@pytest.fixture
def test_settings():
    return make_settings()


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def app(test_settings, users):
    """Aplicação nova por teste: contadores do rate limiter zerados."""
    application = create_app(test_settings)
    application.dependency_overrides[get_user_repository] = lambda: users
    return application


@pytest_asyncio.fixture
async def async_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
        yield client
