from typing import AsyncGenerator

import pytest
from fastapi import Depends
from httpx import ASGITransport, AsyncClient

from app.auth.dependencies import get_public_school_api, get_school_api, oauth2_scheme
from app.core.school_api import SchoolApiClient
from app.main import app

from tests.fakes import FakeSchoolBackend


@pytest.fixture()
def backend() -> FakeSchoolBackend:
    fake = FakeSchoolBackend()
    fake.seed_school()
    return fake


@pytest.fixture()
async def school_api(backend: FakeSchoolBackend) -> AsyncGenerator[SchoolApiClient, None]:
    async with backend.client() as api:
        yield api


@pytest.fixture()
async def client(backend: FakeSchoolBackend) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the portal app, upstream calls going to the fake backend."""

    async def override_school_api(token: str = Depends(oauth2_scheme)) -> AsyncGenerator[SchoolApiClient, None]:
        async with backend.client(token) as api:
            yield api

    async def override_public_school_api() -> AsyncGenerator[SchoolApiClient, None]:
        async with backend.client(None) as api:
            yield api

    app.dependency_overrides[get_school_api] = override_school_api
    app.dependency_overrides[get_public_school_api] = override_public_school_api
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": "Bearer test-token"},
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
