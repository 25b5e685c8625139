from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from src.api.main import create_app
from src.domain.services import IdentityService, Notification, ProjectService
from src.infrastructure.repositories.state import InMemoryStateRepository

from tests.utils import FakePostsClient


@pytest.fixture()
def repository() -> InMemoryStateRepository:
    return InMemoryStateRepository()


@pytest.fixture()
def notifications() -> list[Notification]:
    return []


@pytest.fixture()
async def identity(repository: InMemoryStateRepository) -> IdentityService:
    service = IdentityService(repository)
    await service.load()
    return service


@pytest.fixture()
async def project_service(
    repository: InMemoryStateRepository, notifications: list[Notification]
) -> ProjectService:
    service = ProjectService(repository, notifier=notifications.append)
    await service.load()
    return service


@pytest.fixture()
def posts_client() -> FakePostsClient:
    return FakePostsClient()


@pytest.fixture()
def app(repository: InMemoryStateRepository, posts_client: FakePostsClient) -> FastAPI:
    return create_app(repository=repository, posts_client=posts_client)


@pytest.fixture()
def test_client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as client:
        yield client


@pytest.fixture()
async def async_client(test_client: TestClient, app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client sharing the started application state."""
    transport = ASGITransport(app=app)  # type: ignore
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
