"""Shared fixtures: in-memory doubles and the FastAPI test client."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from pushgate.db.session import get_db_session
from pushgate.dependencies import get_project_registry, get_task_queue
from pushgate.main import app
from pushgate.services.projects import InMemoryProjectRegistry
from pushgate.services.task_queue import InMemoryTaskQueue


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Create a mock async database session that executes successfully."""
    session = AsyncMock(spec=AsyncSession)
    session.execute.return_value = None
    return session


@pytest.fixture
def mock_task_queue() -> InMemoryTaskQueue:
    """Create a fresh in-memory task queue for test inspection."""
    return InMemoryTaskQueue()


@pytest.fixture
def project_registry() -> InMemoryProjectRegistry:
    """Create an empty in-memory project registry."""
    return InMemoryProjectRegistry()


@pytest.fixture
async def client(
    mock_db_session: AsyncMock,
    mock_task_queue: InMemoryTaskQueue,
    project_registry: InMemoryProjectRegistry,
) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient with the database and queue replaced by doubles."""

    async def _override_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield mock_db_session  # type: ignore[misc]

    app.dependency_overrides[get_db_session] = _override_db_session
    app.dependency_overrides[get_project_registry] = lambda: project_registry
    app.dependency_overrides[get_task_queue] = lambda: mock_task_queue
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
