"""Centralized FastAPI dependencies for use with Depends()."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pushgate.config import settings
from pushgate.db.session import get_db_session
from pushgate.services.dispatcher import PushDispatcher
from pushgate.services.projects import ProjectRegistry, SqlProjectRegistry
from pushgate.services.task_queue import InMemoryTaskQueue, TaskQueue

_task_queue: TaskQueue = InMemoryTaskQueue()


def init_production_deps(
    gcp_project: str,
    gcp_location: str,
    cloud_tasks_queue: str,
) -> None:
    """Deliver build requests through Cloud Tasks instead of the in-memory queue.

    The import is lazy so the module loads without the GCP SDK installed.
    """
    global _task_queue  # noqa: PLW0603

    from pushgate.services.task_queue import CloudTasksQueue

    _task_queue = CloudTasksQueue(gcp_project, gcp_location, cloud_tasks_queue)


def get_task_queue() -> TaskQueue:
    """Return the task queue consumers enqueue build requests on.

    Defaults to InMemoryTaskQueue; ``init_production_deps()`` swaps it.
    """
    return _task_queue


def get_project_registry(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ProjectRegistry:
    """Return a registry reading project configuration from the request session."""
    return SqlProjectRegistry(session)


def get_dispatcher() -> PushDispatcher:
    """Return a dispatcher configured from application settings."""
    return PushDispatcher(match_event_repository=settings.match_event_repository)


__all__ = [
    "get_db_session",
    "get_dispatcher",
    "get_project_registry",
    "get_task_queue",
    "init_production_deps",
]
