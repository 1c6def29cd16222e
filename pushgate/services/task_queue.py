"""Delivery of build and scan requests through a task queue.

Consumers never start builds inline: they hand a build request model to a
``TaskQueue`` which posts it to the build runner later. ``CloudTasksQueue``
is the production implementation; ``InMemoryTaskQueue`` keeps the requests in
a list for local development and the test suite.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

import structlog
from pydantic import BaseModel

logger = structlog.get_logger()


class TaskQueue(Protocol):
    """Protocol for handing build requests to the build runner."""

    async def enqueue(self, url: str, request: BaseModel) -> str:
        """Schedule a POST of *request* to *url* and return the task name."""
        ...


class CloudTasksQueue:
    """Build requests delivered as Google Cloud Tasks HTTP tasks.

    ``google.cloud.tasks_v2`` is imported lazily so the service starts
    without the GCP SDK when running against the in-memory queue. The client
    is synchronous, so task creation runs in a worker thread.
    """

    def __init__(self, project: str, location: str, queue: str) -> None:
        from google.cloud import tasks_v2

        self._tasks = tasks_v2
        self._client = tasks_v2.CloudTasksClient()
        self._parent = self._client.queue_path(project, location, queue)

    def _http_task(self, url: str, request: BaseModel):
        return self._tasks.Task(
            http_request=self._tasks.HttpRequest(
                http_method=self._tasks.HttpMethod.POST,
                url=url,
                headers={"Content-Type": "application/json"},
                body=request.model_dump_json().encode(),
            ),
        )

    async def enqueue(self, url: str, request: BaseModel) -> str:
        create = self._tasks.CreateTaskRequest(
            parent=self._parent, task=self._http_task(url, request)
        )
        response = await asyncio.to_thread(self._client.create_task, create)
        logger.debug("build_task_created", url=url, task=response.name)
        return response.name


class InMemoryTaskQueue:
    """Keeps build requests as plain dicts instead of sending them."""

    def __init__(self) -> None:
        self.tasks: list[dict] = []

    async def enqueue(self, url: str, request: BaseModel) -> str:
        self.tasks.append({"url": url, "payload": request.model_dump(mode="json")})
        task_name = f"local-task-{len(self.tasks)}"
        logger.debug("build_task_recorded", url=url, task=task_name)
        return task_name
