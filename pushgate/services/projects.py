"""Lookup of consumer project configuration.

The registry returns plain ``ProjectConfig`` values; ``build_consumer`` turns
one into the consumer the dispatcher talks to.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pushgate.db.models import ConsumerProject, WatchedSourceRow
from pushgate.services.consumers import (
    BuildJob,
    Consumer,
    ExclusionRule,
    Folder,
    MessageExclusion,
    MultiBranchProject,
    SourceKind,
    UserExclusion,
    WatchedSource,
)
from pushgate.services.task_queue import TaskQueue


class ProjectKind(StrEnum):
    """How a project reacts to pushes."""

    JOB = "job"
    MULTIBRANCH = "multibranch"
    FOLDER = "folder"


@dataclass(frozen=True)
class ProjectConfig:
    """Configuration of one consumer project."""

    name: str
    kind: ProjectKind
    secret_token: str | None = None
    sources: tuple[WatchedSource, ...] = ()


class ProjectRegistry(Protocol):
    """Protocol for loading project configuration by name."""

    async def get(self, name: str) -> ProjectConfig | None: ...


def exclusion_from_dict(data: Mapping[str, Any]) -> ExclusionRule:
    """Build an exclusion rule from its stored form.

    Raises:
        ValueError: If the rule type is unknown.
    """
    rule_type = data.get("type")
    value = str(data.get("value") or "")
    if rule_type == "user":
        return UserExclusion(excluded_users=value)
    if rule_type == "message":
        return MessageExclusion(excluded_message=value)
    msg = f"Unknown exclusion rule type: {rule_type!r}"
    raise ValueError(msg)


def _source_from_row(row: WatchedSourceRow) -> WatchedSource:
    return WatchedSource(
        remote=row.remote,
        kind=SourceKind(row.kind),
        ignore_on_push_notifications=row.ignore_on_push_notifications,
        exclusions=tuple(exclusion_from_dict(rule) for rule in row.exclusions or []),
    )


class SqlProjectRegistry:
    """Registry backed by the ``consumer_projects`` and ``watched_sources`` tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, name: str) -> ProjectConfig | None:
        result = await self._session.execute(
            select(ConsumerProject)
            .where(ConsumerProject.name == name)
            .options(selectinload(ConsumerProject.sources))
        )
        project = result.scalar_one_or_none()
        if project is None:
            return None
        return ProjectConfig(
            name=project.name,
            kind=ProjectKind(project.kind),
            secret_token=project.secret_token,
            sources=tuple(_source_from_row(row) for row in project.sources),
        )


class InMemoryProjectRegistry:
    """Registry holding configurations in a dict, for development and tests."""

    def __init__(self, projects: list[ProjectConfig] | None = None) -> None:
        self.projects: dict[str, ProjectConfig] = {p.name: p for p in projects or []}

    def add(self, project: ProjectConfig) -> None:
        self.projects[project.name] = project

    async def get(self, name: str) -> ProjectConfig | None:
        return self.projects.get(name)


def build_consumer(config: ProjectConfig, task_queue: TaskQueue, base_url: str) -> Consumer:
    """Create the consumer for *config* that delivers through *task_queue*."""
    if config.kind is ProjectKind.JOB:
        return BuildJob(name=config.name, task_queue=task_queue, base_url=base_url)
    if config.kind is ProjectKind.MULTIBRANCH:
        return MultiBranchProject(
            name=config.name, task_queue=task_queue, base_url=base_url, sources=config.sources
        )
    return Folder(name=config.name)
