"""Consumers of push notifications and the sources they watch.

A consumer exposes its capabilities through ``as_direct_trigger`` and
``as_source_aware_owner``; the dispatcher asks for each in turn instead of
inspecting concrete types. Consumers hand the actual work to a ``TaskQueue``
so the push request only records the decision.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from functools import cached_property
from typing import Protocol

import structlog

from pushgate.schemas.builds import BuildRequestPayload, SourceScanPayload
from pushgate.schemas.webhooks import PushEvent
from pushgate.services.task_queue import TaskQueue

logger = structlog.get_logger()

_LINE_BREAKS = re.compile(r"[\r\n]+")


class SourceKind(StrEnum):
    """Backing type of a watched source. Only plain git remotes are matched."""

    GIT = "git"
    OTHER = "other"


@dataclass(frozen=True)
class UserExclusion:
    """Suppress pushes whose latest commit was authored by one of these users.

    ``excluded_users`` holds one user name per line, as entered in the
    project configuration.
    """

    excluded_users: str

    @cached_property
    def excluded_users_normalized(self) -> frozenset[str]:
        return frozenset(
            user.strip() for user in _LINE_BREAKS.split(self.excluded_users) if user.strip()
        )


@dataclass(frozen=True)
class MessageExclusion:
    """Suppress pushes whose latest commit message fully matches a regular expression."""

    excluded_message: str


ExclusionRule = UserExclusion | MessageExclusion


@dataclass(frozen=True)
class WatchedSource:
    """A repository a consumer observes for changes."""

    remote: str
    kind: SourceKind = SourceKind.GIT
    ignore_on_push_notifications: bool = False
    exclusions: tuple[ExclusionRule, ...] = ()


class DirectTrigger(Protocol):
    """Capability of consumers that build straight from the push payload."""

    async def on_post(self, event: PushEvent) -> None: ...


class SourceAwareOwner(Protocol):
    """Capability of consumers that rescan their watched sources on change."""

    name: str

    @property
    def sources(self) -> Sequence[WatchedSource]: ...

    async def on_source_updated(self, source: WatchedSource) -> None: ...


class Consumer(Protocol):
    """A configured project that may receive push notifications."""

    name: str

    def as_direct_trigger(self) -> DirectTrigger | None: ...

    def as_source_aware_owner(self) -> SourceAwareOwner | None: ...


@dataclass
class BuildJob:
    """A job with a push trigger; each accepted push becomes a build request."""

    name: str
    task_queue: TaskQueue
    base_url: str

    def as_direct_trigger(self) -> DirectTrigger:
        return self

    def as_source_aware_owner(self) -> None:
        return None

    async def on_post(self, event: PushEvent) -> None:
        """Enqueue a build request for this job from the push payload."""
        repository = event.repository
        payload = BuildRequestPayload(
            project=self.name,
            ref=event.ref,
            before=event.before,
            after=event.after,
            repository_url=repository.url if repository else None,
            user_name=event.user_name,
        )
        task_name = await self.task_queue.enqueue(f"{self.base_url}/builds/trigger", payload)
        logger.info("build_requested", project=self.name, ref=event.ref, task=task_name)


@dataclass
class MultiBranchProject:
    """A project that discovers branches from its watched sources."""

    name: str
    task_queue: TaskQueue
    base_url: str
    sources: Sequence[WatchedSource] = field(default_factory=tuple)

    def as_direct_trigger(self) -> None:
        return None

    def as_source_aware_owner(self) -> SourceAwareOwner:
        return self

    async def on_source_updated(self, source: WatchedSource) -> None:
        """Enqueue a rescan of *source* for this project."""
        payload = SourceScanPayload(project=self.name, remote=source.remote)
        task_name = await self.task_queue.enqueue(f"{self.base_url}/builds/scan", payload)
        logger.info(
            "source_scan_requested", project=self.name, remote=source.remote, task=task_name
        )


@dataclass
class Folder:
    """A container of other projects. It cannot react to pushes."""

    name: str

    def as_direct_trigger(self) -> None:
        return None

    def as_source_aware_owner(self) -> None:
        return None
