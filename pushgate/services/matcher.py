"""Selection of the watched sources a push event applies to."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from urllib.parse import urlsplit

import structlog

from pushgate.schemas.webhooks import PushEvent
from pushgate.services.consumers import SourceAwareOwner, SourceKind, WatchedSource
from pushgate.services.errors import UnmatchableSourceUriError

logger = structlog.get_logger()

# user@host:path, as accepted by git for ssh remotes.
_SCP_LIKE = re.compile(r"^(?:(?P<user>[^@/\s]+)@)?(?P<host>[^:/\s]+):(?P<path>(?!//)\S+)$")
_DEFAULT_PORTS = {"http": 80, "https": 443, "ssh": 22, "git": 9418}


def _normalize_path(path: str) -> str:
    path = path.strip("/")
    return path.removesuffix(".git")


@dataclass(frozen=True)
class RemoteUri:
    """A git remote reduced to the parts that identify a repository.

    Two remotes are equal when scheme, host, port and path agree. The user
    part is kept for display only.
    """

    scheme: str
    host: str | None
    port: int | None
    path: str
    user: str | None = field(default=None, compare=False)

    @classmethod
    def parse(cls, remote: str | None) -> RemoteUri:
        """Parse a URL-style, scp-style or local-path remote.

        Raises:
            UnmatchableSourceUriError: If *remote* is blank or not a git remote.
        """
        value = (remote or "").strip()
        if not value or any(char.isspace() for char in value):
            raise UnmatchableSourceUriError(remote)

        if "://" in value:
            try:
                parts = urlsplit(value)
                port = parts.port
            except ValueError as exc:
                raise UnmatchableSourceUriError(remote) from exc
            scheme = parts.scheme.lower()
            if not scheme or (scheme != "file" and not parts.hostname):
                raise UnmatchableSourceUriError(remote)
            if port == _DEFAULT_PORTS.get(scheme):
                port = None
            return cls(scheme, parts.hostname, port, _normalize_path(parts.path), parts.username)

        scp = _SCP_LIKE.match(value)
        if scp:
            return cls(
                "ssh", scp["host"].lower(), None, _normalize_path(scp["path"]), scp["user"]
            )

        if value.startswith(("/", "./", "../")):
            return cls("file", None, None, _normalize_path(value))

        raise UnmatchableSourceUriError(remote)


def _event_remotes(event: PushEvent) -> list[RemoteUri]:
    repository = event.repository
    if repository is None:
        return []
    remotes = []
    for candidate in (repository.url, repository.git_http_url, repository.git_ssh_url):
        try:
            remotes.append(RemoteUri.parse(candidate))
        except UnmatchableSourceUriError:
            continue
    return remotes


def source_matches(
    source: WatchedSource, event: PushEvent, *, match_event_repository: bool = False
) -> bool:
    """Return True when *source* should be considered for *event*.

    By default a git source is compared with its own remote, so any source
    with a parseable remote is eligible and only exclusion rules filter the
    push. With ``match_event_repository`` the remote must equal one of the
    pushed repository's URLs.

    Raises:
        UnmatchableSourceUriError: If the source remote cannot be parsed.
    """
    remote = RemoteUri.parse(source.remote)
    if not match_event_repository:
        return remote == RemoteUri.parse(source.remote)
    return remote in _event_remotes(event)


def eligible_sources(
    owner: SourceAwareOwner,
    event: PushEvent,
    *,
    match_event_repository: bool = False,
    log: structlog.stdlib.BoundLogger | None = None,
) -> Iterator[WatchedSource]:
    """Yield the owner's git sources that match *event*, in configured order."""
    log = log or logger
    for source in owner.sources:
        if source.kind != SourceKind.GIT:
            continue
        try:
            matched = source_matches(
                source, event, match_event_repository=match_event_repository
            )
        except UnmatchableSourceUriError:
            log.debug("unmatchable_source_remote", project=owner.name, remote=source.remote)
            continue
        if matched:
            yield source
