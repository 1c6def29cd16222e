"""Repair push payloads sent without a ``project`` block.

Older GitLab releases only send ``repository``. The namespace is then derived
from the path of ``repository.git_http_url``: for
``https://gitlab.example.com/group/sub/repo.git`` it is ``group/sub``.
"""

from __future__ import annotations

from urllib.parse import urlsplit

import structlog

from pushgate.schemas.webhooks import PushEvent, PushProject

logger = structlog.get_logger()


def _namespace_from_path(path: str) -> str:
    stripped = path[1:] if path.startswith("/") else path
    return stripped[: max(stripped.rfind("/"), 0)]


def normalize_push_event(
    event: PushEvent, log: structlog.stdlib.BoundLogger | None = None
) -> PushEvent:
    """Return *event* with ``project.namespace`` filled in when it can be derived.

    Never raises: an unusable URL is logged and the event is returned as is.
    """
    log = log or logger
    if event.project is not None or event.repository is None:
        return event

    http_url = event.repository.git_http_url
    try:
        parts = urlsplit(http_url or "")
    except ValueError:
        parts = None
    if parts is None or not parts.scheme:
        log.warning("invalid_repository_url", git_http_url=http_url)
        return event

    if not parts.path.strip():
        log.warning("namespace_not_found", git_http_url=http_url)
        return event

    namespace = _namespace_from_path(parts.path)
    return event.model_copy(update={"project": PushProject(namespace=namespace)})
