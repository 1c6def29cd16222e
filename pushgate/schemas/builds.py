"""Pydantic models for build tasks enqueued by consumers."""

from pydantic import BaseModel


class BuildRequestPayload(BaseModel):
    """Payload for build-trigger tasks enqueued by a job's push trigger."""

    project: str
    ref: str | None = None
    before: str | None = None
    after: str | None = None
    repository_url: str | None = None
    user_name: str | None = None
    cause: str = "push"


class SourceScanPayload(BaseModel):
    """Payload for scan tasks enqueued when a watched source changes."""

    project: str
    remote: str
