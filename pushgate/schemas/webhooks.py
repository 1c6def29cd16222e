"""Pydantic models for GitLab push hook payloads.

Every field except the commit id is optional: older GitLab versions omit the
``project`` block entirely and some senders leave out ``commits`` on branch
creation. Unknown keys are ignored.
"""

from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class CommitAuthor(_Frozen):
    """Author information from a Git commit."""

    name: str | None = None
    email: str | None = None


class Commit(_Frozen):
    """A single commit within a push event."""

    id: str
    message: str | None = None
    timestamp: str | None = None
    url: str | None = None
    author: CommitAuthor | None = None


class PushRepository(_Frozen):
    """Repository metadata from the webhook payload."""

    name: str | None = None
    url: str | None = None
    homepage: str | None = None
    git_http_url: str | None = None
    git_ssh_url: str | None = None


class PushProject(_Frozen):
    """Project metadata; derived from the repository URL when absent."""

    namespace: str | None = None
    name: str | None = None
    path_with_namespace: str | None = None
    web_url: str | None = None


class PushEvent(_Frozen):
    """GitLab push hook event payload.

    Reference: https://docs.gitlab.com/ee/user/project/integrations/webhook_events.html#push-events
    """

    object_kind: str = "push"
    ref: str | None = None
    before: str | None = None
    after: str | None = None
    user_name: str | None = None
    project_id: int | None = None
    project: PushProject | None = None
    repository: PushRepository | None = None
    commits: list[Commit] | None = None
    total_commits_count: int | None = None
