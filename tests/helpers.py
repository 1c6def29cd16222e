"""Payload builders shared by the test modules."""

from pushgate.schemas.webhooks import PushEvent


def make_commit(commit_id: str, message: str, author: str) -> dict:
    """Build a push hook commit entry."""
    return {
        "id": commit_id,
        "message": message,
        "timestamp": "2026-10-19T12:00:00Z",
        "url": f"https://gitlab.example.com/group/repo/-/commit/{commit_id}",
        "author": {"name": author, "email": f"{author}@example.com"},
    }


def make_push_payload(
    *,
    commits: list[dict] | None = None,
    with_project: bool = True,
    repository: dict | None = None,
) -> dict:
    """Build a realistic GitLab push hook payload.

    ``with_project=False`` drops the ``project`` block the way older GitLab
    versions do. ``repository`` replaces the default repository block.
    """
    payload = {
        "object_kind": "push",
        "ref": "refs/heads/main",
        "before": "0" * 40,
        "after": "c2" + "0" * 38,
        "user_name": "Alice",
        "project_id": 15,
        "repository": repository
        if repository is not None
        else {
            "name": "repo",
            "url": "git@gitlab.example.com:group/repo.git",
            "homepage": "https://gitlab.example.com/group/repo",
            "git_http_url": "https://gitlab.example.com/group/repo.git",
            "git_ssh_url": "git@gitlab.example.com:group/repo.git",
        },
        "commits": commits if commits is not None else [make_commit("c1", "initial", "alice")],
        "total_commits_count": len(commits) if commits is not None else 1,
    }
    if with_project:
        payload["project"] = {
            "name": "repo",
            "namespace": "group",
            "path_with_namespace": "group/repo",
            "web_url": "https://gitlab.example.com/group/repo",
        }
    return payload


def make_event(**kwargs) -> PushEvent:
    """Build a validated ``PushEvent`` from ``make_push_payload`` arguments."""
    return PushEvent.model_validate(make_push_payload(**kwargs))


