"""Selection of the commit that push filters evaluate."""

from pushgate.schemas.webhooks import Commit, PushEvent


def latest_commit(event: PushEvent) -> Commit | None:
    """Return the most recent commit of the push, or None when there are none."""
    commits = event.commits
    return commits[-1] if commits else None
