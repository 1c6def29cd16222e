"""Suppression rules evaluated against the latest commit of a push.

Rules run in the order they are configured on a source and the first match
wins. A rule that cannot be evaluated (bad pattern, missing field) does not
match; nothing here raises.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import structlog

from pushgate.schemas.webhooks import Commit
from pushgate.services.consumers import ExclusionRule, MessageExclusion, UserExclusion

logger = structlog.get_logger()

CI_SKIP_MARKER = "[ci-skip]"


def is_excluded_author(
    commit: Commit, rule: UserExclusion, log: structlog.stdlib.BoundLogger | None = None
) -> bool:
    """Return True when the commit author is in the rule's excluded users."""
    author = commit.author.name if commit.author else None
    if author is None or author not in rule.excluded_users_normalized:
        return False
    (log or logger).debug("commit_excluded_author", commit=commit.id, author=author)
    return True


def is_excluded_message(
    commit: Commit, rule: MessageExclusion, log: structlog.stdlib.BoundLogger | None = None
) -> bool:
    """Return True when the whole commit message matches the rule's pattern."""
    log = log or logger
    if commit.message is None:
        return False
    try:
        matched = re.fullmatch(rule.excluded_message, commit.message) is not None
    except (re.error, TypeError) as exc:
        log.debug("invalid_exclusion_pattern", pattern=rule.excluded_message, error=str(exc))
        return False
    if matched:
        log.debug("commit_excluded_message", commit=commit.id, message=commit.message)
    return matched


def is_ci_skip(commit: Commit | None, log: structlog.stdlib.BoundLogger | None = None) -> bool:
    """Return True when the commit message carries the ``[ci-skip]`` marker."""
    if commit is None or commit.message is None or CI_SKIP_MARKER not in commit.message:
        return False
    (log or logger).debug("commit_ci_skip", commit=commit.id, message=commit.message)
    return True


def suppression_reason(
    commit: Commit | None,
    rules: Iterable[ExclusionRule],
    log: structlog.stdlib.BoundLogger | None = None,
) -> str | None:
    """Return why *commit* suppresses a notification, or None if it does not.

    A push without commits leaves nothing to filter on and is never suppressed.
    """
    if commit is None:
        return None
    for rule in rules:
        match rule:
            case UserExclusion():
                if is_excluded_author(commit, rule, log):
                    return "excluded_author"
            case MessageExclusion():
                if is_excluded_message(commit, rule, log):
                    return "excluded_message"
    if is_ci_skip(commit, log):
        return "ci_skip"
    return None
