"""Pydantic response model for the push hook endpoint."""

from typing import Literal

from pydantic import BaseModel, Field


class DispatchResult(BaseModel):
    """Outcome of dispatching one push event.

    ``notified`` lists the consumer (direct trigger) or the source remotes
    (source-aware owner) whose notification was delivered. ``suppressed``
    maps a remote to the rule that stopped it; ``ignored`` lists remotes
    that opted out of push notifications.
    """

    status: Literal["accepted", "dropped", "ignored"]
    reason: str | None = None
    notified: list[str] = Field(default_factory=list)
    suppressed: dict[str, str] = Field(default_factory=dict)
    ignored: list[str] = Field(default_factory=list)
