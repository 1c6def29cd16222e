"""Execution identity for push notifications.

Webhook requests are authenticated by the project's shared secret, not by
whoever happens to be calling, so consumers are always notified as the
``SYSTEM`` identity. The identity lives in a context variable and is bound
into the structlog context for the duration of the run.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

import structlog


@dataclass(frozen=True)
class Identity:
    """A principal that actions run as."""

    name: str
    elevated: bool = False


SYSTEM = Identity("SYSTEM", elevated=True)
ANONYMOUS = Identity("anonymous")

_current: ContextVar[Identity] = ContextVar("pushgate_identity", default=ANONYMOUS)


def current_identity() -> Identity:
    """Return the identity the current context runs as."""
    return _current.get()


@contextmanager
def impersonate(identity: Identity) -> Iterator[Identity]:
    """Run the enclosed block as *identity*, restoring the previous one on exit."""
    token = _current.set(identity)
    log_tokens = structlog.contextvars.bind_contextvars(identity=identity.name)
    try:
        yield identity
    finally:
        structlog.contextvars.reset_contextvars(**log_tokens)
        _current.reset(token)


def elevated_identity() -> AbstractContextManager[Identity]:
    """Shorthand for ``impersonate(SYSTEM)``."""
    return impersonate(SYSTEM)
