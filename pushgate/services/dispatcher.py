"""Push event dispatch to the consumer configured for a project.

The dispatcher normalizes the payload, drops events whose repository URL is
blank, then notifies the consumer as ``SYSTEM``:

* a direct trigger receives the whole event;
* a source-aware owner is told which of its watched sources changed, after
  each source's exclusion rules and the ``[ci-skip]`` marker have been
  checked against the latest commit.

Delivery failures inside a consumer are logged and leave the consumer or
source out of ``notified``; the push itself was still accepted.
"""

from __future__ import annotations

import structlog

from pushgate.schemas.dispatch import DispatchResult
from pushgate.schemas.webhooks import PushEvent
from pushgate.services.commits import latest_commit
from pushgate.services.consumers import Consumer, DirectTrigger, SourceAwareOwner
from pushgate.services.errors import UnsupportedConsumerError
from pushgate.services.identity import ANONYMOUS, Identity, elevated_identity
from pushgate.services.matcher import eligible_sources
from pushgate.services.normalizer import normalize_push_event
from pushgate.services.suppression import suppression_reason

logger = structlog.get_logger()


class PushDispatcher:
    """Decide whether a push notifies a consumer, and notify it."""

    def __init__(
        self,
        *,
        match_event_repository: bool = False,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._match_event_repository = match_event_repository
        self._log = log or logger

    async def dispatch(
        self, consumer: Consumer, event: PushEvent, caller: Identity = ANONYMOUS
    ) -> DispatchResult:
        """Dispatch *event* to *consumer*.

        *caller* is only recorded; the notification always runs elevated.

        Raises:
            UnsupportedConsumerError: If the consumer has no push capability.
        """
        log = self._log.bind(project=consumer.name, caller=caller.name)
        event = normalize_push_event(event, log)

        if event.repository is not None and not (event.repository.url or "").strip():
            log.warning("no_repository_url")
            return DispatchResult(status="dropped", reason="no repository url")

        trigger = consumer.as_direct_trigger()
        if trigger is not None:
            with elevated_identity():
                delivered = await self._trigger(trigger, event, log)
            return DispatchResult(
                status="accepted", notified=[consumer.name] if delivered else []
            )

        owner = consumer.as_source_aware_owner()
        if owner is not None:
            result = DispatchResult(status="accepted")
            with elevated_identity():
                await self._notify_sources(owner, event, result, log)
            return result

        log.info("push_hook_unsupported")
        raise UnsupportedConsumerError()

    async def _trigger(
        self, trigger: DirectTrigger, event: PushEvent, log: structlog.stdlib.BoundLogger
    ) -> bool:
        try:
            await trigger.on_post(event)
        except Exception:
            log.exception("push_trigger_failed", ref=event.ref)
            return False
        return True

    async def _notify_sources(
        self,
        owner: SourceAwareOwner,
        event: PushEvent,
        result: DispatchResult,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        commit = latest_commit(event)
        for source in eligible_sources(
            owner, event, match_event_repository=self._match_event_repository, log=log
        ):
            reason = suppression_reason(commit, source.exclusions, log)
            if reason is not None:
                log.debug("source_notification_suppressed", remote=source.remote, reason=reason)
                result.suppressed[source.remote] = reason
                continue

            if source.ignore_on_push_notifications:
                log.debug("source_ignores_push_notifications", remote=source.remote)
                result.ignored.append(source.remote)
                continue

            log.debug("notify_source_owner", remote=source.remote)
            try:
                await owner.on_source_updated(source)
            except Exception:
                log.exception("source_notification_failed", remote=source.remote)
                continue
            result.notified.append(source.remote)
