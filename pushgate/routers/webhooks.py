"""GitLab push hook endpoint, authenticated by the project's secret token."""

import hmac
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, status

from pushgate.config import settings
from pushgate.dependencies import get_dispatcher, get_project_registry, get_task_queue
from pushgate.schemas.dispatch import DispatchResult
from pushgate.schemas.webhooks import PushEvent
from pushgate.services.dispatcher import PushDispatcher
from pushgate.services.errors import UnsupportedConsumerError
from pushgate.services.projects import ProjectRegistry, build_consumer
from pushgate.services.task_queue import TaskQueue

logger = structlog.get_logger()

router = APIRouter(prefix="/project", tags=["webhooks"])

PUSH_HOOK = "Push Hook"


def verify_gitlab_token(expected: str | None, provided: str | None) -> None:
    """Check the ``X-Gitlab-Token`` header against the project's secret.

    Projects without a secret accept any request.

    Raises:
        HTTPException: 401 if the token is missing or does not match.
    """
    if not expected:
        return
    if provided is None or not hmac.compare_digest(expected.encode(), provided.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )


@router.post("/{project_name:path}", response_model=DispatchResult)
async def push_hook(
    project_name: str,
    event: PushEvent,
    registry: Annotated[ProjectRegistry, Depends(get_project_registry)],
    task_queue: Annotated[TaskQueue, Depends(get_task_queue)],
    dispatcher: Annotated[PushDispatcher, Depends(get_dispatcher)],
    x_gitlab_token: Annotated[str | None, Header()] = None,
    x_gitlab_event: Annotated[str | None, Header()] = None,
) -> DispatchResult:
    """Receive a push hook for *project_name* and notify its consumer."""
    project = await registry.get(project_name)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    verify_gitlab_token(project.secret_token, x_gitlab_token)

    if x_gitlab_event is not None and x_gitlab_event != PUSH_HOOK:
        logger.info("webhook_skipped_event", project=project_name, gitlab_event=x_gitlab_event)
        return DispatchResult(status="ignored", reason=f"unsupported event: {x_gitlab_event}")

    consumer = build_consumer(project, task_queue, settings.build_handler_base_url)
    try:
        result = await dispatcher.dispatch(consumer, event)
    except UnsupportedConsumerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from None

    logger.info(
        "webhook_processed",
        project=project_name,
        status=result.status,
        notified=len(result.notified),
        commits=len(event.commits or []),
    )
    return result
