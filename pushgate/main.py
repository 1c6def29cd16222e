"""FastAPI application receiving GitLab push hooks."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pushgate.config import settings
from pushgate.db.engine import dispose_engine, init_engine
from pushgate.logging_config import configure_logging
from pushgate.routers import health, webhooks


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, open the registry database and pick the task queue."""
    configure_logging(
        json_logs=not settings.debug, log_level=settings.log_level, service=settings.app_name
    )
    await init_engine(settings.database_url, echo=settings.debug)

    if settings.gcp_project:
        from pushgate.dependencies import init_production_deps

        init_production_deps(
            gcp_project=settings.gcp_project,
            gcp_location=settings.gcp_location,
            cloud_tasks_queue=settings.cloud_tasks_queue,
        )

    yield
    await dispose_engine()


app = FastAPI(title=settings.app_name, lifespan=lifespan)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 response for any unhandled exception."""
    logger = structlog.get_logger()
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(health.router)
app.include_router(webhooks.router)
