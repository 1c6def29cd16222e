"""Structured logging configuration using structlog.

``configure_logging`` sets up the structlog processor chain and routes it
through the stdlib root logger, so push decisions are emitted as JSON in
production and as readable console lines while developing. Context bound
with ``structlog.contextvars`` (the active identity, the project name) is
merged into every event.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
    *, json_logs: bool = True, log_level: str = "INFO", service: str | None = None
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        json_logs: Render JSON when *True*, console output otherwise.
        log_level: Root log level name (e.g. ``"INFO"``, ``"DEBUG"``).
        service: Optional service name added to every event.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    if service:
        structlog.contextvars.bind_contextvars(service=service)
