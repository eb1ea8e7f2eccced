"""Logging and observability setup built on Pydantic Logfire.

Modules log through the standard library (``logging.getLogger(__name__)``) and
pass structured context in ``extra``. ``configure_logfire`` routes those records
into Logfire, which only ships them when a token is configured.

Task events carry the owner and task ids:
    log_task_event(logger, "info", "Task created", user_id="u1", task_id="t1")
"""

import logging

import logfire
from fastapi import FastAPI

from src.core.config import settings


SERVICE_NAME = "taskflow"


def configure_logfire() -> None:
    """Configure Logfire and attach it to the root logger.

    Safe to call more than once; the handler is only added the first time.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name=SERVICE_NAME,
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )

    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())
    if not any(isinstance(handler, logfire.LogfireLoggingHandler) for handler in root.handlers):
        root.addHandler(logfire.LogfireLoggingHandler())

    logging.getLogger(__name__).info(
        "Logfire configured", extra={"environment": settings.environment, "level": settings.log_level}
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by ``app``."""
    logfire.instrument_fastapi(app)
    logging.getLogger(__name__).info("FastAPI instrumentation configured")


def span(name: str, **attributes: object) -> logfire.LogfireSpan:
    """Open a span around a service operation.

    Usage:
        with span("task_service.update", task_id=task_id):
            ...
    """
    return logfire.span(name, **attributes)


def log_task_event(
    logger: logging.Logger,
    level: str,
    message: str,
    *,
    user_id: str,
    task_id: str | None = None,
    **extra: object,
) -> None:
    """Log a task lifecycle event with owner and task context.

    Args:
        logger: Logger instance to use
        level: Log level name ("debug", "info", "warning", "error")
        message: Log message
        user_id: Owner the event applies to
        task_id: Task the event applies to, if it concerns a single task
        **extra: Additional context fields
    """
    context: dict[str, object] = {"user_id": user_id, **extra}
    if task_id is not None:
        context["task_id"] = task_id
    logger.log(logging.getLevelName(level.upper()), message, extra=context)
