"""Job context binding for structured logging.

Binds job-scoped context (correlation id, target language, job name) so that
every log entry emitted while a provisioning or teardown run is in progress
carries it.

Usage:
    from infrastructure.logging import bind_job_context

    with bind_job_context(job="enable_language", language="fr"):
        logger.info("pages_duplicated", count=12)

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_job_context(
    correlation_id: Optional[str] = None,
    job: Optional[str] = None,
    language: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind job-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique run identifier. Auto-generated if not provided.
        job: Name of the job being run (e.g., "enable_language").
        language: Target language code of the run.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id bound for the block.
    """
    context: dict[str, Any] = {}
    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if job is not None:
        context["job"] = job

    if language is not None:
        context["language"] = language

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_job_context() -> None:
    """Clear all job-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
