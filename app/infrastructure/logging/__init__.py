"""Structured logging infrastructure built on structlog.

Public API:
    - configure_logging(): (Re)configure logging output
    - get_module_logger(): Logger bound to the calling module
    - bind_job_context(): Context manager binding a run's correlation id
    - get_correlation_id(): Correlation id of the current run, if any
    - clear_job_context(): Drop all bound run context

Example:
    from infrastructure.logging import bind_job_context, get_module_logger

    logger = get_module_logger()
    with bind_job_context(job="enable_language", language="fr"):
        logger.info("language_provisioning_started")
"""

from infrastructure.logging.context import (
    bind_job_context,
    clear_job_context,
    get_correlation_id,
)
from infrastructure.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_job_context",
    "get_correlation_id",
    "clear_job_context",
]
