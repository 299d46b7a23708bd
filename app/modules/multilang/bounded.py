"""Small helpers shared by the duplication steps.

Every loop over external data goes through ``bounded`` so malformed input
degrades to a partial result. Steps that depend on an optional content store
capability are wrapped with ``degrades_on_missing_capability``.
"""

import functools
import itertools
import re
from typing import Any, Callable, Iterable, Iterator, TypeVar

from infrastructure.logging import get_module_logger

logger = get_module_logger()

T = TypeVar("T")


def bounded(items: Iterable[T], limit: int) -> Iterator[T]:
    """Yield at most ``limit`` items."""
    return itertools.islice(items, max(limit, 0))


def require_code(value: str, name: str = "language_code") -> str:
    """Reject empty language code arguments."""
    if not value or not str(value).strip():
        raise ValueError(f"{name} must not be empty")
    return value


def slugify(value: str) -> str:
    """Lower-case, dash-separated path segment."""
    slug = re.sub(r"[^a-z0-9_-]+", "-", str(value).strip().lower())
    return slug.strip("-")


def degrades_on_missing_capability(zero: Callable[[], Any]) -> Callable:
    """Return ``zero()`` when the content store lacks a capability.

    A store signals a missing capability by not having the method
    (AttributeError) or by raising NotImplementedError.

    Args:
        zero: Factory of the step's zero value (``int``, ``dict``...).
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (AttributeError, NotImplementedError) as e:
                logger.warning(
                    "content_store_capability_missing",
                    operation=func.__name__,
                    error=str(e),
                )
                return zero()

        return wrapper

    return decorator
