"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.multilang import MultilangSettings

__all__ = [
    "MultilangSettings",
]
