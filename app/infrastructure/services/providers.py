"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process.

    Tests that need different settings should call ``get_settings.cache_clear()``
    after patching the environment.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()
