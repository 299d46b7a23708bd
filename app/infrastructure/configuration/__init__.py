"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    MultilangSettings: Registry and duplication settings
    I18nSettings: Translation catalog settings

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    translations_dir = settings.translations_dir
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features import MultilangSettings
from infrastructure.configuration.infrastructure import I18nSettings

__all__ = ["Settings", "MultilangSettings", "I18nSettings"]
