"""Multilang engine configuration settings - main aggregator."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.features import MultilangSettings
from infrastructure.configuration.infrastructure import I18nSettings

# app/ directory: this file is at app/infrastructure/configuration/settings.py
APP_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Engine configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.

    - **Features**: language registry and duplication (``multilang``)
    - **Infrastructure**: translation catalogs (``i18n``)

    Environment Variables:
        ENVIRONMENT: Deployment environment name (default: development)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        languages_file = settings.languages_file
        if settings.is_production:
            ...
        ```
    """

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    multilang: MultilangSettings
    i18n: I18nSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if ENVIRONMENT is "production", False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def translations_dir(self) -> Path:
        """Directory holding translation catalogs."""
        if self.i18n.TRANSLATIONS_DIR:
            return Path(self.i18n.TRANSLATIONS_DIR)
        return APP_ROOT / "translations"

    @property
    def languages_file(self) -> Path:
        """Path of the language registry file."""
        if self.multilang.LANGUAGES_FILE:
            return Path(self.multilang.LANGUAGES_FILE)
        return self.translations_dir / "languages.json"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "multilang": MultilangSettings,
            "i18n": I18nSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
