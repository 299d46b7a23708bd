"""Multilang feature settings."""

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class MultilangSettings(FeatureSettings):
    """Language registry and content duplication configuration.

    Environment Variables:
        MULTILANG_LANGUAGES_FILE: Path to the languages registry JSON file.
            Empty means ``<app>/translations/languages.json``.
        MULTILANG_FALLBACK_LANGUAGE: Language code used when the registry has
            no default language (default: en)
        MULTILANG_FORCE_DELETE_PAGES: Permanently delete pages when a language
            is removed instead of trashing them (default: False)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        registry_file = settings.multilang.LANGUAGES_FILE
        ```
    """

    LANGUAGES_FILE: str = Field(default="", alias="MULTILANG_LANGUAGES_FILE")
    FALLBACK_LANGUAGE: str = Field(default="en", alias="MULTILANG_FALLBACK_LANGUAGE")
    FORCE_DELETE_PAGES: bool = Field(
        default=False, alias="MULTILANG_FORCE_DELETE_PAGES"
    )
