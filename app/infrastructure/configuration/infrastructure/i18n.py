"""Translation catalog infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class I18nSettings(InfrastructureSettings):
    """Translation catalog discovery.

    Environment Variables:
        I18N_TRANSLATIONS_DIR: Directory holding ``<iso2>.json`` and
            ``<locale>.json`` catalogs. Empty means ``<app>/translations``.

    Example:
        ```python
        from infrastructure.services import get_settings

        translations_dir = get_settings().i18n.TRANSLATIONS_DIR
        ```
    """

    TRANSLATIONS_DIR: str = Field(default="", alias="I18N_TRANSLATIONS_DIR")
