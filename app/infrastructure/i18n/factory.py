"""Factory functions for creating i18n components.

Provides convenience functions for building translators and the translation
service from the application settings.
"""

from pathlib import Path
from typing import Optional, Union

from infrastructure.i18n.loader import CatalogCache, get_default_cache
from infrastructure.i18n.service import (
    CurrentLanguageSource,
    LanguageListSource,
    TranslationService,
)
from infrastructure.i18n.translator import Translator
from infrastructure.logging import get_module_logger
from infrastructure.services.providers import get_settings

logger = get_module_logger()


def create_translator(
    language_code: Optional[str] = None,
    locale: Optional[str] = None,
    translations_dir: Optional[Union[str, Path]] = None,
    cache: Optional[CatalogCache] = None,
) -> Translator:
    """Create a Translator configured from settings.

    Args:
        language_code: Catalog language (default: MULTILANG_FALLBACK_LANGUAGE).
        locale: Optional locale overlay.
        translations_dir: Catalog directory (default: settings.translations_dir).
        cache: CatalogCache to load through (default: the process cache).

    Returns:
        Translator: Configured translator instance

    Usage:
        translator = create_translator("fr", locale="fr_CA")
        translator.translate("WELCOME", {"name": "Ana"})
    """
    settings = get_settings()
    directory = translations_dir or settings.translations_dir
    translator = Translator(
        language_code or settings.multilang.FALLBACK_LANGUAGE,
        locale,
        base_dir=directory,
        cache=cache if cache is not None else get_default_cache(),
    )
    logger.debug(
        "translator_created",
        language_code=translator.language_code,
        locale=translator.locale,
        translations_dir=str(directory),
    )
    return translator


def create_translation_service(
    language_context: Optional[CurrentLanguageSource] = None,
    registry: Optional[LanguageListSource] = None,
    translations_dir: Optional[Union[str, Path]] = None,
    cache: Optional[CatalogCache] = None,
) -> TranslationService:
    """Create a TranslationService configured from settings."""
    settings = get_settings()
    return TranslationService(
        translations_dir=translations_dir or settings.translations_dir,
        cache=cache if cache is not None else get_default_cache(),
        language_context=language_context,
        registry=registry,
        fallback_language=settings.multilang.FALLBACK_LANGUAGE,
    )
