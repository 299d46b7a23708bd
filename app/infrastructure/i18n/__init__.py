"""i18n system - translation catalogs, plural rules and inline call rewriting.

Main components:
- plural: CLDR plural category resolution by language family
- models: TranslationCatalog and the plural form vocabulary
- loader: JSONCatalogLoader and the shared CatalogCache
- translator: Translator with placeholder substitution and escaping
- patterns: translate_call(...) parsing
- service: TranslationService with deduplicated block rewriting
- resolvers: LocaleResolver and LanguageNegotiator for request languages
"""

from infrastructure.i18n.factory import create_translation_service, create_translator
from infrastructure.i18n.loader import (
    CatalogCache,
    JSONCatalogLoader,
    TranslationLoader,
    clear_cache,
)
from infrastructure.i18n.models import PLURAL_FORMS, TranslationCatalog
from infrastructure.i18n.patterns import PatternMatch, parse_inline_args
from infrastructure.i18n.plural import PluralRules
from infrastructure.i18n.resolvers import LanguageNegotiator, LocaleResolver
from infrastructure.i18n.service import TranslationService
from infrastructure.i18n.translator import Translator

__all__ = [
    "PLURAL_FORMS",
    "TranslationCatalog",
    "TranslationLoader",
    "JSONCatalogLoader",
    "CatalogCache",
    "clear_cache",
    "PluralRules",
    "PatternMatch",
    "parse_inline_args",
    "Translator",
    "TranslationService",
    "LocaleResolver",
    "LanguageNegotiator",
    "create_translator",
    "create_translation_service",
]
