"""Translation service for rewriting content that embeds inline calls.

Provides a class-based interface to the i18n system for easier DI and testing.
The current language comes from an injected language context; the set of
known languages comes from an injected language registry.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, Union

from infrastructure.i18n.loader import CatalogCache
from infrastructure.i18n.patterns import (
    MAX_PATTERN_MATCHES,
    TRANSLATE_CALL_PATTERN,
    PatternMatch,
    contains_calls,
)
from infrastructure.i18n.translator import Translator
from infrastructure.logging import get_module_logger
from infrastructure.persistence import read_json
from infrastructure.services.providers import get_settings

logger = get_module_logger()

MAX_KEY_LANGUAGES = 50
MAX_KEYS_PER_LANGUAGE = 500


class CurrentLanguageSource(Protocol):
    """Anything that knows the language and locale of the current request."""

    def get_current_language(self) -> str: ...

    def get_current_locale(self) -> Optional[str]: ...


class LanguageListSource(Protocol):
    """Anything that lists registered languages (objects with ``iso2``)."""

    def get_all(self) -> Sequence[Any]: ...


class TranslationService:
    """Class-based translation service.

    Usage:
        service = TranslationService(language_context=context, registry=registry)
        html = service.resolve_block_content(block_html)
    """

    def __init__(
        self,
        translations_dir: Optional[Union[str, Path]] = None,
        cache: Optional[CatalogCache] = None,
        language_context: Optional[CurrentLanguageSource] = None,
        registry: Optional[LanguageListSource] = None,
        fallback_language: str = "en",
    ):
        """Initialize translation service.

        Args:
            translations_dir: Catalog directory. Defaults to the configured one.
            cache: CatalogCache shared by the translators this service builds.
            language_context: Source of the current language and locale.
            registry: Source of the registered languages, used by get_all_keys().
            fallback_language: Language used when no context is available.
        """
        self.translations_dir = translations_dir
        self.cache = cache
        self.language_context = language_context
        self.registry = registry
        self.fallback_language = fallback_language

    def translator_for(self, language_code: Optional[str] = None) -> Translator:
        """Build a translator for a language, defaulting to the current one."""
        code, locale = self._language_and_locale(language_code)
        return Translator(
            code, locale, base_dir=self.translations_dir, cache=self.cache
        )

    def resolve(self, value: str, language_code: Optional[str] = None) -> str:
        """Rewrite inline calls in a short value, escaping the results."""
        if not contains_calls(value):
            return value
        return self.translator_for(language_code).parse_translate_patterns(value)

    def resolve_raw(self, value: str, language_code: Optional[str] = None) -> str:
        """Rewrite inline calls in a short value without escaping."""
        if not contains_calls(value):
            return value
        return self.translator_for(language_code).parse_translate_patterns_raw(value)

    def resolve_block_content(
        self, content: str, language_code: Optional[str] = None
    ) -> str:
        """Rewrite inline calls in a large block, resolving each distinct call once.

        Runs in three phases: collect every match, translate each distinct
        literal call text once (at most ``MAX_PATTERN_MATCHES`` distinct
        calls), then replace all occurrences of each.

        Args:
            content: Block content (HTML).
            language_code: Target language. Defaults to the current language.

        Returns:
            Content with calls replaced by their escaped translations.
        """
        if not contains_calls(content):
            return content

        matches = list(TRANSLATE_CALL_PATTERN.finditer(content))
        if not matches:
            return content

        translator = self.translator_for(language_code)

        replacements: Dict[str, str] = {}
        for match in matches:
            if len(replacements) >= MAX_PATTERN_MATCHES:
                logger.warning(
                    "block_pattern_limit_reached",
                    language_code=translator.language_code,
                    limit=MAX_PATTERN_MATCHES,
                )
                break
            call_text = match.group(0)
            if call_text in replacements:
                continue
            replacements[call_text] = translator.resolve_match(
                PatternMatch.from_match(match), escape=True
            )

        for search, replacement in replacements.items():
            content = content.replace(search, replacement)

        return content

    def get_all_keys(self) -> List[str]:
        """Return the sorted union of catalog keys of every registered language."""
        if self.registry is None:
            return []

        translations_dir = Path(self._translations_dir())
        keys = set()
        for index, language in enumerate(self.registry.get_all()):
            if index >= MAX_KEY_LANGUAGES:
                break
            data = read_json(translations_dir / f"{language.iso2}.json")
            if not isinstance(data, dict):
                continue
            for key_index, key in enumerate(data):
                if key_index >= MAX_KEYS_PER_LANGUAGE:
                    break
                keys.add(key)

        return sorted(keys)

    def _translations_dir(self) -> Union[str, Path]:
        if self.translations_dir:
            return self.translations_dir
        return get_settings().translations_dir

    def _language_and_locale(
        self, language_code: Optional[str]
    ) -> Tuple[str, Optional[str]]:
        if self.language_context is None:
            return language_code or self.fallback_language, None

        current = self.language_context.get_current_language()
        if language_code and language_code != current:
            return language_code, None
        return current, self.language_context.get_current_locale()
