"""Translator for resolving catalog keys into localized strings.

Handles plural-form selection, ``##name##`` placeholder substitution, HTML
escaping, and rewriting of inline ``translate_call(...)`` expressions.
"""

import html
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from infrastructure.i18n.loader import CatalogCache, JSONCatalogLoader, TranslationLoader
from infrastructure.i18n.models import TranslationCatalog, is_plural_form
from infrastructure.i18n.patterns import (
    CALL_MARKER,
    MAX_ARGS,
    MAX_PATTERN_MATCHES,
    TRANSLATE_CALL_PATTERN,
    Count,
    PatternMatch,
)
from infrastructure.i18n.plural import PluralRules, get_plural_rules
from infrastructure.logging import get_module_logger
from infrastructure.services.providers import get_settings

logger = get_module_logger()

MAX_PLACEHOLDER_ITER = 100

UNRESOLVED_PLACEHOLDER = re.compile(r"##[a-zA-Z0-9_]+##")


def _count_to_int(count: Any) -> int:
    if isinstance(count, int):
        return count
    try:
        return int(str(count).strip())
    except ValueError:
        return 0


class Translator:
    """Resolves keys of one language catalog, with an optional locale overlay.

    Missing keys resolve to the key itself. Catalog files are loaded once per
    path through the shared ``CatalogCache``, so constructing translators
    repeatedly within a request is cheap.

    Attributes:
        language_code: ISO 639-1 code used for plural rules.
        locale: Locale overlay, if any.
        catalog: Merged TranslationCatalog.
    """

    MAX_ARGS = MAX_ARGS
    MAX_PATTERN_MATCHES = MAX_PATTERN_MATCHES
    MAX_PLACEHOLDER_ITER = MAX_PLACEHOLDER_ITER

    def __init__(
        self,
        language_code: str,
        locale: Optional[str] = None,
        base_dir: Optional[Union[str, Path]] = None,
        cache: Optional[CatalogCache] = None,
        loader: Optional[TranslationLoader] = None,
        plural_rules: Optional[PluralRules] = None,
    ):
        """Initialize Translator and load its catalog.

        Args:
            language_code: ISO 639-1 code of the base catalog.
            locale: Optional locale overlay (e.g., "pt_BR").
            base_dir: Catalog directory. Defaults to the configured
                translations directory.
            cache: CatalogCache to load through. Defaults to the process cache.
            loader: Explicit loader; overrides base_dir and cache.
            plural_rules: PluralRules instance. Defaults to the process rules.
        """
        self.language_code = language_code
        self.locale = locale or None
        if loader is None:
            directory = base_dir if base_dir else get_settings().translations_dir
            loader = JSONCatalogLoader(directory, cache=cache)
        self.loader = loader
        self.plural_rules = plural_rules or get_plural_rules()
        self.catalog: TranslationCatalog = self.loader.load(
            language_code, self.locale
        )

    def translate(
        self,
        key: str,
        args: Optional[Dict[str, Any]] = None,
        count: Count = None,
    ) -> str:
        """Resolve a key and HTML-escape the result.

        Args:
            key: Catalog key.
            args: Placeholder values, ``{"name": "Ana"}`` fills ``##name##``.
            count: None, a plural form name, or an integer count.

        Returns:
            Escaped string; the key itself when it is missing.
        """
        return html.escape(self.translate_raw(key, args, count), quote=True)

    def translate_raw(
        self,
        key: str,
        args: Optional[Dict[str, Any]] = None,
        count: Count = None,
    ) -> str:
        """Resolve a key without escaping."""
        value = self.catalog.get_message(key)
        if value is None:
            return key

        if isinstance(value, dict):
            value = self._select_plural_form(key, value, count)

        if not isinstance(value, str):
            return key

        return self._replace_placeholders(value, args or {})

    def has(self, key: str) -> bool:
        return self.catalog.has_message(key)

    def get_all_translations(self) -> Dict[str, Any]:
        return dict(self.catalog.messages)

    def parse_translate_patterns(self, text: str) -> str:
        """Replace every inline call in ``text`` with its escaped translation."""
        return self._rewrite_patterns(text, escape=True)

    def parse_translate_patterns_raw(self, text: str) -> str:
        """Replace every inline call in ``text`` with its unescaped translation."""
        return self._rewrite_patterns(text, escape=False)

    def resolve_match(self, match: PatternMatch, escape: bool = True) -> str:
        if escape:
            return self.translate(match.key, match.args, match.count)
        return self.translate_raw(match.key, match.args, match.count)

    def _rewrite_patterns(self, text: str, escape: bool) -> str:
        if CALL_MARKER not in text:
            return text

        match_count = 0
        skipped = 0

        def replace(match: re.Match) -> str:
            nonlocal match_count, skipped
            # Matches past the cap stay verbatim
            if match_count >= self.MAX_PATTERN_MATCHES:
                skipped += 1
                return match.group(0)
            match_count += 1
            return self.resolve_match(PatternMatch.from_match(match), escape)

        result = TRANSLATE_CALL_PATTERN.sub(replace, text)
        if skipped:
            logger.warning(
                "pattern_match_limit_reached",
                language_code=self.language_code,
                limit=self.MAX_PATTERN_MATCHES,
                skipped=skipped,
            )
        return result

    def _select_plural_form(self, key: str, forms: Dict[str, Any], count: Count) -> Any:
        singular = forms.get("singular")
        fallback = singular if singular is not None else key

        if count is None:
            return fallback

        if is_plural_form(count):
            selected = forms.get(count)
            return selected if selected is not None else fallback

        category = self.plural_rules.resolve(self.language_code, _count_to_int(count))
        if forms.get(category) is not None:
            return forms[category]
        if forms.get("other") is not None:
            return forms["other"]
        return fallback

    def _replace_placeholders(self, text: str, args: Dict[str, Any]) -> str:
        if not args and "##" not in text:
            return text

        for index, (name, replacement) in enumerate(args.items()):
            if index >= self.MAX_ARGS:
                break
            text = text.replace(f"##{name}##", str(replacement))

        # Strip unresolved tokens one at a time, bounded
        iterations = 0
        while iterations < self.MAX_PLACEHOLDER_ITER and "##" in text:
            text, replaced = UNRESOLVED_PLACEHOLDER.subn("", text, count=1)
            iterations += 1
            if not replaced:
                break

        return text
