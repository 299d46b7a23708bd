"""Request-scoped language context.

Resolves the language and locale of the current request and hands out a
translator for it. The context is built before the request is fully known
(the current node may still change), so values are recomputed on every call
until ``finalize()`` is called; after that they are computed once and cached.

Resolution order for the language:
1. ``language`` metadata of the current node
2. Accept-Language match among enabled languages, when a header was given
3. registry default language
4. the configured fallback language
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from infrastructure.i18n.loader import CatalogCache
from infrastructure.i18n.patterns import Count
from infrastructure.i18n.resolvers import LocaleResolver
from infrastructure.i18n.translator import Translator
from infrastructure.services.providers import get_settings
from modules.multilang.content_store import ContentStore
from modules.multilang.models import META_LANGUAGE, META_LOCALE
from modules.multilang.registry import LanguageRegistry


class LanguageContext:
    """Current language, locale and translator of a request.

    Attributes:
        registry: Language registry.
        store: Content store used to read node metadata.
        node_id: Node being rendered, if any.
        accept_language: Accept-Language header of the request, if any.
    """

    def __init__(
        self,
        registry: LanguageRegistry,
        store: Optional[ContentStore] = None,
        node_id: Optional[int] = None,
        accept_language: Optional[str] = None,
        translations_dir: Optional[Union[str, Path]] = None,
        cache: Optional[CatalogCache] = None,
        fallback_language: Optional[str] = None,
    ):
        self.registry = registry
        self.store = store
        self.node_id = node_id
        self.accept_language = accept_language
        self.translations_dir = translations_dir
        self.cache = cache
        self.fallback_language = (
            fallback_language or get_settings().multilang.FALLBACK_LANGUAGE
        )
        self._finalized = False
        self._language: Optional[str] = None
        self._locale: Optional[str] = None
        self._translator: Optional[Translator] = None

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def finalize(self) -> None:
        """Freeze the context: later calls reuse the values computed now."""
        self._finalized = True
        self._language = None
        self._locale = None
        self._translator = None
        self._language, self._locale = self._resolve()

    def get_current_language(self) -> str:
        if self._finalized and self._language is not None:
            return self._language
        language, _ = self._resolve()
        return language

    def get_current_locale(self) -> Optional[str]:
        if self._finalized:
            return self._locale
        _, locale = self._resolve()
        return locale

    def get_translator(self) -> Translator:
        if self._finalized and self._translator is not None:
            return self._translator

        translator = Translator(
            self.get_current_language(),
            self.get_current_locale(),
            base_dir=self.translations_dir,
            cache=self.cache,
        )
        if self._finalized:
            self._translator = translator
        return translator

    def translate(
        self, key: str, args: Optional[Dict[str, Any]] = None, count: Count = None
    ) -> str:
        return self.get_translator().translate(key, args, count)

    def _node_metadata(self) -> Dict[str, Any]:
        if self.store is None or not self.node_id:
            return {}
        return self.store.get_metadata(self.node_id)

    def _resolve(self) -> Tuple[str, Optional[str]]:
        meta = self._node_metadata()
        language = meta.get(META_LANGUAGE)
        if isinstance(language, str) and language:
            locale = meta.get(META_LOCALE)
            return language, locale if isinstance(locale, str) and locale else None

        default_iso2 = self.registry.default_iso2(self.fallback_language)
        if self.accept_language:
            resolver = LocaleResolver(default_language=default_iso2)
            return resolver.resolve_from_header(
                self.accept_language, self.registry.get_enabled()
            )

        return default_iso2, None
