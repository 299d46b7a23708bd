"""Translation catalog loading.

Defines the contract for loading catalogs and provides the JSON file loader.
Decoded files are kept in a ``CatalogCache`` keyed by absolute path; catalogs
are immutable once loaded, so the cache is read-through and only ever
emptied explicitly.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from infrastructure.i18n.models import TranslationCatalog
from infrastructure.logging import get_module_logger
from infrastructure.persistence import read_json

logger = get_module_logger()


class CatalogCache:
    """Decoded catalog files keyed by absolute path."""

    def __init__(self):
        self._files: Dict[str, Dict[str, Any]] = {}

    def get(self, path: str) -> Optional[Dict[str, Any]]:
        return self._files.get(path)

    def set(self, path: str, data: Dict[str, Any]) -> None:
        self._files[path] = data

    def __contains__(self, path: str) -> bool:
        return path in self._files

    def __len__(self) -> int:
        return len(self._files)

    def clear(self) -> None:
        self._files.clear()


# Process default cache, shared by translators that are not given one
_default_cache = CatalogCache()


def get_default_cache() -> CatalogCache:
    return _default_cache


def clear_cache() -> None:
    """Clear the process default catalog cache."""
    _default_cache.clear()
    logger.debug("cleared_catalog_cache")


class TranslationLoader(ABC):
    """Abstract base for catalog loaders."""

    @abstractmethod
    def load(
        self, language_code: str, locale: Optional[str] = None
    ) -> TranslationCatalog:
        """Load the catalog of a language, with its locale overlay applied.

        Args:
            language_code: ISO 639-1 code of the base catalog.
            locale: Optional locale whose catalog overrides the base entries.

        Returns:
            TranslationCatalog, empty when no usable file exists.
        """
        pass


class JSONCatalogLoader(TranslationLoader):
    """Loader for ``<translations_dir>/<code>.json`` catalog files.

    Attributes:
        translations_dir: Directory containing the JSON catalogs.
        cache: CatalogCache shared with other loaders of the process.
    """

    def __init__(
        self,
        translations_dir: Union[str, Path],
        cache: Optional[CatalogCache] = None,
    ):
        self.translations_dir = Path(translations_dir)
        self.cache = cache if cache is not None else _default_cache

    def load(
        self, language_code: str, locale: Optional[str] = None
    ) -> TranslationCatalog:
        catalog = TranslationCatalog(language_code=language_code, locale=locale)
        if not language_code:
            return catalog

        catalog.merge(self.load_file(self.path_for(language_code)))

        if locale:
            overlay = self.load_file(self.path_for(locale))
            if overlay:
                catalog.merge(overlay)

        return catalog

    def path_for(self, code: str) -> Path:
        return (self.translations_dir / f"{code}.json").resolve()

    def load_file(self, path: Path) -> Dict[str, Any]:
        """Load one catalog file through the cache.

        Missing, unreadable, empty or non-object files are cached as ``{}``.
        """
        cache_key = str(path)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        data = read_json(path)
        if not isinstance(data, dict):
            if data is not None:
                logger.warning(
                    "invalid_catalog_format", path=cache_key, expected="object"
                )
            data = {}
        else:
            logger.debug("loaded_catalog_file", path=cache_key, key_count=len(data))

        self.cache.set(cache_key, data)
        return data
