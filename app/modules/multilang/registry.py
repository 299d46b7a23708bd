"""Language registry backed by a JSON file.

The registry file is a JSON array of language records. Reads go through two
cache layers: the instance cache, then a ``RegistryCache`` shared by every
registry pointed at the same path. Writes lock the file, rewrite it, and only
then update both caches, so a failed write leaves the cached state untouched.

Usage:
    from modules.multilang.registry import LanguageRegistry

    registry = LanguageRegistry()
    registry.add({"iso2": "fr", "iso3": "fra", "native_name": "Français"})
    registry.set_default("fr")
"""

import copy
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from infrastructure.logging import get_module_logger
from infrastructure.persistence import read_json, write_json_locked
from infrastructure.services.providers import get_settings
from modules.multilang.bounded import bounded, require_code
from modules.multilang.models import Language

logger = get_module_logger()

MAX_LANGUAGES = 50
MAX_LOCALES_PER = 20

ALLOWED_FIELDS = ("iso2", "iso3", "native_name", "flag", "locales", "enabled", "is_default")
REQUIRED_ADD_FIELDS = ("iso2", "native_name")

Record = Dict[str, Any]


class RegistryCache:
    """Decoded registry files keyed by path, shared across registry instances."""

    def __init__(self):
        self._records: Dict[str, List[Record]] = {}

    def get(self, path: str) -> Optional[List[Record]]:
        return self._records.get(path)

    def set(self, path: str, records: List[Record]) -> None:
        self._records[path] = records

    def invalidate(self, path: str) -> None:
        self._records.pop(path, None)

    def clear(self) -> None:
        self._records.clear()


_default_cache = RegistryCache()


def get_default_registry_cache() -> RegistryCache:
    return _default_cache


def generate_language_id(iso2: str) -> str:
    return f"lang_{iso2}_{uuid.uuid4().hex[:8]}"


class LanguageRegistry:
    """File-backed CRUD store of site languages.

    Validation failures, unknown codes and write failures are reported as
    ``False``; reads of unknown codes return None.

    Attributes:
        file_path: Registry JSON file.
        cache: Shared RegistryCache.
    """

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        cache: Optional[RegistryCache] = None,
    ):
        self._file_path = Path(file_path) if file_path else get_settings().languages_file
        self.cache = cache if cache is not None else _default_cache
        self._records: Optional[List[Record]] = None

    @property
    def file_path(self) -> Path:
        return self._file_path

    # Reads

    def get_all(self) -> List[Language]:
        return [
            Language.model_validate(record)
            for record in bounded(self._read(), MAX_LANGUAGES)
        ]

    def get_enabled(self) -> List[Language]:
        return [
            Language.model_validate(record)
            for record in bounded(self._read(), MAX_LANGUAGES)
            if record.get("enabled")
        ]

    def get_default(self) -> Optional[Language]:
        for record in bounded(self._read(), MAX_LANGUAGES):
            if record.get("is_default"):
                return Language.model_validate(record)
        return None

    def get_by_iso2(self, iso2: str) -> Optional[Language]:
        record = self._find(self._read(), iso2)
        return Language.model_validate(record) if record is not None else None

    def default_iso2(self, fallback: str = "en") -> str:
        """Code of the default language, or ``fallback`` when none is set."""
        default = self.get_default()
        return default.iso2 if default is not None else fallback

    # Writes

    def add(self, data: Dict[str, Any]) -> bool:
        """Append a new enabled, non-default language.

        Fails when ``iso2`` or ``native_name`` is missing, the registry is
        full, or the code already exists.
        """
        for field_name in REQUIRED_ADD_FIELDS:
            if not data.get(field_name):
                logger.info("language_add_rejected", reason="missing_field", field=field_name)
                return False

        records = self._working_copy()
        if len(records) >= MAX_LANGUAGES:
            logger.info("language_add_rejected", reason="registry_full", limit=MAX_LANGUAGES)
            return False

        locales = data.get("locales")
        try:
            language = Language(
                iso2=data["iso2"],
                iso3=data.get("iso3") or "",
                native_name=data["native_name"],
                flag=data.get("flag") or "",
                locales=list(locales) if isinstance(locales, list) else [],
                enabled=True,
                is_default=False,
            )
        except ValidationError as e:
            logger.info(
                "language_add_rejected", reason="invalid", iso2=data["iso2"], error=str(e)
            )
            return False

        iso2 = language.iso2
        if self._find(records, iso2) is not None:
            logger.info("language_add_rejected", reason="duplicate", iso2=iso2)
            return False

        language.id = generate_language_id(iso2)
        records.append(language.model_dump())
        return self._write(records, "language_added", iso2=iso2)

    def update(self, iso2: str, data: Dict[str, Any]) -> bool:
        """Merge allow-listed fields into a language record.

        Setting ``is_default`` to True clears the flag on every other record
        in the same write.
        """
        require_code(iso2, "iso2")
        records = self._working_copy()
        record = self._find(records, iso2)
        if record is None:
            return False

        changes = {key: data[key] for key in ALLOWED_FIELDS if key in data}
        merged = {**record, **changes}
        try:
            merged = Language.model_validate(merged).model_dump()
        except ValidationError as e:
            logger.info("language_update_rejected", reason="invalid", iso2=iso2, error=str(e))
            return False

        new_iso2 = merged["iso2"]
        if new_iso2 != iso2 and self._find(records, new_iso2) is not None:
            logger.info("language_update_rejected", reason="duplicate", iso2=new_iso2)
            return False

        if merged["is_default"] and not record.get("is_default"):
            for other in records:
                other["is_default"] = False
        record.clear()
        record.update(merged)
        return self._write(records, "language_updated", iso2=iso2)

    def remove(self, iso2: str) -> bool:
        """Remove a language. The default language cannot be removed."""
        require_code(iso2, "iso2")
        records = self._working_copy()
        record = self._find(records, iso2)
        if record is None:
            return False
        if record.get("is_default"):
            logger.info("language_remove_rejected", reason="default_language", iso2=iso2)
            return False

        remaining = [r for r in records if r is not record]
        return self._write(remaining, "language_removed", iso2=iso2)

    def set_default(self, iso2: str) -> bool:
        """Make ``iso2`` the only default language, in one write."""
        require_code(iso2, "iso2")
        records = self._working_copy()
        if self._find(records, iso2) is None:
            return False
        for record in bounded(records, MAX_LANGUAGES):
            record["is_default"] = record.get("iso2") == iso2
        return self._write(records, "default_language_set", iso2=iso2)

    def set_enabled(self, iso2: str, enabled: bool) -> bool:
        return self.update(iso2, {"enabled": enabled})

    def add_locale(self, iso2: str, locale: str) -> bool:
        require_code(iso2, "iso2")
        require_code(locale, "locale")
        language = self.get_by_iso2(iso2)
        if language is None:
            return False
        locales = list(language.locales)
        if len(locales) >= MAX_LOCALES_PER or locale in locales:
            return False
        locales.append(locale)
        return self.update(iso2, {"locales": locales})

    def remove_locale(self, iso2: str, locale: str) -> bool:
        require_code(iso2, "iso2")
        require_code(locale, "locale")
        language = self.get_by_iso2(iso2)
        if language is None:
            return False
        locales = list(bounded(language.locales, MAX_LOCALES_PER))
        if locale not in locales:
            return False
        return self.update(iso2, {"locales": [loc for loc in locales if loc != locale]})

    # Storage

    def _read(self) -> List[Record]:
        if self._records is not None:
            return self._records

        cache_key = str(self._file_path)
        shared = self.cache.get(cache_key)
        if shared is not None:
            self._records = shared
            return shared

        data = read_json(self._file_path)
        if not isinstance(data, list):
            if data is not None:
                logger.warning("registry_file_invalid", path=cache_key, expected="array")
            return []

        records = []
        for index, item in enumerate(data):
            try:
                records.append(Language.model_validate(item).model_dump())
            except ValidationError as e:
                logger.warning(
                    "registry_record_skipped", path=cache_key, index=index, error=str(e)
                )

        self._records = records
        self.cache.set(cache_key, records)
        return records

    def _working_copy(self) -> List[Record]:
        return copy.deepcopy(self._read())

    @staticmethod
    def _find(records: List[Record], iso2: str) -> Optional[Record]:
        for record in bounded(records, MAX_LANGUAGES):
            if record.get("iso2") == iso2:
                return record
        return None

    def _write(self, records: List[Record], event: str, **context: Any) -> bool:
        if not write_json_locked(self._file_path, records):
            logger.error("registry_write_failed", path=str(self._file_path), **context)
            return False

        self._records = records
        self.cache.set(str(self._file_path), records)
        logger.info(event, path=str(self._file_path), **context)
        return True
