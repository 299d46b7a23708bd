"""Translation models for the i18n system.

Defines the catalog container and the plural form vocabulary shared by the
loader and the translator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Member names of a plural-form catalog entry
PLURAL_FORMS = ("singular", "zero", "one", "two", "few", "many", "other")


def is_plural_form(value: Any) -> bool:
    """True when ``value`` names one of the plural-form members."""
    return isinstance(value, str) and value in PLURAL_FORMS


@dataclass
class TranslationCatalog:
    """Container for the translations of one language, optionally with a locale overlay.

    Messages are a flat mapping of key to either a plain string or a
    plural-form object (``{"singular": ..., "one": ..., "other": ...}``).

    Attributes:
        language_code: ISO 639-1 code the catalog is for.
        locale: Locale overlay applied on top of the language file, if any.
        messages: Flat dict ``{key: str | dict}``.
    """

    language_code: str
    locale: Optional[str] = None
    messages: Dict[str, Any] = field(default_factory=dict)

    def get_message(self, key: str) -> Optional[Any]:
        """Retrieve the raw catalog value for a key, or None if absent."""
        return self.messages.get(key)

    def has_message(self, key: str) -> bool:
        return key in self.messages

    def merge(self, overlay: Dict[str, Any]) -> None:
        """Overlay entries key by key. Overlay values win."""
        self.messages.update(overlay)

    def keys(self) -> list:
        return list(self.messages.keys())
