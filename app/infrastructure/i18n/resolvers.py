"""Language resolution from request preferences.

Matches Accept-Language style preferences against the languages and locales
a site has registered. Locale tags are compared case-insensitively with
``_`` and ``-`` treated as equivalent ("pt_BR" matches "pt-br").
"""

from typing import Any, List, Optional, Sequence, Tuple

from infrastructure.logging import get_module_logger

logger = get_module_logger()

MAX_HEADER_PREFERENCES = 20


def normalize_tag(tag: str) -> str:
    return tag.strip().replace("_", "-").lower()


class LanguageNegotiator:
    """Performs language negotiation for multilingual content.

    Implements RFC 4647 style range matching for cases such as a request for
    "pt-BR" when only "pt" is available.
    """

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Check if an available tag matches a requested tag.

        Args:
            requested: Requested tag (e.g., "en-US").
            available: Available tag (e.g., "en" or "en_US").
            strict: If True, requires an exact match. If False, the primary
                language subtags are enough.

        Returns:
            True if the tags match.
        """
        if normalize_tag(requested) == normalize_tag(available):
            return True

        if strict:
            return False

        requested_lang = normalize_tag(requested).split("-")[0]
        available_lang = normalize_tag(available).split("-")[0]
        return requested_lang == available_lang

    @staticmethod
    def find_best_match(
        requested: Sequence[str],
        available: Sequence[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Find the best available tag for a preference-ordered request list."""
        for req_lang in requested:
            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=True):
                    return avail_lang

            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=False):
                    return avail_lang

        return default


class LocaleResolver:
    """Resolves the request language and locale against registered languages.

    Languages are any objects exposing ``iso2``, ``locales`` and ``enabled``
    (registry ``Language`` records).
    """

    def __init__(self, default_language: str = "en"):
        self.default_language = default_language
        self.log = logger.bind(default_language=default_language)

    @staticmethod
    def parse_accept_language(accept_language: Optional[str]) -> List[str]:
        """Parse an Accept-Language header into tags ordered by quality.

        "fr-CA,fr;q=0.9,en;q=0.8" -> ["fr-CA", "fr", "en"]. Entries with
        q=0 are dropped.
        """
        if not accept_language:
            return []

        preferences: List[Tuple[str, float]] = []
        for part in accept_language.split(",")[:MAX_HEADER_PREFERENCES]:
            pieces = part.split(";")
            tag = pieces[0].strip()
            if not tag or tag == "*":
                continue

            quality = 1.0
            for param in pieces[1:]:
                param = param.strip()
                if param.startswith("q="):
                    try:
                        quality = float(param[2:])
                    except ValueError:
                        quality = 1.0

            if quality > 0:
                preferences.append((tag, quality))

        # sorted() is stable, header order breaks ties
        return [tag for tag, _ in sorted(preferences, key=lambda x: x[1], reverse=True)]

    def resolve_from_header(
        self,
        accept_language: Optional[str],
        languages: Sequence[Any],
    ) -> Tuple[str, Optional[str]]:
        """Resolve ``(iso2, locale)`` from an Accept-Language header.

        Exact locale matches win over language-only matches. Disabled
        languages are ignored.

        Args:
            accept_language: Header value.
            languages: Registered language records.

        Returns:
            Tuple of the matched iso2 code and locale (or None), or the
            default language with no locale when nothing matches.
        """
        enabled = [lang for lang in languages if getattr(lang, "enabled", True)]

        for tag in self.parse_accept_language(accept_language):
            for lang in enabled:
                for locale in lang.locales:
                    if LanguageNegotiator.matches_language(tag, locale, strict=True):
                        self.log.debug("resolved_from_header", language=lang.iso2, locale=locale)
                        return lang.iso2, locale

            for lang in enabled:
                if LanguageNegotiator.matches_language(tag, lang.iso2, strict=False):
                    self.log.debug("resolved_from_header", language=lang.iso2)
                    return lang.iso2, None

        return self.default_language, None
