"""CLDR plural category resolution.

Maps a language code and an integer count to one of the CLDR plural
categories (zero, one, two, few, many, other). Languages are grouped into
rule families; unknown codes fall back to the germanic (one/other) rule.

Usage:
    from infrastructure.i18n.plural import resolve

    resolve("pl", 22)  # "few"
    resolve("ar", 0)   # "zero"
"""

from typing import Callable, Dict

PluralRule = Callable[[int], str]

MAX_CUSTOM_RULES = 50

FAMILY_MAP: Dict[str, str] = {
    # one / other
    "en": "germanic",
    "de": "germanic",
    "nl": "germanic",
    "sv": "germanic",
    "nb": "germanic",
    "nn": "germanic",
    "da": "germanic",
    "no": "germanic",
    "it": "germanic",
    "es": "germanic",
    "pt": "germanic",
    "el": "germanic",
    "bg": "germanic",
    "he": "germanic",
    "hu": "germanic",
    "fi": "germanic",
    "et": "germanic",
    "ca": "germanic",
    "gl": "germanic",
    # 0 and 1 are "one"
    "fr": "french",
    "hi": "french",
    "fa": "french",
    "sr": "east_slavic",
    "ru": "east_slavic",
    "uk": "east_slavic",
    "be": "east_slavic",
    "hr": "east_slavic",
    "bs": "east_slavic",
    "cs": "west_slavic",
    "sk": "west_slavic",
    "pl": "polish",
    "ar": "arabic",
    "ja": "no_plural",
    "zh": "no_plural",
    "ko": "no_plural",
    "tr": "no_plural",
    "vi": "no_plural",
    "th": "no_plural",
    "id": "no_plural",
    "ms": "no_plural",
}

DEFAULT_FAMILY = "germanic"


def rule_germanic(n: int) -> str:
    return "one" if n == 1 else "other"


def rule_french(n: int) -> str:
    return "one" if n <= 1 else "other"


def rule_east_slavic(n: int) -> str:
    mod10 = n % 10
    mod100 = n % 100
    if mod10 == 1 and mod100 != 11:
        return "one"
    if 2 <= mod10 <= 4 and not 12 <= mod100 <= 14:
        return "few"
    return "other"


def rule_west_slavic(n: int) -> str:
    if n == 1:
        return "one"
    if 2 <= n <= 4:
        return "few"
    return "other"


def rule_polish(n: int) -> str:
    if n == 1:
        return "one"
    mod10 = n % 10
    mod100 = n % 100
    if 2 <= mod10 <= 4 and not 12 <= mod100 <= 14:
        return "few"
    return "many"


def rule_arabic(n: int) -> str:
    if n == 0:
        return "zero"
    if n == 1:
        return "one"
    if n == 2:
        return "two"
    mod100 = n % 100
    if 3 <= mod100 <= 10:
        return "few"
    if 11 <= mod100 <= 99:
        return "many"
    return "other"


def rule_no_plural(n: int) -> str:
    return "other"


FAMILY_RULES: Dict[str, PluralRule] = {
    "germanic": rule_germanic,
    "french": rule_french,
    "east_slavic": rule_east_slavic,
    "west_slavic": rule_west_slavic,
    "polish": rule_polish,
    "arabic": rule_arabic,
    "no_plural": rule_no_plural,
}


class PluralRules:
    """Family-based plural resolver with a bounded set of per-language overrides.

    Custom rules take priority over the family table. At most
    ``max_custom_rules`` distinct language codes may carry an override;
    replacing the rule of an already registered code is always allowed.
    """

    def __init__(self, max_custom_rules: int = MAX_CUSTOM_RULES):
        self.max_custom_rules = max_custom_rules
        self._custom_rules: Dict[str, PluralRule] = {}

    def resolve(self, language_code: str, count: int) -> str:
        """Resolve the CLDR plural category for ``count`` in a language.

        Args:
            language_code: ISO 639-1 code (e.g., "en", "pl").
            count: Item count; the sign is ignored.

        Returns:
            One of "zero", "one", "two", "few", "many", "other".
        """
        n = abs(int(count))

        if not language_code:
            return "other"

        custom = self._custom_rules.get(language_code)
        if custom is not None:
            return custom(n)

        return FAMILY_RULES[self.family_for(language_code)](n)

    def family_for(self, language_code: str) -> str:
        """Return the rule family name used for a language code."""
        return FAMILY_MAP.get(language_code, DEFAULT_FAMILY)

    def register_rule(self, language_code: str, rule: PluralRule) -> bool:
        """Register an override rule for a language.

        Returns:
            False when the override limit is reached and the code is new,
            True otherwise.
        """
        if not language_code:
            raise ValueError("language_code must not be empty")

        if (
            len(self._custom_rules) >= self.max_custom_rules
            and language_code not in self._custom_rules
        ):
            return False

        self._custom_rules[language_code] = rule
        return True

    def reset_custom_rules(self) -> None:
        self._custom_rules.clear()


# Process-wide default instance
_default_rules = PluralRules()


def get_plural_rules() -> PluralRules:
    return _default_rules


def resolve(language_code: str, count: int) -> str:
    return _default_rules.resolve(language_code, count)


def family_for(language_code: str) -> str:
    return _default_rules.family_for(language_code)


def register_rule(language_code: str, rule: PluralRule) -> bool:
    return _default_rules.register_rule(language_code, rule)


def reset_custom_rules() -> None:
    _default_rules.reset_custom_rules()
