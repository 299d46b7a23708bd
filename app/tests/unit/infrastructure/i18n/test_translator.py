"""Tests for infrastructure.i18n.translator module."""

import pytest

from infrastructure.i18n.translator import Translator


@pytest.fixture
def make_translator(translations_dir, catalog_cache):
    def _make(language_code="en", locale=None):
        return Translator(
            language_code, locale, base_dir=translations_dir, cache=catalog_cache
        )

    return _make


@pytest.mark.unit
class TestTranslate:
    """Key lookup, placeholders and escaping."""

    def test_plain_key(self, make_translator):
        assert make_translator().translate("HELLO") == "Hello"

    def test_missing_key_returns_key(self, make_translator):
        assert make_translator().translate("NOT_THERE") == "NOT_THERE"

    def test_non_string_value_returns_key(self, make_translator):
        assert make_translator().translate("BROKEN") == "BROKEN"

    def test_placeholder_substitution(self, make_translator):
        assert make_translator().translate("WELCOME", {"name": "Ana"}) == "Welcome, Ana!"

    def test_unresolved_placeholders_removed(self, make_translator):
        assert make_translator().translate("WELCOME") == "Welcome, !"

    def test_non_string_args_are_stringified(self, make_translator):
        assert make_translator().translate("WELCOME", {"name": 7}) == "Welcome, 7!"

    def test_output_is_escaped(self, make_translator):
        result = make_translator().translate("TAGGED", {"name": "\"x\"'"})
        assert result == "&lt;b&gt;&quot;x&quot;&#x27;&lt;/b&gt; &amp; co"

    def test_raw_output_is_not_escaped(self, make_translator):
        assert make_translator().translate_raw("TAGGED", {"name": "x"}) == "<b>x</b> & co"

    def test_has_and_get_all(self, make_translator):
        translator = make_translator()
        assert translator.has("HELLO")
        assert not translator.has("NOPE")
        assert translator.get_all_translations()["HELLO"] == "Hello"

    def test_locale_overlay(self, make_translator):
        translator = make_translator("fr", "fr_CA")
        assert translator.translate("COLOR") == "Couleur (CA)"
        assert translator.translate("HELLO") == "Bonjour"

    def test_missing_catalog_returns_keys(self, make_translator):
        assert make_translator("de").translate("HELLO") == "HELLO"


@pytest.mark.unit
class TestPluralSelection:
    """Plural form selection for plural-form entries."""

    def test_no_count_uses_singular(self, make_translator):
        assert make_translator().translate("ITEMS") == "One item"

    def test_no_count_without_singular_uses_key(self, make_translator):
        assert make_translator().translate("NO_SINGULAR") == "NO_SINGULAR"

    def test_named_form(self, make_translator):
        assert make_translator().translate("ITEMS", {"count": 3}, "other") == "3 items"

    def test_named_form_missing_falls_back_to_singular(self, make_translator):
        assert make_translator().translate("ITEMS", None, "few") == "One item"

    def test_integer_count_selects_category(self, make_translator):
        translator = make_translator()
        assert translator.translate("ITEMS", {"count": 1}, 1) == "1 item"
        assert translator.translate("ITEMS", {"count": 5}, 5) == "5 items"

    def test_numeric_string_count(self, make_translator):
        assert make_translator().translate("ITEMS", {"count": 5}, "5") == "5 items"

    def test_non_numeric_string_count_is_zero(self, make_translator):
        # "0" is "other" in english
        assert make_translator().translate("ITEMS", {"count": 0}, "lots") == "0 items"

    def test_missing_category_uses_other(self, make_translator):
        assert make_translator().translate("NO_SINGULAR", None, 1) == "Many things"

    def test_missing_category_and_other_uses_singular(self, make_translator):
        assert make_translator().translate("ONLY_SINGULAR", None, 3) == "Just this"

    def test_french_zero_is_one(self, make_translator):
        assert make_translator("fr").translate("ITEMS", None, 0) == "article"

    def test_polish_categories(self, make_translator):
        translator = make_translator("pl")
        assert translator.translate("FILES", None, 1) == "plik"
        assert translator.translate("FILES", None, 22) == "pliki"
        assert translator.translate("FILES", None, 12) == "plików"


@pytest.mark.unit
class TestInlinePatterns:
    """Rewriting translate_call(...) expressions in text."""

    def test_text_without_calls_unchanged(self, make_translator):
        assert make_translator().parse_translate_patterns("plain text") == "plain text"

    def test_simple_call(self, make_translator):
        text = "<h1>translate_call('HELLO')</h1>"
        assert make_translator().parse_translate_patterns(text) == "<h1>Hello</h1>"

    def test_call_with_arrow_args(self, make_translator):
        text = "translate_call('WELCOME', ['name' => 'Ana'])"
        assert make_translator().parse_translate_patterns(text) == "Welcome, Ana!"

    def test_call_with_colon_args_and_count(self, make_translator):
        text = 'translate_call("ITEMS", {"count": 4}, 4)'
        assert make_translator().parse_translate_patterns(text) == "4 items"

    def test_call_with_named_form(self, make_translator):
        text = "translate_call('ITEMS', ['count' => 1], 'one')"
        assert make_translator().parse_translate_patterns(text) == "1 item"

    def test_escaped_and_raw_variants(self, make_translator):
        translator = make_translator()
        text = "translate_call('TAGGED', ['name' => 'x'])"
        assert translator.parse_translate_patterns(text) == "&lt;b&gt;x&lt;/b&gt; &amp; co"
        assert translator.parse_translate_patterns_raw(text) == "<b>x</b> & co"

    def test_unknown_key_in_call_becomes_key(self, make_translator):
        text = "translate_call('UNKNOWN_KEY')"
        assert make_translator().parse_translate_patterns(text) == "UNKNOWN_KEY"

    def test_lowercase_key_not_matched(self, make_translator):
        text = "translate_call('hello')"
        assert make_translator().parse_translate_patterns(text) == text

    def test_matches_past_cap_left_verbatim(self, make_translator):
        translator = make_translator()
        translator.MAX_PATTERN_MATCHES = 2
        text = "translate_call('HELLO') " * 3

        result = translator.parse_translate_patterns(text)

        assert result == "Hello Hello translate_call('HELLO') "
