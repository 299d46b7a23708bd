"""Tests for infrastructure.i18n.patterns module."""

import pytest

from infrastructure.i18n import patterns
from infrastructure.i18n.patterns import (
    contains_calls,
    find_patterns,
    parse_inline_args,
)


@pytest.mark.unit
class TestParseInlineArgs:
    def test_arrow_pairs(self):
        assert parse_inline_args("'name' => 'Ana', \"n\" => 3") == {"name": "Ana", "n": "3"}

    def test_colon_pairs(self):
        assert parse_inline_args('"name": "Ana", "n": 3') == {"name": "Ana", "n": "3"}

    def test_arrow_pairs_take_precedence(self):
        assert parse_inline_args("'a' => 'x', 'b': 'y'") == {"a": "x"}

    def test_empty_quoted_value(self):
        assert parse_inline_args("'name' => ''") == {"name": ""}

    @pytest.mark.parametrize("text", ["", "   ", "garbage"])
    def test_nothing_to_parse(self, text):
        assert parse_inline_args(text) == {}

    def test_pair_limit(self, monkeypatch):
        monkeypatch.setattr(patterns, "MAX_ARGS", 2)
        text = ", ".join(f"'k{i}' => {i}" for i in range(5))
        assert parse_inline_args(text) == {"k0": "0", "k1": "1"}


@pytest.mark.unit
class TestFindPatterns:
    def test_finds_calls_in_order(self):
        text = "a translate_call('FIRST') b translate_call(\"SECOND\", [], 'few') c"

        found = list(find_patterns(text))

        assert [m.key for m in found] == ["FIRST", "SECOND"]
        assert found[0].text == "translate_call('FIRST')"
        assert found[0].count is None
        assert found[1].count == "few"

    def test_integer_count(self):
        (match,) = find_patterns("translate_call('ITEMS', ['count' => 2], 2)")
        assert match.count == 2
        assert match.args == {"count": "2"}

    def test_whitespace_tolerated(self):
        (match,) = find_patterns("translate_call(  'KEY_1' ,  { \"a\" : \"b\" } ,  'one'  )")
        assert match.key == "KEY_1"
        assert match.args == {"a": "b"}
        assert match.count == "one"

    @pytest.mark.parametrize(
        "text",
        [
            "translate_call(KEY)",
            "translate_call('1KEY')",
            "translate_call('key')",
            "translate_call('KEY', 'x')",
        ],
    )
    def test_malformed_calls_not_matched(self, text):
        assert list(find_patterns(text)) == []

    def test_contains_calls(self):
        assert contains_calls("x translate_call('A')")
        assert not contains_calls("translate('A')")
        assert not contains_calls("")
        assert not contains_calls(None)
