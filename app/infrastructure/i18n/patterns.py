"""Inline translation call parsing.

Text (block content, option values, menu labels) may embed calls shaped like::

    translate_call('ITEMS_LEFT', ['count' => 3], 'few')
    translate_call("GREETING", {"name": "Ana"})
    translate_call('CART_ITEMS', [], 5)

Keys match ``[A-Z][A-Z0-9_]*``. Arguments are a bracketed ``'k' => v`` list
or a brace-delimited ``"k": v`` list. The optional trailing argument is a
quoted plural form name or a bare non-negative integer.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Union

MAX_ARGS = 50
MAX_PATTERN_MATCHES = 200

CALL_MARKER = "translate_call("

TRANSLATE_CALL_PATTERN = re.compile(
    r"translate_call\(\s*['\"]([A-Z][A-Z0-9_]*)['\"]"
    r"\s*(?:,\s*(?:\[(.*?)\]|\{(.*?)\})\s*(?:,\s*(?:['\"]([a-z]+)['\"]|(\d+))\s*)?)?\)"
)

ARROW_ARG_PATTERN = re.compile(
    r"['\"]([a-zA-Z0-9_]+)['\"]\s*=>\s*(?:['\"]([^'\"]*)['\"]|(\d+))"
)
COLON_ARG_PATTERN = re.compile(
    r"['\"]([a-zA-Z0-9_]+)['\"]\s*:\s*(?:['\"]([^'\"]*)['\"]|(\d+))"
)

Count = Union[str, int, None]


def parse_inline_args(args_text: str) -> Dict[str, str]:
    """Parse the argument list of an inline call into a dict.

    Arrow pairs are tried first; colon pairs are only considered when no
    arrow pair was found. Values are kept as strings. At most ``MAX_ARGS``
    pairs are read.

    Args:
        args_text: Text between the brackets or braces.

    Returns:
        Mapping of argument name to value.
    """
    if not args_text or not args_text.strip():
        return {}

    args = _collect_pairs(ARROW_ARG_PATTERN, args_text)
    if not args:
        args = _collect_pairs(COLON_ARG_PATTERN, args_text)
    return args


def _collect_pairs(pattern: re.Pattern, args_text: str) -> Dict[str, str]:
    args: Dict[str, str] = {}
    for index, pair in enumerate(pattern.finditer(args_text)):
        if index >= MAX_ARGS:
            break
        name, quoted, number = pair.groups()
        args[name] = number if number else (quoted or "")
    return args


@dataclass
class PatternMatch:
    """One inline translation call found in text.

    Attributes:
        text: The full literal call text.
        key: Catalog key.
        args: Parsed placeholder arguments.
        count: Plural form name, integer count, or None.
    """

    text: str
    key: str
    args: Dict[str, str] = field(default_factory=dict)
    count: Count = None

    @classmethod
    def from_match(cls, match: re.Match) -> "PatternMatch":
        key, bracket_args, brace_args, form, number = match.groups()
        args_text = bracket_args or brace_args or ""

        count: Count = None
        if form:
            count = form
        elif number:
            count = int(number)

        return cls(
            text=match.group(0),
            key=key,
            args=parse_inline_args(args_text),
            count=count,
        )


def contains_calls(text: Optional[str]) -> bool:
    return bool(text) and CALL_MARKER in text


def find_patterns(text: str) -> Iterator[PatternMatch]:
    """Yield every inline call in ``text`` in order of appearance."""
    for match in TRANSLATE_CALL_PATTERN.finditer(text):
        yield PatternMatch.from_match(match)
