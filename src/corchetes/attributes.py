"""Attribute tokenizer for shortcode tags.

Turns the raw text between a tag name and its closing bracket into an
AttributeSet:

    [video src="clip.mp4" width=640 autoplay]
           ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^  -> {"src": "clip.mp4", "width": "640"}

    [gallery "one.jpg" 'two.jpg' three.jpg]
             ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^   -> ["one.jpg", "two.jpg", "three.jpg"]

The result is a dict when at least one key=value pair is present, and a list
of positional values otherwise. The two shapes are never mixed: once a
key=value pair exists, bare tokens are dropped.

Thread Safety:
All functions are pure. Module-level patterns are compiled once and
never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, TypeAlias

from corchetes.config import get_shortcode_config
from corchetes.utils.text import normalize_spaces, strip_c_slashes

AttributeSet: TypeAlias = dict[str, str] | list[str]
"""Parsed attributes: named values, or positional values when there are none."""

# Ordered alternation. Groups:
#   1, 2  name="value"
#   3, 4  name='value'
#   5, 6  name=bareword
#   7     "positional"
#   8     'positional'
#   9     positional
_ATTRIBUTE_PATTERN = re.compile(
    r'([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)'
    r"|([\w-]+)\s*=\s*'([^']*)'(?:\s|$)"
    r"|([\w-]+)\s*=\s*([^\s'\"]+)(?:\s|$)"
    r'|"([^"]*)"(?:\s|$)'
    r"|'([^']*)'(?:\s|$)"
    r"|(\S+)(?:\s|$)"
)

# Alternating non-"<" runs and complete <...> runs
_BALANCED_TAGS_PATTERN = re.compile(r"[^<]*+(?:<[^>]*+>[^<]*+)*+")


def _reject_unclosed_markup(value: str) -> str:
    """Blank out values carrying unterminated HTML."""
    if "<" in value and _BALANCED_TAGS_PATTERN.fullmatch(value) is None:
        return ""
    return value


def parse_attributes(text: str) -> AttributeSet:
    """Tokenize a raw attribute string.

    Recognized forms, tried in this order at each position:

    1. ``name="value"``
    2. ``name='value'``
    3. ``name=bareword``
    4. ``"value"`` (positional)
    5. ``'value'`` (positional)
    6. any other non-whitespace run (positional)

    Names are lower-cased and the first occurrence of a name wins. Values
    have C-style backslash escapes resolved. A value that contains ``<``
    without balanced ``<...>`` pairs is replaced with an empty string.

    Args:
        text: Attribute text as captured by the tag matcher

    Returns:
        Dict of named values if any key=value pair was found, otherwise a
        list of positional values (empty for blank text).

    Example:
        >>> parse_attributes('foo="bar" BAZ=\\'qux\\' flag')
        {'foo': 'bar', 'baz': 'qux'}
        >>> parse_attributes('"a b" c')
        ['a b', 'c']
    """
    named: dict[str, str] = {}
    positional: list[str] = []

    for match in _ATTRIBUTE_PATTERN.finditer(normalize_spaces(text)):
        groups = match.groups()
        for key_index in (0, 2, 4):
            key = groups[key_index]
            if key:
                named.setdefault(key.lower(), strip_c_slashes(groups[key_index + 1]))
                break
        else:
            value = groups[6] or groups[7] or groups[8]
            if value:
                positional.append(strip_c_slashes(value))

    if named:
        return {key: _reject_unclosed_markup(value) for key, value in named.items()}
    return [_reject_unclosed_markup(value) for value in positional]


def merge_attributes(
    defaults: Mapping[str, Any],
    attributes: AttributeSet | None,
    shortcode: str = "",
) -> dict[str, Any]:
    """Combine parsed attributes with a handler's supported defaults.

    The result has exactly the keys of ``defaults``. Parsed values override
    defaults; attributes the handler does not declare are dropped, and a
    positional AttributeSet contributes nothing.

    When ``shortcode`` is given, the result is passed through the current
    config's ``attributes_filter`` hook.

    Args:
        defaults: Supported attribute names and their default values
        attributes: AttributeSet received by the handler
        shortcode: Name of the shortcode, enables attribute filtering

    Returns:
        New dict of merged attributes

    Example:
        >>> merge_attributes({"algo": "md5", "upper": "no"}, {"algo": "sha1", "x": "1"})
        {'algo': 'sha1', 'upper': 'no'}
    """
    given = attributes if isinstance(attributes, Mapping) else {}
    merged = {name: given.get(name, default) for name, default in defaults.items()}

    if shortcode:
        attributes_filter = get_shortcode_config().attributes_filter
        if attributes_filter is not None:
            merged = attributes_filter(merged, defaults, attributes, shortcode)

    return merged


__all__ = [
    "AttributeSet",
    "merge_attributes",
    "parse_attributes",
]
