"""Text processing utilities for Corchetes.

Provides the small string transforms used by the attribute tokenizer and
the substitution engine.

Example:
    >>> from corchetes.utils.text import strip_c_slashes
    >>> strip_c_slashes(r"tab\\there")
    'tab\\there'
"""

from __future__ import annotations

import re

# Characters that browsers and editors insert in place of ordinary spaces
_SPACE_LIKE_PATTERN = re.compile("[\u00a0\u200b]+")

# One byte escape: \xHH (hex digits in group 1) or \ooo (octal in group 2)
_BYTE_ESCAPE_PATTERN = re.compile(r"\\(?:x([0-9A-Fa-f]{1,2})|([0-7]{1,3}))")

# A run of \xHH or octal \ooo byte escapes, any other escaped char, or a lone
# trailing backslash
_C_ESCAPE_PATTERN = re.compile(
    r"((?:\\(?:x[0-9A-Fa-f]{1,2}|[0-7]{1,3}))+)|\\(.)|\\$", re.DOTALL
)

_C_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

# Numeric character references an upstream HTML-safety step may leave behind
_BRACKET_REFERENCES = (("&#91;", "["), ("&#93;", "]"))


def normalize_spaces(text: str) -> str:
    """Replace runs of no-break and zero-width spaces with one space.

    Examples:
        >>> normalize_spaces("a\\u00a0\\u00a0b")
        'a b'
    """
    return _SPACE_LIKE_PATTERN.sub(" ", text)


def _decode_byte_escapes(run: str) -> str:
    """Decode consecutive byte escapes as UTF-8, or Latin-1 if that fails."""
    data = bytes(
        int(hex_digits, 16) if hex_digits else int(octal_digits, 8) & 0xFF
        for hex_digits, octal_digits in _BYTE_ESCAPE_PATTERN.findall(run)
    )
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def strip_c_slashes(text: str) -> str:
    """Un-escape C-style backslash sequences.

    Recognizes ``\\a \\b \\f \\n \\r \\t \\v``, ``\\xHH`` (one or two hex
    digits) and ``\\ooo`` (one to three octal digits). Any other escaped
    character stands for itself and a trailing lone backslash is dropped.

    Hex and octal escapes denote bytes. A run of them is decoded as UTF-8,
    so ``\\xc3\\xa9`` gives ``é``; a run that is not valid UTF-8 maps each
    byte to the code point of the same value.

    Args:
        text: Text that may contain backslash escapes

    Returns:
        Text with every escape sequence resolved

    Examples:
        >>> strip_c_slashes(r'say \\"hi\\"')
        'say "hi"'
        >>> strip_c_slashes(r"\\x41\\102")
        'AB'
        >>> strip_c_slashes(r"caf\\303\\251")
        'café'
    """
    if "\\" not in text:
        return text

    def replace(match: re.Match[str]) -> str:
        byte_run, char = match.groups()
        if byte_run is not None:
            return _decode_byte_escapes(byte_run)
        if char is None:
            return ""
        return _C_SIMPLE_ESCAPES.get(char, char)

    return _C_ESCAPE_PATTERN.sub(replace, text)


def restore_brackets(content: str) -> str:
    """Turn ``&#91;`` and ``&#93;`` back into literal square brackets.

    Examples:
        >>> restore_brackets("<!--&#91;if IE&#93;>")
        '<!--[if IE]>'
    """
    if "&#9" not in content:
        return content
    for reference, bracket in _BRACKET_REFERENCES:
        content = content.replace(reference, bracket)
    return content
