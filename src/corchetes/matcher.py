"""Tag matcher: the combined shortcode grammar.

One regular expression recognizes every shortcode form in a single pass:

    [tag attr="1" /]          self-closing
    [tag attr="1"]...[/tag]   enclosing
    [tag]                     open tag with no closing tag (no content)
    [[tag]]                   escaped, rendered literally as [tag]

The pattern has six capture groups. Their order is part of the contract
and TagMatch.from_match() relies on it:

    1 - An extra [ to allow escaping with double brackets: [[tag]]
    2 - The tag name
    3 - The raw attribute text
    4 - The self-closing /
    5 - The content of an enclosing tag
    6 - An extra ] to allow escaping with double brackets: [[tag]]

Same-name nesting is not supported: in ``[a][a]x[/a][/a]`` the first
``[/a]`` closes the outer tag. Tags with other names may appear freely
inside enclosed content; they are not re-scanned.

Thread Safety:
Compiled patterns are cached per name set and are immutable. TagMatch is a
frozen dataclass.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import lru_cache


logger = logging.getLogger(__name__)

# An opening bracket directly followed by something that could be a tag name
_TAG_NAME_SCAN_PATTERN = re.compile(r"\[([^<>&/\[\]\x00-\x20=]++)")

_TAG_OPEN = (
    r"\["  # Opening bracket
    r"(\[?)"  # 1: Optional second opening bracket for escaping: [[tag]]
)

_TAG_REST = (
    r"(?![\w-])"  # Not followed by word character or hyphen
    r"("  # 3: Unroll the loop: inside the opening tag
    r"[^\]/]*"  # Not a closing bracket or forward slash
    r"(?:"
    r"/(?!\])"  # A forward slash not followed by a closing bracket
    r"[^\]/]*"  # Not a closing bracket or forward slash
    r")*?"
    r")"
    r"(?:"
    r"(/)"  # 4: Self closing tag...
    r"\]"  # ...and closing bracket
    r"|"
    r"\]"  # Closing bracket
    r"(?:"
    r"("  # 5: Unroll the loop: anything between the opening and closing tags
    r"[^\[]*+"  # Not an opening bracket
    r"(?:"
    r"\[(?!/\2\])"  # An opening bracket not followed by the closing tag
    r"[^\[]*+"  # Not an opening bracket
    r")*+"
    r")"
    r"\[/\2\]"  # Closing tag
    r")?"
    r")"
    r"(\]?)"  # 6: Optional second closing bracket for escaping: [[tag]]
)


@dataclass(frozen=True, slots=True)
class TagMatch:
    """One shortcode occurrence found by scan().

    Attributes:
        leading_escape: An extra "[" preceded the tag (group 1)
        name: The tag name (group 2)
        raw_attributes: Unparsed attribute text (group 3)
        self_closing: The tag ended with "/]" (group 4)
        inner_content: Enclosed content for enclosing tags, else None (group 5)
        trailing_escape: An extra "]" followed the tag (group 6)
        text: The full matched source text
        start: Offset of the match in the scanned text
        end: Offset just past the match

    An open tag without a closing tag has neither self_closing nor
    inner_content set.
    """

    leading_escape: bool
    name: str
    raw_attributes: str
    self_closing: bool
    inner_content: str | None
    trailing_escape: bool
    text: str
    start: int = 0
    end: int = 0

    @classmethod
    def from_match(cls, match: re.Match[str]) -> TagMatch:
        """Build a TagMatch from a match of a build_pattern() pattern."""
        return cls(
            leading_escape=match.group(1) == "[",
            name=match.group(2),
            raw_attributes=match.group(3),
            self_closing=match.group(4) == "/",
            inner_content=match.group(5),
            trailing_escape=match.group(6) == "]",
            text=match.group(0),
            start=match.start(),
            end=match.end(),
        )

    @property
    def is_escaped(self) -> bool:
        """True for [[tag]] style escaping; no handler should run."""
        return self.leading_escape and self.trailing_escape

    @property
    def unescaped_text(self) -> str:
        """The matched text with one level of bracket doubling removed."""
        return self.text[1:-1]

    @property
    def outer_brackets(self) -> tuple[str, str]:
        """The escape captures, re-emitted around non-escaped output."""
        return ("[" if self.leading_escape else "", "]" if self.trailing_escape else "")


def tag_regex(names: Iterable[str]) -> str:
    """Return the shortcode pattern source for the given tag names.

    Names are escaped for literal matching and sorted so equal name sets
    always produce the same pattern.

    Args:
        names: Tag names to recognize

    Returns:
        Regular expression source with the six documented groups

    Raises:
        ValueError: If no names are given
    """
    ordered = sorted(set(names))
    if not ordered:
        msg = "At least one tag name must be provided"
        raise ValueError(msg)
    alternation = "|".join(re.escape(name) for name in ordered)
    return f"{_TAG_OPEN}({alternation}){_TAG_REST}"


@lru_cache(maxsize=128)
def build_pattern(names: frozenset[str]) -> re.Pattern[str]:
    """Compile the shortcode pattern for a set of tag names (cached).

    Args:
        names: Tag names to recognize

    Returns:
        Compiled pattern; see tag_regex() for the group layout
    """
    logger.debug("Compiling shortcode pattern for %d name(s)", len(names))
    return re.compile(tag_regex(names))


def scan(text: str, pattern: re.Pattern[str]) -> Iterator[TagMatch]:
    """Yield a TagMatch for every shortcode occurrence, left to right.

    Each call starts a fresh scan; no cursor state is kept between calls.

    Args:
        text: Text to scan
        pattern: Pattern from build_pattern()

    Yields:
        TagMatch records in source order
    """
    for match in pattern.finditer(text):
        yield TagMatch.from_match(match)


def find_tag_names(text: str) -> set[str]:
    """Collect every identifier that directly follows an opening bracket.

    This is a cheap pre-scan: the result is a superset of the tag names that
    can match, used to narrow the full pattern to relevant names.

    Example:
        >>> sorted(find_tag_names("[a x=1] [[b]] [/a] [c/]"))
        ['a', 'b', 'c']
    """
    return set(_TAG_NAME_SCAN_PATTERN.findall(text))


__all__ = [
    "TagMatch",
    "build_pattern",
    "find_tag_names",
    "scan",
    "tag_regex",
]
