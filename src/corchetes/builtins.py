"""Built-in shortcodes.

hash:
    Replaces the tag with the hex digest of its enclosed content.

        [hash]text[/hash]                  md5 of "text"
        [hash algo="sha256"]text[/hash]    sha256 of "text"
        [hash sha1]text[/hash]             sha1 of "text"
        [hash/]                            md5 of ""
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from corchetes.attributes import merge_attributes
from corchetes.registry import ShortcodeRegistry
from corchetes.utils.hashing import hash_str

if TYPE_CHECKING:
    from corchetes.attributes import AttributeSet

DEFAULT_HASH_ALGORITHM = "md5"


def hash_shortcode(attributes: AttributeSet, content: str | None, tag: str) -> str:
    """Hex digest of the enclosed content.

    The algorithm comes from the ``algo`` attribute, or the first positional
    value, and defaults to md5 when absent or empty. Unknown algorithms
    raise ValueError.
    """
    if isinstance(attributes, list):
        algorithm = attributes[0] if attributes else ""
    else:
        algorithm = merge_attributes({"algo": DEFAULT_HASH_ALGORITHM}, attributes, tag)["algo"]
    return hash_str(content or "", algorithm=(algorithm or DEFAULT_HASH_ALGORITHM).lower())


BUILTIN_SHORTCODES = {
    "hash": hash_shortcode,
}


def create_registry_with_defaults() -> ShortcodeRegistry:
    """Create a new registry pre-populated with the built-in shortcodes.

    Each call returns an independent registry:

        >>> registry = create_registry_with_defaults()
        >>> registry.register("year", lambda attrs, content, tag: "2024")
        ShortcodeRegistry(['hash', 'year'])
    """
    return ShortcodeRegistry(BUILTIN_SHORTCODES)
