"""Shortcode registry for handler lookup and registration.

The registry maps shortcode names to their handlers. Names are
case-sensitive. Registering a name twice silently replaces the earlier
handler.

Thread Safety:
The registry has no internal locking. Mutate it only between expansion
passes, or serialize mutation against in-flight passes yourself.

Example:
    >>> registry = ShortcodeRegistry()
    >>> registry.register("year", lambda attrs, content, tag: "2024")
    ShortcodeRegistry(['year'])
    >>> @registry.shortcode("upper", "shout")
    ... def upper(attrs, content, tag):
    ...     return (content or "").upper()
    >>> sorted(registry.names)
    ['shout', 'upper', 'year']
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from corchetes.errors import InvalidTagName

if TYPE_CHECKING:
    from corchetes.protocol import ShortcodeHandler

logger = logging.getLogger(__name__)

# Whitespace, control characters and & / < > [ ] =
_RESERVED_PATTERN = re.compile(r"[<>&/\[\]\x00-\x20=\s]")


def validate_tag_name(tag: str) -> None:
    """Check that a shortcode name can be matched unambiguously.

    Raises:
        InvalidTagName: If the name is blank or contains a reserved character
    """
    if not tag.strip():
        raise InvalidTagName(tag, "Empty name given.")
    if _RESERVED_PATTERN.search(tag):
        raise InvalidTagName(
            tag, "Do not use spaces or reserved characters: & / < > [ ] ="
        )


class ShortcodeRegistry:
    """Mutable registry of shortcode handlers.

    Handlers are stored as given. Whether a value is callable is checked at
    dispatch time, where a non-callable raises InvalidHandler.
    """

    __slots__ = ("_by_name",)

    def __init__(self, handlers: Mapping[str, ShortcodeHandler] | None = None) -> None:
        """Initialize registry, optionally with name -> handler pairs."""
        self._by_name: dict[str, ShortcodeHandler] = {}
        if handlers:
            self.register_all(handlers)

    def register(self, tag: str, handler: ShortcodeHandler) -> ShortcodeRegistry:
        """Register a handler under a shortcode name.

        Args:
            tag: Shortcode name to look for in content
            handler: Callable invoked as handler(attributes, content, tag)

        Returns:
            Self for chaining

        Raises:
            InvalidTagName: If the name is blank or contains reserved characters
        """
        validate_tag_name(tag)
        if tag in self._by_name:
            logger.debug("Shortcode %r re-registered, replacing previous handler", tag)
        self._by_name[tag] = handler
        return self

    def register_all(self, handlers: Mapping[str, ShortcodeHandler]) -> ShortcodeRegistry:
        """Register multiple handlers.

        Args:
            handlers: Mapping of shortcode name to handler

        Returns:
            Self for chaining
        """
        for tag, handler in handlers.items():
            self.register(tag, handler)
        return self

    def shortcode(self, *tags: str) -> Callable[[Any], Any]:
        """Decorator registering a function under one or more names.

        The decorated function is returned unchanged.

        Example:
            >>> registry = ShortcodeRegistry()
            >>> @registry.shortcode("b", "bold")
            ... def bold(attrs, content, tag):
            ...     return f"<strong>{content}</strong>"
            >>> registry.get("bold") is bold
            True
        """
        if not tags:
            msg = "At least one shortcode name must be provided"
            raise ValueError(msg)

        def decorator(handler: Any) -> Any:
            for tag in tags:
                self.register(tag, handler)
            return handler

        return decorator

    def unregister(self, tag: str) -> None:
        """Remove a shortcode. Unknown names are ignored."""
        self._by_name.pop(tag, None)

    def clear(self) -> None:
        """Remove all shortcodes."""
        self._by_name.clear()

    def get(self, tag: str) -> ShortcodeHandler | None:
        """Get handler for shortcode name.

        Args:
            tag: Shortcode name (case-sensitive)

        Returns:
            Handler if registered, None otherwise
        """
        return self._by_name.get(tag)

    def has(self, tag: str) -> bool:
        """Check if shortcode name is registered."""
        return tag in self._by_name

    def names_present_in(self, candidates: Iterable[str]) -> frozenset[str]:
        """Return the candidates that are registered names."""
        return frozenset(self._by_name.keys() & set(candidates))

    @property
    def names(self) -> frozenset[str]:
        """Get all registered shortcode names."""
        return frozenset(self._by_name.keys())

    def __contains__(self, tag: object) -> bool:
        """Support 'name in registry' syntax."""
        return tag in self._by_name

    def __len__(self) -> int:
        """Number of registered shortcode names."""
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"ShortcodeRegistry({sorted(self._by_name)!r})"


__all__ = [
    "ShortcodeRegistry",
    "validate_tag_name",
]
