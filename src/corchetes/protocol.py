"""Callable protocols for shortcode handlers and hooks.

A handler is any callable taking ``(attributes, content, tag)`` and
returning replacement text. Plain functions, lambdas, bound methods and
objects with ``__call__`` all qualify; no base class is required.

Example:
    >>> def upper(attrs, content, tag):
    ...     return (content or "").upper()
    >>> isinstance(upper, ShortcodeHandler)
    True

Hooks are optional callables stored on ShortcodeConfig. Returning None
from a pre-dispatch hook means "no interception", so an empty string is a
legitimate replacement.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from corchetes.attributes import AttributeSet
    from corchetes.matcher import TagMatch


@runtime_checkable
class ShortcodeHandler(Protocol):
    """Protocol for shortcode handlers.

    Thread Safety:
        The engine does not track or sandbox handler side effects. Handlers
        that keep state must synchronize it themselves.
    """

    def __call__(self, attributes: AttributeSet, content: str | None, tag: str) -> str:
        """Produce the replacement text for one tag occurrence.

        Args:
            attributes: Parsed attributes (dict or positional list)
            content: Enclosed content, or None for self-closing tags
            tag: The shortcode name that matched

        Returns:
            Text spliced back in place of the tag
        """
        ...


class PreDispatchHook(Protocol):
    """Runs before a handler; a non-None result replaces the tag."""

    def __call__(self, tag: str, attributes: AttributeSet, match: TagMatch) -> str | None: ...


class PostDispatchHook(Protocol):
    """Transforms a handler's output before it is spliced back."""

    def __call__(
        self, output: str, tag: str, attributes: AttributeSet, match: TagMatch
    ) -> str: ...


class StripFilter(Protocol):
    """Chooses which registered names strip() removes from content."""

    def __call__(self, names: frozenset[str], content: str) -> Iterable[str]: ...


class AttributesFilter(Protocol):
    """Adjusts the result of merge_attributes for a named shortcode."""

    def __call__(
        self,
        merged: dict[str, Any],
        defaults: Mapping[str, Any],
        attributes: AttributeSet | None,
        shortcode: str,
    ) -> dict[str, Any]: ...


__all__ = [
    "AttributesFilter",
    "PostDispatchHook",
    "PreDispatchHook",
    "ShortcodeHandler",
    "StripFilter",
]
