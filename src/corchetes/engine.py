"""Substitution engine: expand, strip and detect shortcodes.

Each pass:

1. Returns the content untouched when it has no "[" or the registry is empty.
2. Pre-scans for identifiers following "[" and keeps only registered ones,
   so the combined pattern covers just the names that can match.
3. Runs one re.sub() pass with the pattern from corchetes.matcher.
4. Restores "&#91;" / "&#93;" to literal brackets.

Handler output is spliced in as-is and never re-scanned.

Hooks (pre_dispatch, post_dispatch, strip_filter) come from the current
ShortcodeConfig; see corchetes.config.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from corchetes.attributes import parse_attributes
from corchetes.config import get_shortcode_config
from corchetes.errors import InvalidHandler
from corchetes.matcher import TagMatch, build_pattern, find_tag_names, scan
from corchetes.utils.text import restore_brackets

if TYPE_CHECKING:
    from corchetes.config import ShortcodeConfig
    from corchetes.registry import ShortcodeRegistry

logger = logging.getLogger(__name__)


def _substitute(
    content: str,
    names: frozenset[str],
    replace: Callable[[TagMatch], str],
) -> str:
    """Replace every match over ``names`` and restore escaped brackets."""
    if not names:
        return content
    pattern = build_pattern(names)
    content = pattern.sub(lambda m: replace(TagMatch.from_match(m)), content)
    return restore_brackets(content)


def _dispatch(
    match: TagMatch,
    registry: ShortcodeRegistry,
    config: ShortcodeConfig,
) -> str:
    """Produce the replacement text for one match during expand()."""
    # [[tag]] renders literally, even when tag is registered
    if match.is_escaped:
        return match.unescaped_text

    tag = match.name
    attributes = parse_attributes(match.raw_attributes)

    handler = registry.get(tag)
    if not callable(handler):
        raise InvalidHandler(tag, handler)

    if config.pre_dispatch is not None:
        replacement = config.pre_dispatch(tag, attributes, match)
        if replacement is not None:
            logger.debug("pre_dispatch hook replaced shortcode %r", tag)
            return replacement

    result = handler(attributes, match.inner_content, tag)
    opener, closer = match.outer_brackets
    output = f"{opener}{'' if result is None else result}{closer}"

    if config.post_dispatch is not None:
        output = config.post_dispatch(output, tag, attributes, match)
    return output


def _strip_tag(match: TagMatch) -> str:
    """Produce the replacement text for one match during strip()."""
    if match.is_escaped:
        return match.unescaped_text
    opener, closer = match.outer_brackets
    return opener + closer


def expand(content: str, registry: ShortcodeRegistry) -> str:
    """Replace shortcodes in content with their handlers' output.

    Args:
        content: Text to search for shortcodes
        registry: Registry providing the handlers

    Returns:
        Content with every registered shortcode replaced. ``[[tag]]`` is
        rendered as ``[tag]`` without calling the handler.

    Raises:
        InvalidHandler: If a matched name is bound to a non-callable value

    Example:
        >>> from corchetes import ShortcodeRegistry
        >>> registry = ShortcodeRegistry({"b": lambda a, c, t: f"<b>{c}</b>"})
        >>> expand("[b]bold[/b] and [[b]]", registry)
        '<b>bold</b> and [b]'
    """
    if "[" not in content or not registry:
        return content

    names = registry.names_present_in(find_tag_names(content))
    config = get_shortcode_config()
    return _substitute(content, names, lambda match: _dispatch(match, registry, config))


apply = expand


def strip(content: str, registry: ShortcodeRegistry) -> str:
    """Remove registered shortcodes, including any enclosed content.

    The current config's ``strip_filter`` hook may narrow or widen the set
    of names to remove; the result is still limited to names present in
    the content.

    Args:
        content: Text to search for shortcodes
        registry: Registry providing the names to remove

    Returns:
        Content without the shortcodes. ``[[tag]]`` becomes ``[tag]``.
    """
    if "[" not in content or not registry:
        return content

    names_to_remove: frozenset[str] = registry.names
    strip_filter = get_shortcode_config().strip_filter
    if strip_filter is not None:
        names_to_remove = frozenset(strip_filter(names_to_remove, content))

    names = names_to_remove & find_tag_names(content)
    return _substitute(content, frozenset(names), _strip_tag)


def has_shortcode(content: str, tag: str, registry: ShortcodeRegistry) -> bool:
    """Check whether content contains the given registered shortcode.

    Looks inside the content of enclosing tags as well, so a tag nested in
    another tag is found even though expand() would not replace it.

    Args:
        content: Text to search
        tag: Shortcode name to look for
        registry: Registry the name must be registered in

    Returns:
        True if the shortcode occurs anywhere in content
    """
    if "[" not in content or tag not in registry:
        return False

    pattern = build_pattern(registry.names)
    return _contains(content, tag, pattern)


def _contains(content: str, tag: str, pattern: re.Pattern[str]) -> bool:
    for match in scan(content, pattern):
        if match.name == tag:
            return True
        if match.inner_content and _contains(match.inner_content, tag, pattern):
            return True
    return False


__all__ = [
    "apply",
    "expand",
    "has_shortcode",
    "strip",
]
