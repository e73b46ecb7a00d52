"""
Corchetes: Bracket Shortcodes for Python

Recognizes bracket-delimited tags ("shortcodes") in free-form text and
replaces each occurrence with the output of a registered handler:

    [tag /]
    [tag foo="bar" baz="bing" /]
    [tag foo="bar"]content[/tag]
    [[tag]]                         rendered literally as [tag]

Quick Start:
    >>> from corchetes import Shortcodes
    >>> sc = Shortcodes()
    >>> sc.add("upper", lambda attrs, content, tag: (content or "").upper())
    >>> sc("say [upper]hello[/upper]")
    'say HELLO'

    >>> # Or use the functional API with an explicit registry
    >>> from corchetes import ShortcodeRegistry, expand
    >>> registry = ShortcodeRegistry({"year": lambda attrs, content, tag: "2024"})
    >>> expand("(c) [year/]", registry)
    '(c) 2024'

Hooks:
    >>> from corchetes import ShortcodeConfig
    >>> config = ShortcodeConfig(post_dispatch=lambda out, tag, attrs, m: f"<span>{out}</span>")
    >>> Shortcodes(registry=registry, config=config)("[year/]")
    '<span>2024</span>'

Installation:
    pip install corchetes              # Zero runtime dependencies
"""

from collections.abc import Iterable, Mapping
from typing import Any

from corchetes.attributes import AttributeSet, merge_attributes, parse_attributes
from corchetes.builtins import create_registry_with_defaults, hash_shortcode
from corchetes.config import (
    ShortcodeConfig,
    get_shortcode_config,
    reset_shortcode_config,
    set_shortcode_config,
    shortcode_config_context,
)
from corchetes.engine import apply, expand, has_shortcode, strip
from corchetes.errors import CorchetesError, InvalidHandler, InvalidTagName
from corchetes.matcher import TagMatch, build_pattern, find_tag_names, scan, tag_regex
from corchetes.protocol import ShortcodeHandler
from corchetes.registry import ShortcodeRegistry
from corchetes.utils.text import restore_brackets

__version__ = "0.1.0"


class Shortcodes:
    """High-level shortcode processor owning one registry and one config.

    Usage:
        >>> sc = Shortcodes()
        >>> sc.add("hash", hash_shortcode)
        >>> sc('[hash algo="md5"/]')
        'd41d8cd98f00b204e9800998ecf8427e'

        >>> sc.strip("a [hash]x[/hash] b")
        'a  b'

        >>> sc.has("see [note][hash/][/note]", "hash")
        True

    Thread Safety:
        Every call installs this instance's config via ContextVar for its
        duration and restores the previous config afterwards. The registry
        itself is not locked: do not add or remove shortcodes while another
        thread is expanding with the same instance.

    """

    __slots__ = ("_config", "_registry")

    def __init__(
        self,
        *,
        registry: ShortcodeRegistry | None = None,
        config: ShortcodeConfig | None = None,
    ) -> None:
        """Initialize shortcode processor.

        Args:
            registry: Registry to use (a new empty one if None). The registry
                is shared, not copied.
            config: Hooks to apply during expansion (no hooks if None)
        """
        self._registry = registry if registry is not None else ShortcodeRegistry()
        self._config = config or ShortcodeConfig()

    @property
    def registry(self) -> ShortcodeRegistry:
        """The registry this processor reads handlers from."""
        return self._registry

    @property
    def config(self) -> ShortcodeConfig:
        """The hooks applied by this processor."""
        return self._config

    def add(self, tag: str, handler: ShortcodeHandler) -> None:
        """Register a handler; a later registration of the same tag wins.

        Raises:
            InvalidTagName: If the name is blank or contains reserved characters
        """
        self._registry.register(tag, handler)

    def remove(self, tag: str) -> None:
        """Remove a shortcode."""
        self._registry.unregister(tag)

    def remove_all(self) -> None:
        """Remove every shortcode."""
        self._registry.clear()

    def defined(self, tag: str) -> bool:
        """Check whether a shortcode named tag is registered."""
        return self._registry.has(tag)

    def has(self, content: str, tag: str) -> bool:
        """Check whether content contains the registered shortcode tag."""
        return has_shortcode(content, tag, self._registry)

    def __call__(self, content: str) -> str:
        """Expand shortcodes in content (same as expand())."""
        return self.expand(content)

    def expand(self, content: str) -> str:
        """Replace shortcodes in content with their handlers' output.

        Raises:
            InvalidHandler: If a matched name is bound to a non-callable value
        """
        with shortcode_config_context(self._config):
            return expand(content, self._registry)

    def apply(self, content: str) -> str:
        """Alias of expand()."""
        return self.expand(content)

    def strip(self, content: str) -> str:
        """Remove shortcodes and their enclosed content from content."""
        with shortcode_config_context(self._config):
            return strip(content, self._registry)

    def atts(
        self,
        defaults: Mapping[str, Any],
        attributes: AttributeSet | None,
        shortcode: str = "",
    ) -> dict[str, Any]:
        """Merge handler attributes with defaults; see merge_attributes()."""
        with shortcode_config_context(self._config):
            return merge_attributes(defaults, attributes, shortcode)

    def pattern(self, names: Iterable[str] | None = None) -> str:
        """Regular expression source matching the given shortcodes.

        None or an empty iterable means every registered shortcode.

        Raises:
            ValueError: If no names are given and the registry is empty
        """
        selected = set(names or ())
        return tag_regex(selected or self._registry.names)


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # High-level
    "Shortcodes",
    # Core API
    "apply",
    "expand",
    "has_shortcode",
    "strip",
    "restore_brackets",
    # Attributes
    "AttributeSet",
    "merge_attributes",
    "parse_attributes",
    # Tag matching
    "TagMatch",
    "build_pattern",
    "find_tag_names",
    "scan",
    "tag_regex",
    # Registry and handlers
    "ShortcodeHandler",
    "ShortcodeRegistry",
    "create_registry_with_defaults",
    "hash_shortcode",
    # Configuration (ContextVar-based)
    "ShortcodeConfig",
    "get_shortcode_config",
    "set_shortcode_config",
    "reset_shortcode_config",
    "shortcode_config_context",
    # Errors
    "CorchetesError",
    "InvalidHandler",
    "InvalidTagName",
]
