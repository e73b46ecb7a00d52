"""ContextVar-based shortcode configuration for Corchetes.

Holds the optional hooks that intercept or post-process expansion. Config is
set once per Shortcodes instance call and read by the engine and by
merge_attributes() in the same context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and one thread's hooks never leak into another.

Usage:
    # In Shortcodes class
    sc = Shortcodes(config=ShortcodeConfig(post_dispatch=wrap_in_span))
    html = sc("[year]")  # Sets config internally via ContextVar

    # Direct engine usage (advanced)
    from corchetes.config import shortcode_config_context, ShortcodeConfig

    with shortcode_config_context(ShortcodeConfig(pre_dispatch=block_all)):
        result = expand(content, registry)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from corchetes.protocol import (
        AttributesFilter,
        PostDispatchHook,
        PreDispatchHook,
        StripFilter,
    )


@dataclass(frozen=True, slots=True)
class ShortcodeConfig:
    """Immutable shortcode configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        pre_dispatch: Called before each handler as (tag, attributes, match).
            A non-None return value replaces the tag and skips the handler.
        post_dispatch: Called with (output, tag, attributes, match) after each
            handler; its return value is spliced into the text.
        strip_filter: Called with (registered_names, content) by strip();
            returns the names whose tags should be removed.
        attributes_filter: Called with (merged, defaults, attributes, shortcode)
            by merge_attributes() when a shortcode name is given.

    """

    pre_dispatch: "PreDispatchHook | None" = None
    post_dispatch: "PostDispatchHook | None" = None
    strip_filter: "StripFilter | None" = None
    attributes_filter: "AttributesFilter | None" = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ShortcodeConfig":
        """Create ShortcodeConfig from dictionary.

        Only includes keys that are valid ShortcodeConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ShortcodeConfig attribute names.

        Returns:
            New ShortcodeConfig instance with values from dict.

        Example:
            >>> config = ShortcodeConfig.from_dict({
            ...     "post_dispatch": lambda output, *_: output.strip(),
            ...     "unknown_key": "ignored",
            ... })
            >>> config.pre_dispatch is None
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ShortcodeConfig = ShortcodeConfig()

# Thread-local configuration via ContextVar
_shortcode_config: ContextVar[ShortcodeConfig] = ContextVar(
    "shortcode_config",
    default=_DEFAULT_CONFIG,
)


def get_shortcode_config() -> ShortcodeConfig:
    """Get current shortcode configuration (thread-local).

    Returns:
        The active ShortcodeConfig for this thread/context.

    """
    return _shortcode_config.get()


def set_shortcode_config(config: ShortcodeConfig) -> None:
    """Set shortcode configuration for current context.

    Args:
        config: ShortcodeConfig instance to use for this context.

    """
    _shortcode_config.set(config)


def reset_shortcode_config() -> None:
    """Reset to default configuration (no hooks)."""
    _shortcode_config.set(_DEFAULT_CONFIG)


@contextmanager
def shortcode_config_context(config: ShortcodeConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ShortcodeConfig to use within the context.

    Yields:
        None

    Example:
        >>> from corchetes import ShortcodeRegistry, expand
        >>> registry = ShortcodeRegistry({"tag": lambda attrs, content, tag: "handled"})
        >>> veto = ShortcodeConfig(pre_dispatch=lambda tag, attrs, match: "vetoed")
        >>> with shortcode_config_context(veto):
        ...     expand("[tag]", registry)
        'vetoed'
        >>> expand("[tag]", registry)  # previous config restored
        'handled'

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    token = _shortcode_config.set(config)
    try:
        yield
    finally:
        _shortcode_config.reset(token)


__all__ = [
    "ShortcodeConfig",
    "get_shortcode_config",
    "set_shortcode_config",
    "reset_shortcode_config",
    "shortcode_config_context",
]
