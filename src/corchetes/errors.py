"""Exception classes for Corchetes.

Provides standardized exceptions for error handling throughout Corchetes.
Malformed shortcode syntax in input text is never an error: it simply fails
to match and passes through unchanged.
"""

from __future__ import annotations

from typing import Any


class CorchetesError(Exception):
    """Base exception for all Corchetes errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidTagName(CorchetesError, ValueError):
    """Error when registering a shortcode under an unusable name.

    Raised when the name is blank or contains whitespace, control
    characters, or one of the reserved characters ``& / < > [ ] =``.
    The registry is left unchanged.
    """

    def __init__(self, tag: str, message: str) -> None:
        """Initialize invalid tag name error.

        Args:
            tag: The rejected shortcode name
            message: Description of why the name was rejected
        """
        self.tag = tag
        super().__init__(f"Invalid shortcode name {tag!r}: {message}")


class InvalidHandler(CorchetesError, TypeError):
    """Error when a matched shortcode has no callable handler.

    Raised during expansion. This indicates a broken registration rather
    than bad input text, so it aborts the whole substitution pass.
    """

    def __init__(self, tag: str, handler: Any = None) -> None:
        """Initialize invalid handler error.

        Args:
            tag: Name of the shortcode being dispatched
            handler: The non-callable value found in the registry
        """
        self.tag = tag
        self.handler = handler
        kind = type(handler).__name__
        super().__init__(
            f"Shortcode '{tag}' has no valid callback (registered value is {kind})"
        )
