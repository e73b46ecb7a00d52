"""Shared fixtures for Corchetes tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from corchetes import ShortcodeRegistry, reset_shortcode_config


class CallRecorder:
    """Handler that records every call and returns a fixed marker."""

    def __init__(self, marker: str = "X") -> None:
        self.marker = marker
        self.calls: list[tuple[object, str | None, str]] = []

    def __call__(self, attributes: object, content: str | None, tag: str) -> str:
        self.calls.append((attributes, content, tag))
        return self.marker


def upper(attributes: object, content: str | None, tag: str) -> str:
    return (content or "").upper()


def wrap(attributes: object, content: str | None, tag: str) -> str:
    return f"<{tag}>{content}</{tag}>"


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def registry(recorder: CallRecorder) -> ShortcodeRegistry:
    """Registry with upper, wrap and a recording ``b`` handler."""
    return ShortcodeRegistry({"upper": upper, "wrap": wrap, "b": recorder})


@pytest.fixture(autouse=True)
def _clean_config() -> Iterator[None]:
    """Never leak hooks between tests."""
    yield
    reset_shortcode_config()
