"""Tests for ContextVar-based shortcode configuration.

Validates defaults, immutability, context manager behavior and thread
isolation.
"""

from threading import Thread

import pytest

from corchetes import (
    ShortcodeConfig,
    ShortcodeRegistry,
    expand,
    get_shortcode_config,
    reset_shortcode_config,
    set_shortcode_config,
    shortcode_config_context,
)


def _veto(tag, attrs, match):
    return "vetoed"


class TestShortcodeConfigDataclass:
    def test_default_values(self) -> None:
        """Default config has no hooks."""
        config = ShortcodeConfig()
        assert config.pre_dispatch is None
        assert config.post_dispatch is None
        assert config.strip_filter is None
        assert config.attributes_filter is None

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = ShortcodeConfig()
        with pytest.raises(AttributeError):
            config.pre_dispatch = _veto  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        """from_dict() keeps known fields and ignores the rest."""
        config = ShortcodeConfig.from_dict({"pre_dispatch": _veto, "unknown_key": 1})
        assert config.pre_dispatch is _veto
        assert config.post_dispatch is None

    def test_from_empty_dict(self) -> None:
        """An empty dict gives the default config."""
        assert ShortcodeConfig.from_dict({}) == ShortcodeConfig()


class TestContextVarFunctions:
    def teardown_method(self) -> None:
        reset_shortcode_config()

    def test_default_config(self) -> None:
        """Default config is returned when not explicitly set."""
        assert get_shortcode_config() == ShortcodeConfig()

    def test_set_and_get(self) -> None:
        """set_shortcode_config() changes the current config."""
        config = ShortcodeConfig(pre_dispatch=_veto)
        set_shortcode_config(config)
        assert get_shortcode_config() is config

    def test_reset(self) -> None:
        """reset_shortcode_config() restores the default."""
        set_shortcode_config(ShortcodeConfig(pre_dispatch=_veto))
        reset_shortcode_config()
        assert get_shortcode_config().pre_dispatch is None


class TestContextManager:
    def test_restores_previous_config(self) -> None:
        """Nested context managers restore the outer config."""
        outer = ShortcodeConfig(post_dispatch=lambda output, *rest: output)
        inner = ShortcodeConfig(pre_dispatch=_veto)
        with shortcode_config_context(outer):
            with shortcode_config_context(inner):
                assert get_shortcode_config() is inner
            assert get_shortcode_config() is outer
        assert get_shortcode_config() == ShortcodeConfig()

    def test_restores_on_exception(self) -> None:
        """Context manager restores config even if an exception is raised."""
        with pytest.raises(RuntimeError), shortcode_config_context(ShortcodeConfig(pre_dispatch=_veto)):
            raise RuntimeError("boom")
        assert get_shortcode_config().pre_dispatch is None

    def test_engine_reads_current_config(self) -> None:
        """expand() reads hooks from the current context."""
        registry = ShortcodeRegistry({"t": lambda attrs, content, tag: "handled"})
        with shortcode_config_context(ShortcodeConfig(pre_dispatch=_veto)):
            assert expand("[t/]", registry) == "vetoed"
        assert expand("[t/]", registry) == "handled"


class TestThreadIsolation:
    def test_hooks_do_not_leak_across_threads(self) -> None:
        """A config set in one thread does not reach another."""
        registry = ShortcodeRegistry({"t": lambda attrs, content, tag: "handled"})
        results: dict[str, str] = {}

        def worker() -> None:
            set_shortcode_config(ShortcodeConfig(pre_dispatch=_veto))
            results["thread"] = expand("[t/]", registry)

        thread = Thread(target=worker)
        thread.start()
        thread.join()
        results["main"] = expand("[t/]", registry)

        assert results == {"thread": "vetoed", "main": "handled"}
