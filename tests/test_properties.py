"""Property-based tests for Corchetes using Hypothesis.

These tests verify invariants that should hold for any input text:
1. Text without an opening bracket is returned unchanged
2. Double brackets always render the tag literally
3. Expanding with empty handlers equals stripping, and stripping again is a no-op
4. Each non-escaped match calls its handler exactly once
5. The attribute tokenizer never mixes named and positional values

Property-based testing finds edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from corchetes import (
    ShortcodeRegistry,
    build_pattern,
    expand,
    has_shortcode,
    parse_attributes,
    scan,
    strip,
)

tag_names = st.from_regex(r"[a-z][a-z0-9_-]{0,8}", fullmatch=True)

# Fragments that combine into nested, unbalanced and escaped tags
fragments = st.sampled_from(
    [
        "[a/]",
        "[a]",
        "[/a]",
        "[b x=1]",
        "[/b]",
        '[a k="v" /]',
        "[[a]]",
        "[[b/]]",
        "[c/]",
        "[",
        "]",
        "/",
        "text",
        " ",
        "&#91;",
    ]
)
documents = st.lists(fragments, max_size=12).map("".join)

# Well-formed tags and words only, no stray or doubled brackets
clean_documents = st.lists(
    st.sampled_from(["[a/]", "[a x=1]body[/a]", "[b/]", "[b]x [a/] y[/b]", "[c/]", "word", " "]),
    max_size=10,
).map("".join)

bracket_soup = st.text(alphabet="[]/ab=\"' x", max_size=40)

attribute_keys = st.from_regex(r"[A-Za-z][A-Za-z0-9_-]{0,6}", fullmatch=True)
quoted_values = st.text(
    alphabet=st.characters(exclude_characters='"\\<\u00a0\u200b'),
    max_size=10,
)
bare_words = st.from_regex(r"[A-Za-z0-9.:]{1,8}", fullmatch=True)


def _empty(attributes, content, tag):
    return ""


class _Counter:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self, attributes, content, tag):
        self.count += 1
        return "ok"


class TestExpandProperties:
    @given(text=st.text(alphabet=st.characters(exclude_characters="[")))
    @settings(max_examples=100)
    def test_text_without_brackets_is_unchanged(self, text: str) -> None:
        """Text with no [ passes through expand and strip unchanged."""
        registry = ShortcodeRegistry({"a": _empty})
        assert expand(text, registry) == text
        assert strip(text, registry) == text

    @given(name=tag_names)
    @settings(max_examples=50)
    def test_double_brackets_render_literally(self, name: str) -> None:
        """[[name]] always renders as [name] without a handler call."""
        counter = _Counter()
        registry = ShortcodeRegistry({name: counter})
        assert expand(f"[[{name}]]", registry) == f"[{name}]"
        assert counter.count == 0

    @given(text=st.one_of(documents, bracket_soup, st.text()))
    @settings(max_examples=100)
    def test_empty_handlers_expand_like_strip(self, text: str) -> None:
        """Handlers that return "" make expand equal strip."""
        registry = ShortcodeRegistry({"a": _empty, "b": _empty})
        assert expand(text, registry) == strip(text, registry)

    @given(text=clean_documents)
    @settings(max_examples=100)
    def test_strip_after_expand_matches_strip(self, text: str) -> None:
        """Stripping expanded text equals stripping the source."""
        registry = ShortcodeRegistry({"a": _empty, "b": _empty})
        assert strip(expand(text, registry), registry) == strip(text, registry)

    @given(text=documents)
    @settings(max_examples=100)
    def test_each_unescaped_match_dispatches_once(self, text: str) -> None:
        """Every non-escaped match calls its handler once."""
        counter = _Counter()
        registry = ShortcodeRegistry({"a": counter, "b": counter})
        expected = sum(
            1 for match in scan(text, build_pattern(registry.names)) if not match.is_escaped
        )
        expand(text, registry)
        assert counter.count == expected

    @given(text=documents)
    @settings(max_examples=50)
    def test_expansion_is_deterministic(self, text: str) -> None:
        """Expanding the same text twice gives the same result."""
        registry = ShortcodeRegistry({"a": lambda attrs, content, tag: repr(attrs)})
        assert expand(text, registry) == expand(text, registry)

    @given(text=bracket_soup)
    @settings(max_examples=100)
    def test_bracket_soup_never_raises(self, text: str) -> None:
        """Arbitrary bracket sequences never raise."""
        registry = ShortcodeRegistry({"a": _Counter(), "b": _empty})
        expand(text, registry)
        strip(text, registry)
        has_shortcode(text, "a", registry)


class TestAttributeProperties:
    @given(text=st.text(max_size=60))
    @settings(max_examples=200)
    def test_shape_is_dict_or_list_of_strings(self, text: str) -> None:
        """The tokenizer returns a non-empty dict or a list of strings."""
        result = parse_attributes(text)
        if isinstance(result, dict):
            assert result
            assert all(isinstance(key, str) for key in result)
            assert all(isinstance(value, str) for value in result.values())
        else:
            assert isinstance(result, list)
            assert all(isinstance(value, str) for value in result)

    @given(pairs=st.lists(st.tuples(attribute_keys, quoted_values), min_size=1, max_size=6))
    @settings(max_examples=100)
    def test_named_pairs_first_occurrence_wins(self, pairs: list[tuple[str, str]]) -> None:
        """Generated key="value" pairs parse with the first value kept."""
        text = " ".join(f'{key}="{value}"' for key, value in pairs)
        expected: dict[str, str] = {}
        for key, value in pairs:
            expected.setdefault(key.lower(), value)
        assert parse_attributes(text) == expected

    @given(words=st.lists(bare_words, min_size=1, max_size=6))
    @settings(max_examples=100)
    def test_bare_words_are_positional(self, words: list[str]) -> None:
        """Bare words parse as the same positional list."""
        assert parse_attributes(" " + " ".join(words)) == words
