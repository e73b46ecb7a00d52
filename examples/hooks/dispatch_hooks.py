"""Intercept and decorate shortcode output with pre/post dispatch hooks."""

from corchetes import ShortcodeConfig, ShortcodeRegistry, Shortcodes

registry = ShortcodeRegistry(
    {
        "year": lambda attrs, content, tag: "2024",
        "secret": lambda attrs, content, tag: "s3cr3t",
    }
)


def hide_secrets(tag, attrs, match):
    """Returning a string replaces the handler; None lets it run."""
    return "[redacted]" if tag == "secret" else None


def annotate(output, tag, attrs, match):
    return f'<span data-shortcode="{tag}">{output}</span>'


sc = Shortcodes(
    registry=registry,
    config=ShortcodeConfig(pre_dispatch=hide_secrets, post_dispatch=annotate),
)

print(sc("(c) [year/], password: [secret/]"))
