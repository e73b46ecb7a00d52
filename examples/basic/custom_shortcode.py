"""Add your own shortcode with @shortcode and read its attributes with merge_attributes()."""

from corchetes import ShortcodeRegistry, Shortcodes, merge_attributes

registry = ShortcodeRegistry()


@registry.shortcode("button", "btn")
def render_button(attrs, content, tag) -> str:
    """Render [button href="..." style="..."]label[/button] as a link."""
    opts = merge_attributes({"href": "#", "style": "primary"}, attrs, tag)
    return f'<a class="btn btn-{opts["style"]}" href="{opts["href"]}">{content or "Go"}</a>'


sc = Shortcodes(registry=registry)

print(sc('[button href="/docs"]Read the docs[/button]'))
print(sc("[btn/] and a literal [[btn]]"))
print(sc.strip("Plain text [button]only[/button]."))
