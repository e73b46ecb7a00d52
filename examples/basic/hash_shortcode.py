"""Hash a URL with the built-in hash shortcode, two algorithms in one pass."""

from corchetes import Shortcodes, create_registry_with_defaults

sc = Shortcodes(registry=create_registry_with_defaults())

result = sc("""
MD5 = [hash algo="md5"]https://example.com/shortcodes[/hash]
SHA256 = [hash algo="sha256"]https://example.com/shortcodes[/hash]
""")
print(result)
