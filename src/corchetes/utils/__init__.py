"""Utility modules for Corchetes.

Provides:
- text: strip_c_slashes, normalize_spaces, restore_brackets
- hashing: hash_str for the built-in hash shortcode
"""

from corchetes.utils.hashing import hash_str
from corchetes.utils.text import normalize_spaces, restore_brackets, strip_c_slashes

__all__ = [
    "hash_str",
    "normalize_spaces",
    "restore_brackets",
    "strip_c_slashes",
]
