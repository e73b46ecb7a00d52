"""Hashing utilities for Corchetes.

Backs the built-in ``hash`` shortcode.

Example:
    >>> from corchetes.utils.hashing import hash_str
    >>> hash_str("hello world", algorithm="md5")
    '5eb63bbbe01eeed093cb22bb8f5acdc3'
"""

import hashlib


def hash_str(content: str, algorithm: str = "sha256") -> str:
    """Hex digest of string content.

    Args:
        content: String content to hash (encoded as UTF-8)
        algorithm: Any name accepted by hashlib.new ('sha256', 'md5', ...)

    Raises:
        ValueError: If hashlib does not know the algorithm

    Examples:
        >>> hash_str("")
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
    """
    return hashlib.new(algorithm, content.encode("utf-8")).hexdigest()
