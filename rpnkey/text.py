"""
Text helpers for rpnkey.
"""

DEFAULT_WRAP_WIDTH = 80


def break_string(n: int, s: str) -> str:
    """
    Insert a newline after every n characters of s.

    No newline is appended after the final chunk, so a string whose length
    is a multiple of n does not end with a line break.

    Args:
        n: Chunk width in characters
        s: The string to break

    Returns:
        The broken string (Python strings are immutable)

    Raises:
        ValueError: If n is not positive

    Example:
        >>> break_string(3, "abcdefgh")
        'abc\\ndef\\ngh'
    """
    if n <= 0:
        raise ValueError(f"Line width must be positive, got {n}")
    return "\n".join(s[i:i + n] for i in range(0, len(s), n))
