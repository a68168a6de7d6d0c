"""
Hash combination primitive for rpnkey.

Every composite hash in the package is built by folding element hashes
through ``hash_combine``. The mixing step is the one popularised by
``boost::hash_combine``:

    combined = h ^ (v + 0x9e3779b9 + (h << 6) + (h >> 2))

evaluated modulo 2**WORD_BITS. Overflow wraps silently, exactly as unsigned
machine arithmetic would.

Design Decisions:
    - Fixed 64-bit word so values do not depend on the interpreter build
    - Integers hash to their two's-complement bit pattern instead of going
      through ``hash()``, which keeps codes stable across processes
      regardless of PYTHONHASHSEED
"""

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1

# 2**32 / golden ratio
GOLDEN_RATIO = 0x9E3779B9


def hash_int(value: int) -> int:
    """
    Hash an integer to a word-sized unsigned value.

    Non-negative values that fit the word hash to themselves; negative
    values hash to their two's-complement representation.

    Args:
        value: Any Python integer

    Returns:
        ``value`` reduced modulo 2**WORD_BITS

    Example:
        >>> hash_int(5)
        5
        >>> hash_int(-1) == WORD_MASK
        True
    """
    return value & WORD_MASK


def hash_combine(h: int, v: int) -> int:
    """
    Fold the hash ``v`` into the running hash ``h``.

    The result is order sensitive: ``hash_combine(hash_combine(0, a), b)``
    differs from ``hash_combine(hash_combine(0, b), a)`` in general, which
    is what lets sequence hashes tell element orders apart.

    Args:
        h: Running hash (unsigned, word-sized)
        v: Hash of the element being folded in

    Returns:
        The combined unsigned word-sized hash
    """
    h &= WORD_MASK
    mixed = (v + GOLDEN_RATIO + (h << 6) + (h >> 2)) & WORD_MASK
    return h ^ mixed
