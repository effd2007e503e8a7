"""Hash combiners for pairs of values and a small membership helper."""

from collections.abc import Container
from typing import Any, Hashable

_MASK64 = (1 << 64) - 1
_GOLDEN = 0x9E3779B9


def _hash64(value: Hashable) -> int:
    """Hash a value into an unsigned 64-bit integer.

    Integers hash to themselves (two's complement wrapped), everything else
    goes through the built-in ``hash``.
    """
    if isinstance(value, int):
        return value & _MASK64
    return hash(value) & _MASK64


def hash_int_pair(first: int, second: int) -> int:
    """Combine two integers into one 64-bit hash value."""
    seed = _hash64(first)
    return (_hash64(second) + _GOLDEN + ((seed << 6) & _MASK64) + (seed >> 2)) & _MASK64


def hash_pair(first: Hashable, second: Hashable) -> int:
    """Combine the hashes of two arbitrary values into one 64-bit hash value."""
    hash_a = _hash64(first)
    hash_b = _hash64(second)
    mixed = (hash_b + _GOLDEN + ((hash_a << 6) & _MASK64) + (hash_a >> 2)) & _MASK64
    return hash_a ^ mixed


def contains(collection: Container[Any], key: Any) -> bool:
    """Return True if ``key`` is in ``collection``."""
    return key in collection