"""
Trait-Keyed Hash Table for rpnkey

This module provides KeyTable, a separate-chaining hash table whose keys
are hashed and compared through an explicit KeyTraits object instead of
``__hash__``/``__eq__``. It is the deduplication and memoization table for
formulas met during symbolic-state exploration.

Design Decisions:
    - Power-of-two bucket count, indexed by the low bits of the hash
    - Buckets double once the load factor exceeds MAX_LOAD_FACTOR
    - Each entry caches its key hash; equality runs only on hash match
    - insert() never overwrites, mirroring unordered_map::insert;
      item assignment does

Academic Context:
    Input: Keys with KeyTraits, arbitrary values
    Transformation: hash → bucket → chain scan with traits.equal
    Output: Stored value or a miss
    Limitation: A hasher that breaks the hash/equality contract makes
                lookups miss silently
"""

import logging
from dataclasses import dataclass
from typing import Generic, Iterator, Optional, TypeVar

from rpnkey.hash.containers import KeyTraits

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

DEFAULT_BUCKETS = 8
MAX_LOAD_FACTOR = 0.75


@dataclass
class _Entry(Generic[K, V]):
    key_hash: int
    key: K
    value: V


class KeyTable(Generic[K, V]):
    """
    Hash table keyed through KeyTraits.

    Usage:
        table = KeyTable(FORMULA_TRAITS)
        table.insert(formula, "state-1")
        table.lookup(same_formula)      # "state-1"
        other in table                  # False

    Attributes:
        traits: Hash and equality functions for the key type
    """

    def __init__(self, traits: KeyTraits[K], initial_buckets: int = DEFAULT_BUCKETS) -> None:
        """
        Initialize an empty table.

        Args:
            traits: Hash and equality functions for keys
            initial_buckets: Starting bucket count, rounded up to a power of two

        Raises:
            ValueError: If initial_buckets is not positive
        """
        if initial_buckets < 1:
            raise ValueError(f"initial_buckets must be positive, got {initial_buckets}")
        self.traits = traits
        size = 1
        while size < initial_buckets:
            size <<= 1
        self._buckets: list[list[_Entry[K, V]]] = [[] for _ in range(size)]
        self._size = 0

    @property
    def bucket_count(self) -> int:
        """Number of buckets currently allocated."""
        return len(self._buckets)

    @property
    def max_chain_length(self) -> int:
        """Length of the longest bucket chain."""
        return max((len(bucket) for bucket in self._buckets), default=0)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: K) -> bool:
        return self._find(key, self.traits.hash(key)) is not None

    def __iter__(self) -> Iterator[K]:
        for bucket in self._buckets:
            for entry in bucket:
                yield entry.key

    def __getitem__(self, key: K) -> V:
        return self.lookup(key)

    def __setitem__(self, key: K, value: V) -> None:
        h = self.traits.hash(key)
        entry = self._find(key, h)
        if entry is not None:
            entry.value = value
            return
        self._add(key, h, value)

    def insert(self, key: K, value: V) -> tuple[V, bool]:
        """
        Insert key with value unless an equal key is already stored.

        Args:
            key: The key to insert
            value: Value stored if the key is new

        Returns:
            (stored value, True) if a new entry was created, otherwise
            (existing value, False). The existing value is not replaced.
        """
        h = self.traits.hash(key)
        entry = self._find(key, h)
        if entry is not None:
            return entry.value, False
        self._add(key, h, value)
        return value, True

    def lookup(self, key: K) -> V:
        """
        Return the value stored under key.

        Raises:
            KeyError: If no equal key is stored
        """
        entry = self._find(key, self.traits.hash(key))
        if entry is None:
            raise KeyError(key)
        return entry.value

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Return the value stored under key, or default if absent."""
        entry = self._find(key, self.traits.hash(key))
        return default if entry is None else entry.value

    def remove(self, key: K) -> V:
        """
        Remove key and return its value.

        Raises:
            KeyError: If no equal key is stored
        """
        h = self.traits.hash(key)
        bucket = self._buckets[h & (len(self._buckets) - 1)]
        for index, entry in enumerate(bucket):
            if entry.key_hash == h and self.traits.equal(entry.key, key):
                del bucket[index]
                self._size -= 1
                return entry.value
        raise KeyError(key)

    def items(self) -> Iterator[tuple[K, V]]:
        """Iterate over (key, value) pairs in bucket order."""
        for bucket in self._buckets:
            for entry in bucket:
                yield entry.key, entry.value

    def values(self) -> Iterator[V]:
        """Iterate over stored values in bucket order."""
        for _, value in self.items():
            yield value

    def clear(self) -> None:
        """Remove all entries, keeping the current bucket count."""
        for bucket in self._buckets:
            bucket.clear()
        self._size = 0

    def _find(self, key: K, h: int) -> Optional[_Entry[K, V]]:
        """Return the entry holding a key equal to key, if any."""
        bucket = self._buckets[h & (len(self._buckets) - 1)]
        for entry in bucket:
            if entry.key_hash == h and self.traits.equal(entry.key, key):
                return entry
        return None

    def _add(self, key: K, h: int, value: V) -> None:
        """Append a new entry, growing the bucket array if needed."""
        self._buckets[h & (len(self._buckets) - 1)].append(_Entry(h, key, value))
        self._size += 1
        if self._size > MAX_LOAD_FACTOR * len(self._buckets):
            self._grow()

    def _grow(self) -> None:
        """Double the bucket count and redistribute cached hashes."""
        new_size = len(self._buckets) * 2
        buckets: list[list[_Entry[K, V]]] = [[] for _ in range(new_size)]
        for bucket in self._buckets:
            for entry in bucket:
                buckets[entry.key_hash & (new_size - 1)].append(entry)
        self._buckets = buckets
        logger.debug(
            "KeyTable[%s] grew to %d buckets (%d entries)",
            self.traits.name,
            new_size,
            self._size,
        )
