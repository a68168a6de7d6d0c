"""
Structural hashing for composite values.

This module lifts ``hash_combine`` to pairs and ordered sequences, and
defines the capability interfaces a key type must offer to be stored in
a rpnkey.table.KeyTable:

    Hashable:  hash(key) -> int, pure and consistent with equality
    Equatable: equal(a, b) -> bool, an equivalence relation

Both capabilities are bundled in KeyTraits. Traits compose: the traits of
a pair or a sequence are derived from the traits of its elements, the way
the formula traits in rpnkey.hash.formula_hash are derived from token
traits.

Academic Context:
    Input: Element hashes in a fixed order
    Transformation: Left fold of hash_combine starting from 0
    Output: One unsigned 64-bit hash
    Limitation: Collisions are possible; equality settles them
"""

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Protocol, Sequence, TypeVar

from rpnkey.hash.combine import hash_combine, hash_int

K = TypeVar("K")
A = TypeVar("A")
B = TypeVar("B")
K_contra = TypeVar("K_contra", contravariant=True)


class Hashable(Protocol[K_contra]):
    """Computes a hash code for a key."""

    def hash(self, key: K_contra) -> int:
        ...


class Equatable(Protocol[K_contra]):
    """Decides whether two keys are equal."""

    def equal(self, a: K_contra, b: K_contra) -> bool:
        ...


@dataclass(frozen=True)
class KeyTraits(Generic[K]):
    """
    Hash and equality functions for one key type.

    Satisfies both Hashable and Equatable. Instances must keep the contract
    ``equal(a, b)`` implies ``hash(a) == hash(b)``.

    Attributes:
        hasher: Function computing the hash of a key
        equality: Function comparing two keys
        name: Label used in diagnostics
    """

    hasher: Callable[[K], int]
    equality: Callable[[K, K], bool]
    name: str = "key"

    def hash(self, key: K) -> int:
        return self.hasher(key)

    def equal(self, a: K, b: K) -> bool:
        return self.equality(a, b)


def hash_pair(
    pair: tuple[A, B],
    first: Hashable[A],
    second: Hashable[B],
) -> int:
    """
    Hash a 2-tuple as ``hash_combine(hash(first), hash(second))``.

    Args:
        pair: The pair to hash
        first: Hasher for the first component
        second: Hasher for the second component

    Returns:
        Combined 64-bit hash
    """
    a, b = pair
    return hash_combine(first.hash(a), second.hash(b))


def hash_sequence(items: Iterable[K], element: Hashable[K]) -> int:
    """
    Hash an ordered sequence by folding hash_combine over its elements.

    The fold starts from 0, so the empty sequence hashes to 0.

    Args:
        items: Elements in order
        element: Hasher for a single element

    Returns:
        Combined 64-bit hash
    """
    h = 0
    for item in items:
        h = hash_combine(h, element.hash(item))
    return h


def sequences_equal(a: Sequence[K], b: Sequence[K], element: Equatable[K]) -> bool:
    """Element-wise equality of two sequences of the same length."""
    if len(a) != len(b):
        return False
    return all(element.equal(x, y) for x, y in zip(a, b))


def pair_traits(first: KeyTraits[A], second: KeyTraits[B]) -> KeyTraits[tuple[A, B]]:
    """
    Build traits for pairs from the traits of each component.

    Equality is the conjunction of component-wise equality.
    """

    def equality(p: tuple[A, B], q: tuple[A, B]) -> bool:
        return first.equal(p[0], q[0]) and second.equal(p[1], q[1])

    return KeyTraits(
        hasher=lambda p: hash_pair(p, first, second),
        equality=equality,
        name=f"pair[{first.name}, {second.name}]",
    )


def sequence_traits(element: KeyTraits[K]) -> KeyTraits[Sequence[K]]:
    """Build traits for ordered sequences from the traits of one element."""
    return KeyTraits(
        hasher=lambda items: hash_sequence(items, element),
        equality=lambda a, b: sequences_equal(a, b, element),
        name=f"sequence[{element.name}]",
    )


INT_TRAITS: KeyTraits[int] = KeyTraits(
    hasher=hash_int,
    equality=lambda a, b: a == b,
    name="int",
)
