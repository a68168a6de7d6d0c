"""
Structural Hashing of Formulas for rpnkey

This module maps tokens, formulas and formula pairs to hash codes and
decides their structural equality. These are the functions a dedup or
memo table calls for every insert and lookup.

Hashing Rules:
    Operator:    hash of the operator's integer code
    Boolean:     hash of the payload (0 or 1)
    Constant:    hash of the payload
    Identifier:  hash_combine chained from 0 over
                 (segment, offset, generation, bit_width)
    Formula:     sequence hash over the token sequence
    Pair:        hash_combine(hash(first), hash(second))

Booleans and constants share one hashing path, so ``true`` and ``1`` hash
identically. Token equality also compares the kind, which keeps them apart.

Hash Stability Guarantees:
    - Equal formulas → same hash
    - Reordered tokens → DIFFERENT hash (order sensitive fold)
    - Logically equivalent but structurally different → DIFFERENT hash
    - Same hash across processes (no PYTHONHASHSEED dependence)
"""

from rpnkey.hash.combine import hash_combine, hash_int
from rpnkey.hash.containers import KeyTraits, hash_pair, hash_sequence
from rpnkey.models import (
    Formula,
    FormulaPair,
    Ident,
    InvariantViolation,
    Token,
    TokenKind,
)


def hash_ident(ident: Ident) -> int:
    """
    Hash the composite key of an identifier.

    Fields are folded in the fixed order segment, offset, generation,
    bit_width, so identifiers differing in any one field hash apart.
    """
    h = 0
    h = hash_combine(h, hash_int(ident.segment))
    h = hash_combine(h, hash_int(ident.offset))
    h = hash_combine(h, hash_int(ident.generation))
    h = hash_combine(h, hash_int(ident.bit_width))
    return h


def hash_token(token: Token) -> int:
    """
    Hash a single token by dispatching on its kind.

    Args:
        token: The token to hash

    Returns:
        Unsigned 64-bit hash

    Raises:
        InvariantViolation: If the token carries a kind outside TokenKind.
            This means the token model is broken and must not be caught.
    """
    kind = token.kind
    if kind is TokenKind.OPERATOR:
        return hash_int(int(token.op))
    if kind is TokenKind.BOOL_VAL or kind is TokenKind.CONSTANT:
        return hash_int(token.value)
    if kind is TokenKind.IDENTIFIER:
        return hash_ident(token.ident)
    raise InvariantViolation(f"Unhandled token kind in hash dispatch: {kind!r}")


def hash_formula(formula: Formula) -> int:
    """Hash a formula as the ordered sequence of its tokens."""
    return hash_sequence(formula.tokens, TOKEN_TRAITS)


def formulas_equal(a: Formula, b: Formula) -> bool:
    """
    Structural equality of two formulas.

    True iff both token sequences have the same length and are equal at
    every position. Logical equivalence is not considered.
    """
    return a.tokens == b.tokens


def hash_formula_pair(pair: FormulaPair) -> int:
    """Hash an ordered pair of formulas as one key."""
    return hash_pair((pair.first, pair.second), FORMULA_TRAITS, FORMULA_TRAITS)


def formula_pairs_equal(a: FormulaPair, b: FormulaPair) -> bool:
    """
    Positional equality of two formula pairs.

    Compares token sequences directly: first with first, second with
    second. Must agree with formulas_equal applied component-wise.
    """
    return a.first.tokens == b.first.tokens and a.second.tokens == b.second.tokens


TOKEN_TRAITS: KeyTraits[Token] = KeyTraits(
    hasher=hash_token,
    equality=lambda a, b: a == b,
    name="token",
)

FORMULA_TRAITS: KeyTraits[Formula] = KeyTraits(
    hasher=hash_formula,
    equality=formulas_equal,
    name="formula",
)

FORMULA_PAIR_TRAITS: KeyTraits[FormulaPair] = KeyTraits(
    hasher=hash_formula_pair,
    equality=formula_pairs_equal,
    name="formula_pair",
)
