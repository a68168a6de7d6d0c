"""
Hash module for rpnkey.

This module provides the hash-combination primitive, structural hashing
of pairs and sequences, and hashing/equality of formulas.
"""

from rpnkey.hash.combine import (
    GOLDEN_RATIO,
    WORD_BITS,
    WORD_MASK,
    hash_combine,
    hash_int,
)
from rpnkey.hash.containers import (
    INT_TRAITS,
    Equatable,
    Hashable,
    KeyTraits,
    hash_pair,
    hash_sequence,
    pair_traits,
    sequence_traits,
    sequences_equal,
)
from rpnkey.hash.formula_hash import (
    FORMULA_PAIR_TRAITS,
    FORMULA_TRAITS,
    TOKEN_TRAITS,
    formula_pairs_equal,
    formulas_equal,
    hash_formula,
    hash_formula_pair,
    hash_ident,
    hash_token,
)

__all__ = [
    "GOLDEN_RATIO",
    "WORD_BITS",
    "WORD_MASK",
    "hash_combine",
    "hash_int",
    "INT_TRAITS",
    "Equatable",
    "Hashable",
    "KeyTraits",
    "hash_pair",
    "hash_sequence",
    "pair_traits",
    "sequence_traits",
    "sequences_equal",
    "FORMULA_PAIR_TRAITS",
    "FORMULA_TRAITS",
    "TOKEN_TRAITS",
    "formula_pairs_equal",
    "formulas_equal",
    "hash_formula",
    "hash_formula_pair",
    "hash_ident",
    "hash_token",
]
