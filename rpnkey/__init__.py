"""
rpnkey

Structural hashing and equality for postfix symbolic formulas, so they
can serve as keys in deduplication and memoization tables.
"""

from rpnkey.models import (
    Formula,
    FormulaPair,
    Ident,
    InvariantViolation,
    Operator,
    Token,
    TokenKind,
)

__all__ = [
    "Formula",
    "FormulaPair",
    "Ident",
    "InvariantViolation",
    "Operator",
    "Token",
    "TokenKind",
]
__version__ = "0.1.0"
