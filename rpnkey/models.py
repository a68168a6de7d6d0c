"""
Core Data Models for rpnkey

This module defines the value types the hashing layer reads:
- TokenKind: The closed set of token kinds
- Operator: Operator codes carried by operator tokens
- Ident: The composite key of an identifier token
- Token: A single element of a postfix formula
- Formula: An ordered sequence of tokens in postfix (RPN) order
- FormulaPair: An ordered pair of formulas used as a single key

These models are:
- Immutable (frozen dataclasses, tuples for sequences)
- Opaque to the hashing layer beyond their token sequence
- Hashable and comparable consistently with rpnkey.hash

The ``__hash__`` methods delegate to rpnkey.hash.formula_hash, bound at the
bottom of this module, so that
``dict`` and ``set`` agree with the explicit KeyTraits used by KeyTable.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Iterator, Optional


U8_MAX = 0xFF
U16_MAX = 0xFFFF
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class InvariantViolation(AssertionError):
    """
    An internal invariant of the formula model does not hold.

    Raised when a token of an unrecognized kind reaches the hash dispatch.
    This is a programming error in whatever produced the token, never a
    recoverable condition, so library code does not catch it.
    """


class TokenKind(Enum):
    """
    Kind tag of a formula token.

    States:
        OPERATOR: Carries an Operator code.
        BOOL_VAL: Carries 0 or 1.
        CONSTANT: Carries a signed 32-bit integer.
        IDENTIFIER: Carries an Ident.
    """

    OPERATOR = "operator"
    BOOL_VAL = "bool"
    CONSTANT = "constant"
    IDENTIFIER = "identifier"


class Operator(IntEnum):
    """
    Operator codes. The integer value is what gets hashed.

    Arithmetic and comparison operators come in signed and unsigned flavours,
    since formulas describe fixed-width machine values.
    """

    PLUS = 0
    MINUS = 1
    TIMES = 2
    DIVIDE = 3
    UDIVIDE = 4
    REMAINDER = 5
    UREMAINDER = 6
    BIT_AND = 7
    BIT_OR = 8
    BIT_XOR = 9
    SHIFT_LEFT = 10
    ASHIFT_RIGHT = 11
    LSHIFT_RIGHT = 12
    EQ = 13
    NEQ = 14
    LT = 15
    LTE = 16
    GT = 17
    GTE = 18
    ULT = 19
    ULTE = 20
    UGT = 21
    UGTE = 22
    BOOL_AND = 23
    BOOL_OR = 24
    BOOL_NOT = 25
    BIT_NOT = 26

    @property
    def symbol(self) -> str:
        """Textual symbol used by rpnkey.notation."""
        return OPERATOR_SYMBOLS[self]


OPERATOR_SYMBOLS: dict[Operator, str] = {
    Operator.PLUS: "+",
    Operator.MINUS: "-",
    Operator.TIMES: "*",
    Operator.DIVIDE: "/",
    Operator.UDIVIDE: "/u",
    Operator.REMAINDER: "%",
    Operator.UREMAINDER: "%u",
    Operator.BIT_AND: "&",
    Operator.BIT_OR: "|",
    Operator.BIT_XOR: "^",
    Operator.SHIFT_LEFT: "<<",
    Operator.ASHIFT_RIGHT: ">>",
    Operator.LSHIFT_RIGHT: ">>>",
    Operator.EQ: "==",
    Operator.NEQ: "!=",
    Operator.LT: "<",
    Operator.LTE: "<=",
    Operator.GT: ">",
    Operator.GTE: ">=",
    Operator.ULT: "<u",
    Operator.ULTE: "<=u",
    Operator.UGT: ">u",
    Operator.UGTE: ">=u",
    Operator.BOOL_AND: "&&",
    Operator.BOOL_OR: "||",
    Operator.BOOL_NOT: "!",
    Operator.BIT_NOT: "~",
}


@dataclass(frozen=True)
class Ident:
    """
    Composite key of a program variable inside a formula.

    Attributes:
        segment: Memory segment the variable lives in (unsigned 16-bit)
        offset: Offset within the segment (unsigned 16-bit)
        generation: SSA-like generation counter (unsigned 16-bit)
        bit_width: Width of the value in bits (unsigned 8-bit)

    Invariants:
        - segment, offset and generation are in [0, 0xFFFF]
        - bit_width is in [0, 0xFF]
    """

    segment: int
    offset: int
    generation: int
    bit_width: int

    def __post_init__(self) -> None:
        """Validate field ranges after initialization."""
        for name in ("segment", "offset", "generation"):
            _check_range(name, getattr(self, name), 0, U16_MAX)
        _check_range("bit_width", self.bit_width, 0, U8_MAX)


@dataclass(frozen=True)
class Token:
    """
    A single element of a postfix formula.

    Tokens are tagged values. Only the payload matching ``kind`` is set:
    ``op`` for operators, ``ident`` for identifiers, ``value`` for boolean
    and numeric constants. Use the classmethod constructors rather than
    filling the fields by hand.

    Equality compares the kind as well as the payload, so ``true`` and the
    constant ``1`` are different tokens even though they hash identically.

    Attributes:
        kind: The token kind
        value: Integer payload of BOOL_VAL and CONSTANT tokens, 0 otherwise
        op: Operator code of OPERATOR tokens
        ident: Composite key of IDENTIFIER tokens

    Invariants:
        - op is set iff kind is OPERATOR
        - ident is set iff kind is IDENTIFIER
        - BOOL_VAL payload is 0 or 1
        - CONSTANT payload fits a signed 32-bit integer
    """

    kind: TokenKind
    value: int = 0
    op: Optional[Operator] = None
    ident: Optional[Ident] = None

    def __post_init__(self) -> None:
        """Validate that the payload matches the kind."""
        if not isinstance(self.kind, TokenKind):
            raise ValueError(f"Unknown token kind: {self.kind!r}")
        if (self.kind is TokenKind.OPERATOR) != (self.op is not None):
            raise ValueError(f"Operator payload does not match kind {self.kind.value}")
        if self.op is not None:
            object.__setattr__(self, "op", Operator(self.op))
        if (self.kind is TokenKind.IDENTIFIER) != (self.ident is not None):
            raise ValueError(f"Identifier payload does not match kind {self.kind.value}")
        if self.kind is TokenKind.BOOL_VAL:
            _check_range("value", self.value, 0, 1)
        elif self.kind is TokenKind.CONSTANT:
            _check_range("value", self.value, INT32_MIN, INT32_MAX)
        elif self.value != 0:
            raise ValueError(f"{self.kind.value} tokens carry no integer value")

    @classmethod
    def operator(cls, op: Operator | int) -> "Token":
        """Create an operator token. Raises ValueError for unknown codes."""
        return cls(TokenKind.OPERATOR, op=Operator(op))

    @classmethod
    def boolean(cls, flag: bool) -> "Token":
        """Create a boolean literal token."""
        return cls(TokenKind.BOOL_VAL, value=int(bool(flag)))

    @classmethod
    def constant(cls, value: int) -> "Token":
        """Create a numeric constant token."""
        return cls(TokenKind.CONSTANT, value=value)

    @classmethod
    def identifier(
        cls,
        segment: int,
        offset: int,
        generation: int,
        bit_width: int,
    ) -> "Token":
        """Create an identifier token from its four key fields."""
        return cls(
            TokenKind.IDENTIFIER,
            ident=Ident(segment, offset, generation, bit_width),
        )

    def __hash__(self) -> int:
        return hash_token(self)


@dataclass(frozen=True)
class Formula:
    """
    A symbolic formula stored as a postfix token sequence.

    The formula is treated as opaque: no tree is rebuilt from the tokens.
    Two formulas are equal iff their token sequences are equal element-wise
    and have the same length.

    Attributes:
        tokens: The tokens in postfix order

    Usage:
        f = Formula.of(Token.identifier(0, 0, 0, 32), Token.constant(5),
                       Token.operator(Operator.PLUS))
    """

    tokens: tuple[Token, ...] = ()

    def __post_init__(self) -> None:
        """Freeze whatever iterable was passed into a tuple."""
        if not isinstance(self.tokens, tuple):
            object.__setattr__(self, "tokens", tuple(self.tokens))

    @classmethod
    def of(cls, *tokens: Token) -> "Formula":
        """Create a formula from tokens given as arguments."""
        return cls(tokens)

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token]) -> "Formula":
        """Create a formula from any iterable of tokens."""
        return cls(tuple(tokens))

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __hash__(self) -> int:
        return hash_formula(self)


@dataclass(frozen=True)
class FormulaPair:
    """
    An ordered pair of formulas used as one key.

    Typically (path condition, value definitions) of an explored symbolic
    state. Equality is positional and not symmetric: (a, b) != (b, a)
    unless a == b.
    """

    first: Formula
    second: Formula

    def __iter__(self) -> Iterator[Formula]:
        yield self.first
        yield self.second

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormulaPair):
            return NotImplemented
        return formula_pairs_equal(self, other)

    def __hash__(self) -> int:
        return hash_formula_pair(self)


def _check_range(name: str, value: int, low: int, high: int) -> None:
    """Raise ValueError unless low <= value <= high."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{name} ({value}) must be in [{low}, {high}]")


# formula_hash imports the classes above, so its functions are bound only
# after they exist. rpnkey/__init__.py always loads this module first.
from rpnkey.hash.formula_hash import (  # noqa: E402
    formula_pairs_equal,
    hash_formula,
    hash_formula_pair,
    hash_token,
)
