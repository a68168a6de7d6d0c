"""
Token Notation for rpnkey

A plain-text spelling of postfix token sequences, used by the command
line to read formulas from files and to print them back. Reading is
purely lexical: every whitespace-separated word becomes one token, with
no arity checks, evaluation or simplification.

Grammar:
    identifier  @SEG:OFF:GEN:BW     e.g. @0:0:0:32
    boolean     true | false
    constant    signed decimal      e.g. 5, -3
    operator    a symbol from OPERATOR_SYMBOLS, e.g. +, <=u, &&
    pair        FORMULA ; FORMULA

Example:
    >>> format_formula(read_formula("@0:0:0:32 5 +"))
    '@0:0:0:32 5 +'
"""

import re

from rpnkey.models import (
    OPERATOR_SYMBOLS,
    Formula,
    FormulaPair,
    Token,
    TokenKind,
)

PAIR_SEPARATOR = ";"

_IDENT_RE = re.compile(r"@(\d+):(\d+):(\d+):(\d+)")
_CONSTANT_RE = re.compile(r"-?\d+")
_OPERATORS_BY_SYMBOL = {symbol: op for op, symbol in OPERATOR_SYMBOLS.items()}


class NotationError(ValueError):
    """Raised when text cannot be read as tokens."""

    def __init__(self, message: str, word: str, position: int) -> None:
        super().__init__(f"{message} at token {position}: {word!r}")
        self.word = word
        self.position = position


def read_token(word: str, position: int = 0) -> Token:
    """
    Read one token from a single word.

    Args:
        word: The word, without surrounding whitespace
        position: Index of the word in its formula, for error messages

    Returns:
        The token

    Raises:
        NotationError: If the word is not a valid token
    """
    if word in _OPERATORS_BY_SYMBOL:
        return Token.operator(_OPERATORS_BY_SYMBOL[word])
    if word == "true":
        return Token.boolean(True)
    if word == "false":
        return Token.boolean(False)
    try:
        match = _IDENT_RE.fullmatch(word)
        if match:
            return Token.identifier(*(int(group) for group in match.groups()))
        if _CONSTANT_RE.fullmatch(word):
            return Token.constant(int(word))
    except ValueError as e:
        raise NotationError(str(e), word, position) from e
    raise NotationError("Unrecognized token", word, position)


def read_formula(text: str) -> Formula:
    """Read a whitespace-separated token sequence into a Formula."""
    return Formula(tuple(read_token(word, i) for i, word in enumerate(text.split())))


def read_formula_pair(text: str) -> FormulaPair:
    """
    Read two formulas separated by PAIR_SEPARATOR.

    Raises:
        NotationError: If the separator does not occur exactly once
    """
    parts = text.split(PAIR_SEPARATOR)
    if len(parts) != 2:
        raise NotationError(
            f"Expected exactly one '{PAIR_SEPARATOR}' between two formulas",
            text.strip(),
            0,
        )
    return FormulaPair(read_formula(parts[0]), read_formula(parts[1]))


def format_token(token: Token) -> str:
    """Spell a token in notation."""
    if token.kind is TokenKind.OPERATOR:
        return token.op.symbol
    if token.kind is TokenKind.BOOL_VAL:
        return "true" if token.value else "false"
    if token.kind is TokenKind.CONSTANT:
        return str(token.value)
    ident = token.ident
    return f"@{ident.segment}:{ident.offset}:{ident.generation}:{ident.bit_width}"


def format_formula(formula: Formula) -> str:
    """Spell a formula in notation."""
    return " ".join(format_token(token) for token in formula)


def format_formula_pair(pair: FormulaPair) -> str:
    """Spell a formula pair in notation."""
    return f"{format_formula(pair.first)} {PAIR_SEPARATOR} {format_formula(pair.second)}"
