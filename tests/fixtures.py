"""
Test fixtures for rpnkey.

This module provides token shorthands and sample formulas used across
the test suite.
"""

from rpnkey.models import Formula, FormulaPair, Operator, Token


def ident(seg: int = 0, off: int = 0, gen: int = 0, bw: int = 32) -> Token:
    """Identifier token with keyword shorthands."""
    return Token.identifier(seg, off, gen, bw)


def const(value: int) -> Token:
    return Token.constant(value)


def boolean(flag: bool) -> Token:
    return Token.boolean(flag)


def op(operator: Operator) -> Token:
    return Token.operator(operator)


# x + 5, with x a 32-bit variable
F1_TOKENS = [ident(bw=32), const(5), op(Operator.PLUS)]

# same shape, x is 64 bits wide
F3_TOKENS = [ident(bw=64), const(5), op(Operator.PLUS)]

# (x < 10) && (y != 0)
GUARD_TOKENS = [
    ident(0, 0, 0, 32),
    const(10),
    op(Operator.LT),
    ident(0, 4, 0, 32),
    const(0),
    op(Operator.NEQ),
    op(Operator.BOOL_AND),
]

TRUE_FORMULA = Formula.of(boolean(True))
EMPTY_FORMULA = Formula()


def sample_pair(generation: int = 0) -> FormulaPair:
    """(guard, x = x + 5) state with a chosen generation for x."""
    return FormulaPair(
        Formula(GUARD_TOKENS),
        Formula.of(ident(gen=generation), const(5), op(Operator.PLUS)),
    )


SAMPLE_FORMULAS_TEXT = """\
# sample formulas
@0:0:0:32 5 +
@0:0:0:64 5 +

@0:0:0:32 5 +
true
"""

SAMPLE_TRACES_TEXT = """\
true ; @0:0:0:32
@0:0:0:32 10 < ; @0:0:1:32 @0:0:0:32 1 + ==
true ; @0:0:0:32

true ; @0:0:0:32
false ; @0:0:0:32
"""
