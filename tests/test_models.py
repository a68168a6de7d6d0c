"""
Tests for the core data models.

Tests token validation, formula construction and operator symbols.
"""

import pytest
from rpnkey.models import (
    OPERATOR_SYMBOLS,
    Formula,
    FormulaPair,
    Ident,
    Operator,
    Token,
    TokenKind,
)
from rpnkey.hash import hash_formula, hash_formula_pair, hash_token
from rpnkey.notation import format_token
from tests.fixtures import F1_TOKENS, const, ident


class TestToken:
    """Tests for Token construction."""

    def test_constructors_set_kind(self):
        """Test that each constructor produces the matching kind."""
        assert Token.operator(Operator.PLUS).kind is TokenKind.OPERATOR
        assert Token.boolean(True).kind is TokenKind.BOOL_VAL
        assert Token.constant(3).kind is TokenKind.CONSTANT
        assert Token.identifier(0, 0, 0, 8).kind is TokenKind.IDENTIFIER

    def test_operator_from_code(self):
        """Test that an integer code is converted to an Operator."""
        token = Token.operator(0)

        assert token.op is Operator.PLUS

    def test_unknown_operator_code(self):
        """Test that unknown operator codes are rejected."""
        with pytest.raises(ValueError):
            Token.operator(999)

    def test_plain_constructor_coerces_operator_code(self):
        """Test that the dataclass constructor accepts codes only for known operators."""
        token = Token(TokenKind.OPERATOR, op=0)

        assert token.op is Operator.PLUS
        assert format_token(token) == "+"
        assert token == Token.operator(Operator.PLUS)
        with pytest.raises(ValueError):
            Token(TokenKind.OPERATOR, op=999)

    def test_boolean_payload(self):
        """Test that booleans store 0 or 1."""
        assert Token.boolean(True).value == 1
        assert Token.boolean(False).value == 0

    def test_constant_range(self):
        """Test that constants must fit a signed 32-bit integer."""
        Token.constant(2**31 - 1)
        Token.constant(-(2**31))
        with pytest.raises(ValueError):
            Token.constant(2**31)

    def test_payload_must_match_kind(self):
        """Test that mismatched payloads are rejected."""
        with pytest.raises(ValueError):
            Token(TokenKind.OPERATOR)
        with pytest.raises(ValueError):
            Token(TokenKind.CONSTANT, value=1, op=Operator.PLUS)
        with pytest.raises(ValueError):
            Token(TokenKind.IDENTIFIER, value=1, ident=Ident(0, 0, 0, 8))
        with pytest.raises(ValueError):
            Token(TokenKind.BOOL_VAL, value=2)

    def test_kind_must_be_token_kind(self):
        """Test that only TokenKind members are accepted as kinds."""
        with pytest.raises(ValueError):
            Token("constant", value=1)

    def test_immutable(self):
        """Test that tokens cannot be modified."""
        token = const(1)

        with pytest.raises(AttributeError):
            token.value = 2

    def test_tokens_usable_in_sets(self):
        """Test that equal tokens collapse in a set."""
        assert len({const(1), const(1), Token.boolean(True)}) == 2

    def test_builtin_hash_matches_structural_hash(self):
        """Test that hash() on models returns the formula_hash values."""
        formula = Formula(F1_TOKENS)
        pair = FormulaPair(formula, Formula.of(const(1)))

        assert hash(const(5)) == hash(hash_token(const(5)))
        assert hash(formula) == hash(hash_formula(formula))
        assert hash(pair) == hash(hash_formula_pair(pair))


class TestIdent:
    """Tests for identifier field ranges."""

    @pytest.mark.parametrize(
        "fields",
        [
            (-1, 0, 0, 8),
            (0, 0x10000, 0, 8),
            (0, 0, 0x10000, 8),
            (0, 0, 0, 256),
        ],
    )
    def test_out_of_range(self, fields):
        """Test that fields outside their unsigned width are rejected."""
        with pytest.raises(ValueError):
            Ident(*fields)

    def test_limits_accepted(self):
        """Test the largest valid values."""
        Ident(0xFFFF, 0xFFFF, 0xFFFF, 0xFF)

    def test_rejects_non_integers(self):
        """Test that bools and floats are not accepted as fields."""
        with pytest.raises(ValueError):
            Ident(True, 0, 0, 8)
        with pytest.raises(ValueError):
            Ident(0, 1.5, 0, 8)


class TestFormula:
    """Tests for Formula construction."""

    def test_list_is_frozen_to_tuple(self):
        """Test that a list argument becomes a tuple."""
        tokens = list(F1_TOKENS)
        formula = Formula(tokens)
        tokens.append(const(9))

        assert isinstance(formula.tokens, tuple)
        assert len(formula) == 3

    def test_of_and_from_tokens(self):
        """Test both convenience constructors."""
        assert Formula.of(*F1_TOKENS) == Formula.from_tokens(iter(F1_TOKENS))

    def test_iteration(self):
        """Test iterating a formula yields its tokens in order."""
        assert list(Formula(F1_TOKENS)) == F1_TOKENS

    def test_formulas_as_dict_keys(self):
        """Test that equal formulas address the same dict entry."""
        seen = {Formula(F1_TOKENS): "x + 5"}

        assert seen[Formula.of(ident(), const(5), Token.operator(Operator.PLUS))] == "x + 5"

    def test_pair_unpacking(self):
        """Test that a FormulaPair unpacks into its components."""
        a = Formula(F1_TOKENS)
        first, second = FormulaPair(a, Formula())

        assert first == a
        assert second == Formula()


class TestOperatorSymbols:
    """Tests for the operator symbol table."""

    def test_every_operator_has_a_symbol(self):
        """Test that the symbol table covers the enum."""
        assert set(OPERATOR_SYMBOLS) == set(Operator)

    def test_symbols_are_unique(self):
        """Test that no two operators share a symbol."""
        assert len(set(OPERATOR_SYMBOLS.values())) == len(OPERATOR_SYMBOLS)

    def test_symbol_property(self):
        """Test the symbol accessor."""
        assert Operator.ULTE.symbol == "<=u"
