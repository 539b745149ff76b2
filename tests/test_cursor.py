"""
Tests for the grammar-agnostic token cursor.
"""

import pytest
from exprlang import TokenCursor, Located, Position, ParserError, TokenType, tokenize
from exprlang.tokens import token_kind


def make_cursor(*words):
    tokens = [Located(w, Position.at(1, i + 1)) for i, w in enumerate(words)]
    return TokenCursor(tokens)


class TestTokenCursor:
    """Test cursor primitives over plain string tokens."""

    def test_peek_does_not_consume(self):
        cursor = make_cursor("a", "b")
        assert cursor.peek().value == "a"
        assert cursor.peek().value == "a"

    def test_get_consumes(self):
        cursor = make_cursor("a", "b")
        assert cursor.get().value == "a"
        assert cursor.get().value == "b"
        assert cursor.get() is None
        assert cursor.is_exhausted()

    def test_peek_at_end(self):
        cursor = make_cursor()
        assert cursor.peek() is None
        assert cursor.peek_kind() is None

    def test_expect_at_end(self):
        """expect reports end of input with the empty position."""
        cursor = make_cursor()
        with pytest.raises(ParserError) as exc_info:
            cursor.expect()
        assert exc_info.value.message == "unexpected end of input"
        assert exc_info.value.position.is_empty

    def test_expect_peek(self):
        cursor = make_cursor("a")
        assert cursor.expect_peek().value == "a"
        cursor.get()
        with pytest.raises(ParserError):
            cursor.expect_peek()

    def test_expect_token_match(self):
        cursor = make_cursor("a", "b")
        assert cursor.expect_token("a").position == Position.at(1, 1)
        assert cursor.expect_token("b").value == "b"

    def test_expect_token_mismatch(self):
        """A mismatch names both tokens and points at the one found."""
        cursor = make_cursor("a", "b")
        with pytest.raises(ParserError) as exc_info:
            cursor.expect_token("b")
        assert exc_info.value.message == "expected token b, got token a"
        assert exc_info.value.position == Position.at(1, 1)


class TestTokenCursorKinds:
    """Test the kind_of hook with lexer tokens."""

    def test_kind_comparison(self):
        """expect_token compares kinds, not values."""
        cursor = TokenCursor(tokenize("42 )"), token_kind)
        assert cursor.peek_kind() == TokenType.INT
        assert cursor.expect_token(TokenType.INT).value.value == 42
        assert cursor.expect_token(TokenType.RPAREN).position == Position.at(1, 4)

    def test_kind_mismatch_message(self):
        cursor = TokenCursor(tokenize("x"), token_kind)
        with pytest.raises(ParserError) as exc_info:
            cursor.expect_token(TokenType.LPAREN)
        assert exc_info.value.message == "expected token '(', got token IDENTIFIER('x')"
