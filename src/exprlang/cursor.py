"""
Grammar-agnostic token cursor for recursive descent parsers.

The cursor only moves forward. Each syntactic category of a grammar is a
parse function built on peek/get/expect/expect_token.
"""

from typing import Any, Callable, Generic, List, Optional, TypeVar

from .errors import error_unexpected_eof, error_unexpected_token
from .position import Located

T = TypeVar("T")


def _identity(token: Any) -> Any:
    return token


class TokenCursor(Generic[T]):
    """
    One-directional, consuming view over a token sequence.

    `kind_of` maps a token to whatever `expect_token` compares against;
    by default the token itself.
    """

    def __init__(self, tokens: List[Located[T]],
                 kind_of: Callable[[T], Any] = _identity):
        self.tokens = tokens
        self.pos = 0
        self.kind_of = kind_of

    def peek(self) -> Optional[Located[T]]:
        """Next token without consuming it."""
        if self.pos >= len(self.tokens):
            return None
        return self.tokens[self.pos]

    def peek_kind(self) -> Any:
        """Kind of the next token, or None at end of input."""
        token = self.peek()
        if token is None:
            return None
        return self.kind_of(token.value)

    def get(self) -> Optional[Located[T]]:
        """Consume and return the next token, or None at end of input."""
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def expect(self) -> Located[T]:
        """Consume the next token; running out of input is an error."""
        token = self.get()
        if token is None:
            raise error_unexpected_eof()
        return token

    def expect_peek(self) -> Located[T]:
        """Look at the next token; running out of input is an error."""
        token = self.peek()
        if token is None:
            raise error_unexpected_eof()
        return token

    def expect_token(self, kind: Any) -> Located[T]:
        """Consume the next token and check that it is of `kind`."""
        token = self.expect()
        if self.kind_of(token.value) != kind:
            raise error_unexpected_token(str(token.value), token.position, expected=str(kind))
        return token

    def is_exhausted(self) -> bool:
        return self.pos >= len(self.tokens)
