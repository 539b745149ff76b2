"""
Grammar-agnostic tokenizer framework.

A Scanner walks the source one character at a time, tracking line and
column, and offers the primitives a grammar needs to recognize tokens.
The concrete token set plugs in through TokenGrammar.step, which is called
once per token until the input runs out.

Usage:
    scanner = Scanner(source, MyGrammar())
    tokens = scanner.scan()
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from .errors import error_dangling_escape, error_unclosed_string
from .position import Located, Position

logger = logging.getLogger(__name__)

T = TypeVar("T")

CharPredicate = Callable[[str], bool]


class TokenGrammar(ABC, Generic[T]):
    """Extension point: recognize one token at the scanner's cursor."""

    @abstractmethod
    def step(self, scanner: "Scanner[T]") -> Optional[Located[T]]:
        """
        Scan one token.

        Called with whitespace already skipped and at least one character
        left. Returns the token, or None to end scanning early. Raises a
        LexerError on malformed input.
        """


class Scanner(Generic[T]):
    """Cursor over source text with line/column tracking."""

    def __init__(self, source: str, grammar: TokenGrammar[T]):
        self.source = source
        self.grammar = grammar
        self.index = 0          # Current offset into source
        self.line = 1           # Current line (1-indexed)
        self.column = 1         # Current column (1-indexed)

    def current(self) -> Optional[str]:
        """Character under the cursor, or None at end of input."""
        if self.index >= len(self.source):
            return None
        return self.source[self.index]

    def position(self) -> Position:
        """Single-character position of the cursor."""
        return Position.at(self.line, self.column)

    def check(self, predicate: CharPredicate) -> bool:
        """Test the current character; False at end of input."""
        ch = self.current()
        return ch is not None and predicate(ch)

    def advance(self) -> None:
        """Consume one character."""
        ch = self.current()
        if ch is None:
            return
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.index += 1

    def advance_while(self, predicate: CharPredicate) -> None:
        while self.check(predicate):
            self.advance()

    def collect_while(self, predicate: CharPredicate) -> Optional[Tuple[str, Position]]:
        """Consume the longest run matching `predicate`; None if it is empty."""
        if not self.check(predicate):
            return None
        start = self.index
        position = self.position()
        while self.check(predicate):
            position.extend(self.position())
            self.advance()
        return self.source[start:self.index], position

    def delimited(self, start: str, end: str,
                  escape: Optional[str] = None) -> Optional[Tuple[str, Position]]:
        """
        Consume a quoted literal such as "abc".

        Returns None if the cursor is not on `start`. An escape character
        takes the next character verbatim, whatever it is. Raises LexerError
        if the input ends before `end` or right after an escape.
        """
        if self.current() != start:
            return None
        position = self.position()
        self.advance()
        chars = []
        while True:
            ch = self.current()
            if ch is None:
                raise error_unclosed_string(position)
            position.extend(self.position())
            self.advance()
            if ch == end:
                break
            if escape is not None and ch == escape:
                escaped = self.current()
                if escaped is None:
                    raise error_dangling_escape(self.position())
                position.extend(self.position())
                self.advance()
                chars.append(escaped)
            else:
                chars.append(ch)
        return "".join(chars), position

    def skip_whitespace(self) -> None:
        self.advance_while(str.isspace)

    def step(self) -> Optional[Located[T]]:
        """Skip whitespace and scan the next token; None at end of input."""
        self.skip_whitespace()
        if self.current() is None:
            return None
        return self.grammar.step(self)

    def scan(self) -> List[Located[T]]:
        """Scan the whole source. The first error propagates."""
        tokens = []
        while True:
            token = self.step()
            if token is None:
                break
            tokens.append(token)
        logger.debug("scanned %d token(s) from %d character(s)",
                     len(tokens), len(self.source))
        return tokens
