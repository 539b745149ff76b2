"""
Token grammar for the expression language.

Recognizes:
- Single-character operators and delimiters: ( ) [ ] { } + - * / ^ % . ,
- String literals in double or single quotes, with backslash escapes
- Integer literals (64-bit signed) and float literals (digits '.' digits)
- Identifiers, and the reserved words true, false and none
"""

from typing import List, Optional

from .errors import error_bad_character, error_invalid_number
from .position import Located
from .scanner import Scanner, TokenGrammar
from .tokens import INT_MAX, KEYWORDS, PUNCTUATION, Token, TokenType

QUOTES = ('"', "'")
ESCAPE = "\\"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_word(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class ExpressionGrammar(TokenGrammar[Token]):
    """Classifies the character under the cursor and scans one token."""

    def step(self, scanner: Scanner[Token]) -> Optional[Located[Token]]:
        ch = scanner.current()
        if ch is None:
            return None

        if ch in PUNCTUATION:
            position = scanner.position()
            scanner.advance()
            return Located(Token(PUNCTUATION[ch], None, ch), position)

        if ch in QUOTES:
            return self._scan_string(scanner, ch)

        if _is_digit(ch):
            return self._scan_number(scanner)

        if _is_word(ch):
            return self._scan_word(scanner)

        raise error_bad_character(ch, scanner.position())

    def _scan_string(self, scanner: Scanner[Token], quote: str) -> Located[Token]:
        start = scanner.index
        text, position = scanner.delimited(quote, quote, ESCAPE)
        lexeme = scanner.source[start:scanner.index]
        return Located(Token(TokenType.STRING, text, lexeme), position)

    def _scan_number(self, scanner: Scanner[Token]) -> Located[Token]:
        number, position = scanner.collect_while(_is_digit)

        if scanner.current() == ".":
            # Digits then a dot is always a float; the fraction may be empty
            number += "."
            position.extend(scanner.position())
            scanner.advance()
            fraction = scanner.collect_while(_is_digit)
            if fraction is not None:
                number += fraction[0]
                position.extend(fraction[1])
            return Located(Token(TokenType.FLOAT, float(number), number), position)

        # Compare digit counts first so huge literals never reach int()
        significant = number.lstrip("0") or "0"
        if len(significant) > len(str(INT_MAX)) or int(significant) > INT_MAX:
            raise error_invalid_number("number too large to fit in target type", position)
        return Located(Token(TokenType.INT, int(significant), number), position)

    def _scan_word(self, scanner: Scanner[Token]) -> Located[Token]:
        word, position = scanner.collect_while(_is_word)
        if word in KEYWORDS:
            return Located(KEYWORDS[word], position)
        return Located(Token(TokenType.IDENTIFIER, word, word), position)


class Lexer:
    """
    Tokenizer for expression source text.

    Usage:
        tokens = Lexer(source).tokenize()
    """

    def __init__(self, source: str):
        self.source = source
        self.scanner = Scanner(source, ExpressionGrammar())

    def tokenize(self) -> List[Located[Token]]:
        """Tokenize the entire source, returning positioned tokens."""
        return self.scanner.scan()


def tokenize(source: str) -> List[Located[Token]]:
    """
    Convenience function to tokenize source text.

    Raises:
        LexerError: If tokenization fails
    """
    return Lexer(source).tokenize()
