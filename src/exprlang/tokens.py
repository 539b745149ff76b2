"""
Token types for the expression-language lexer.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any

# Range of INT literals and of runtime integers
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


class TokenType(Enum):
    """All token types recognized by the lexer."""

    # --- Literals ---
    INT = "integer literal"         # 42
    FLOAT = "float literal"         # 3.14, 1.
    BOOLEAN = "boolean literal"     # true, false
    NONE = "'none'"                 # none
    STRING = "string literal"       # "hello", 'hello'

    # --- Identifiers ---
    IDENTIFIER = "identifier"

    # --- Delimiters ---
    LPAREN = "'('"
    RPAREN = "')'"
    LBRACKET = "'['"
    RBRACKET = "']'"
    LBRACE = "'{'"                  # reserved for object literals
    RBRACE = "'}'"

    # --- Arithmetic operators ---
    PLUS = "'+'"
    MINUS = "'-'"
    STAR = "'*'"
    SLASH = "'/'"
    CARET = "'^'"                   # power
    PERCENT = "'%'"

    # --- Punctuation ---
    DOT = "'.'"                     # field access
    COMMA = "','"                   # separator

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A single token from the lexer. Positions are carried by Located."""
    kind: TokenType
    value: Any = None               # int, float, bool, str for literals and names
    lexeme: str = field(default="", compare=False)   # original source text

    def __str__(self) -> str:
        if self.kind in (TokenType.INT, TokenType.FLOAT, TokenType.STRING,
                         TokenType.IDENTIFIER):
            return f"{self.kind.name}({self.value!r})"
        if self.kind == TokenType.BOOLEAN:
            return "true" if self.value else "false"
        return str(self.kind)


# Reserved words mapped to the token they produce
KEYWORDS: dict[str, Token] = {
    "true": Token(TokenType.BOOLEAN, True, "true"),
    "false": Token(TokenType.BOOLEAN, False, "false"),
    "none": Token(TokenType.NONE, None, "none"),
}

# Single-character punctuation and operators
PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "%": TokenType.PERCENT,
    ".": TokenType.DOT,
    ",": TokenType.COMMA,
}


def token_kind(token: Token) -> TokenType:
    """Kind of a token, used by the parser cursor to compare tokens."""
    return token.kind
