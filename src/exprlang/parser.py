"""
Recursive descent parser for the expression language.

Builds an AST from positioned tokens using a TokenCursor. There is one
parse method per syntactic category; each uses only the cursor's
peek/get/expect/expect_token primitives.
"""

import logging
from typing import List, Tuple

from .ast import (
    Arguments, Atom, BinaryOp, BinaryOperator, Call, Expression, FieldAccess,
    Group, Identifier, IndexAccess, Literal, UnaryOp, UnaryOperator,
    VectorLiteral,
)
from .cursor import TokenCursor
from .errors import error_unclosed, error_unexpected_token
from .position import Located, Position
from .tokens import Token, TokenType, token_kind

logger = logging.getLogger(__name__)

LITERAL_TOKENS = (
    TokenType.INT,
    TokenType.FLOAT,
    TokenType.BOOLEAN,
    TokenType.STRING,
    TokenType.NONE,
)


class ExpressionParser:
    """
    Precedence-climbing parser for a single expression.

    Usage:
        parser = ExpressionParser(TokenCursor(tokens, token_kind))
        expr = parser.parse_expression()

    Binary operators are grouped into layers, lowest first:
        + -
        * / %
        ^
    Every layer is left-associative, so 2 ^ 3 ^ 2 is (2 ^ 3) ^ 2. Below
    the binary layers sit unary minus, then calls, then paths and atoms.
    """

    def __init__(self, cursor: TokenCursor[Token]):
        self.cursor = cursor

    # =========================================================================
    # Expressions
    # =========================================================================

    def parse_expression(self) -> Expression:
        return self.parse_binary(0)

    def parse_binary(self, layer: int) -> Expression:
        """Parse binary layer `layer`, falling through to unary past the last."""
        ops = BinaryOperator.layer(layer)
        if ops is None:
            return self.parse_unary(0)

        left = self.parse_binary(layer + 1)
        while True:
            op = BinaryOperator.from_token(self.cursor.peek_kind())
            if op is None or op not in ops:
                break
            self.cursor.expect()
            right = self.parse_binary(layer + 1)
            left = BinaryOp(
                position=Position.between(left.position, right.position),
                operator=op,
                left=left,
                right=right,
            )
        return left

    def parse_unary(self, layer: int) -> Expression:
        """Parse unary layer `layer`, falling through to calls past the last."""
        ops = UnaryOperator.layer(layer)
        if ops is None:
            return self.parse_call()

        op = UnaryOperator.from_token(self.cursor.peek_kind())
        if op is not None and op in ops:
            op_token = self.cursor.expect()
            operand = self.parse_unary(layer)
            return UnaryOp(
                position=Position.between(op_token.position, operand.position),
                operator=op,
                operand=operand,
            )
        return self.parse_unary(layer + 1)

    def parse_call(self) -> Expression:
        """Parse a path, and an argument list if one follows it."""
        head = self.parse_path()
        if self.cursor.peek_kind() != TokenType.LPAREN:
            return head
        arguments = self.parse_arguments()
        return Call(
            position=Position.between(head.position, arguments.position),
            head=head,
            arguments=arguments,
        )

    # =========================================================================
    # Atoms and paths
    # =========================================================================

    def parse_path(self) -> Atom:
        """Parse an atom followed by any number of .field and [index] suffixes."""
        head = self.parse_atom()
        while True:
            kind = self.cursor.peek_kind()
            if kind == TokenType.DOT:
                self.cursor.expect()
                field = self.parse_field_name()
                head = FieldAccess(
                    position=Position.between(head.position, field.position),
                    head=head,
                    field=field,
                )
            elif kind == TokenType.LBRACKET:
                open_token = self.cursor.expect()
                index = self.parse_expression()
                close = self._close(TokenType.RBRACKET, "index", open_token.position)
                head = IndexAccess(
                    position=Position.between(head.position, close.position),
                    head=head,
                    index=index,
                )
            else:
                break
        return head

    def parse_field_name(self) -> Located[str]:
        token = self.cursor.expect_peek()
        if token.value.kind != TokenType.IDENTIFIER:
            raise error_unexpected_token(str(token.value), token.position,
                                         expected=str(TokenType.IDENTIFIER))
        self.cursor.get()
        return token.map(lambda name: name.value)

    def parse_atom(self) -> Atom:
        """Parse a literal, identifier, parenthesized group or vector literal."""
        token = self.cursor.expect()
        kind = token.value.kind

        if kind in LITERAL_TOKENS:
            return Literal(position=token.position, value=token.value.value,
                           literal_type=kind)

        if kind == TokenType.IDENTIFIER:
            return Identifier(position=token.position, name=token.value.value)

        if kind == TokenType.LPAREN:
            expression = self.parse_expression()
            close = self._close(TokenType.RPAREN, "parenthesis", token.position)
            return Group(
                position=Position.between(token.position, close.position),
                expression=expression,
            )

        if kind == TokenType.LBRACKET:
            elements, end = self._parse_list(token.position, TokenType.RBRACKET, "vector")
            return VectorLiteral(
                position=Position.between(token.position, end),
                elements=elements,
            )

        raise error_unexpected_token(str(token.value), token.position)

    def parse_arguments(self) -> Arguments:
        open_token = self.cursor.expect_token(TokenType.LPAREN)
        items, end = self._parse_list(open_token.position, TokenType.RPAREN, "arguments")
        return Arguments(position=Position.between(open_token.position, end), items=items)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _close(self, closer: TokenType, what: str, opened_at: Position) -> Located[Token]:
        """Consume a closing delimiter, reporting 'unclosed' at end of input."""
        if self.cursor.is_exhausted():
            raise error_unclosed(what, opened_at)
        return self.cursor.expect_token(closer)

    def _parse_list(self, opened_at: Position, closer: TokenType,
                    what: str) -> Tuple[List[Expression], Position]:
        """
        Parse comma-separated expressions up to `closer`, the opening
        delimiter already consumed. Returns the items and the closer's
        position. A trailing comma is not allowed.
        """
        items: List[Expression] = []
        if self.cursor.peek_kind() == closer:
            return items, self.cursor.expect().position

        while self.cursor.peek() is not None:
            items.append(self.parse_expression())
            if self.cursor.peek_kind() == closer:
                return items, self.cursor.expect().position
            separator = self.cursor.get()
            if separator is not None and separator.value.kind != TokenType.COMMA:
                raise error_unexpected_token(
                    str(separator.value), separator.position,
                    expected=f"{TokenType.COMMA} or {closer}",
                )
        raise error_unclosed(what, opened_at)


def parse(tokens: List[Located[Token]]) -> Expression:
    """
    Parse a complete token sequence into one expression.

    Tokens left over after the expression are an error.

    Raises:
        ParserError: If parsing fails
    """
    cursor = TokenCursor(tokens, token_kind)
    expression = ExpressionParser(cursor).parse_expression()
    leftover = cursor.peek()
    if leftover is not None:
        raise error_unexpected_token(str(leftover.value), leftover.position)
    logger.debug("parsed %s at %s", type(expression).__name__, expression.position)
    return expression
