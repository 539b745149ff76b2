"""
Abstract Syntax Tree (AST) node definitions.

Two families of nodes:
- Atom: literals, identifier references, parenthesized expressions, vector
  literals, and paths built from field and index accesses
- Expression: any atom, plus binary operations, unary operations and calls

A Call's head is an Atom, so only paths can be called; `f()()` is not
expressible. Every node owns its children exclusively.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Tuple, Union
from abc import ABC

from .position import Located, Position
from .tokens import TokenType


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class AstNode(ABC):
    """Base class for all AST nodes."""
    position: Position  # Source location for error reporting

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)


class AstVisitor(ABC):
    """Base class for AST visitors."""

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


# =============================================================================
# Operators
# =============================================================================

class BinaryOperator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    MOD = "%"

    @classmethod
    def from_token(cls, kind: Optional[TokenType]) -> Optional["BinaryOperator"]:
        return _BINARY_TOKENS.get(kind)

    @staticmethod
    def layer(index: int) -> Optional[FrozenSet["BinaryOperator"]]:
        """Operators of precedence layer `index`, or None past the last."""
        if 0 <= index < len(BINARY_LAYERS):
            return BINARY_LAYERS[index]
        return None


class UnaryOperator(Enum):
    NEG = "-"
    NOT = "not"

    @classmethod
    def from_token(cls, kind: Optional[TokenType]) -> Optional["UnaryOperator"]:
        return _UNARY_TOKENS.get(kind)

    @staticmethod
    def layer(index: int) -> Optional[FrozenSet["UnaryOperator"]]:
        if 0 <= index < len(UNARY_LAYERS):
            return UNARY_LAYERS[index]
        return None


_BINARY_TOKENS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
    TokenType.CARET: BinaryOperator.POW,
    TokenType.PERCENT: BinaryOperator.MOD,
}

# NOT has no token: `not` lexes as an identifier
_UNARY_TOKENS = {
    TokenType.MINUS: UnaryOperator.NEG,
}

# Binding precedence layers, lowest first
BINARY_LAYERS: Tuple[FrozenSet[BinaryOperator], ...] = (
    frozenset({BinaryOperator.ADD, BinaryOperator.SUB}),
    frozenset({BinaryOperator.MUL, BinaryOperator.DIV, BinaryOperator.MOD}),
    frozenset({BinaryOperator.POW}),
)

UNARY_LAYERS: Tuple[FrozenSet[UnaryOperator], ...] = (
    frozenset({UnaryOperator.NEG}),
)


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class Expression(AstNode):
    """Base class for all expressions."""
    pass


@dataclass
class Atom(Expression):
    """Base class for the tightest-binding expressions."""
    pass


@dataclass
class Literal(Atom):
    """A literal value (int, float, boolean, string, none)."""
    value: Union[int, float, bool, str, None]
    literal_type: TokenType  # INT, FLOAT, BOOLEAN, STRING, NONE


@dataclass
class Identifier(Atom):
    """A variable reference."""
    name: str


@dataclass
class Group(Atom):
    """A parenthesized expression."""
    expression: Expression


@dataclass
class VectorLiteral(Atom):
    """A vector literal (e.g., [1, 2, 3])."""
    elements: List[Expression]


@dataclass
class FieldAccess(Atom):
    """Field access on an object (e.g., point.x)."""
    head: Atom
    field: Located[str]


@dataclass
class IndexAccess(Atom):
    """Index access on a vector (e.g., items[0])."""
    head: Atom
    index: Expression


@dataclass
class BinaryOp(Expression):
    """A binary operation (e.g., a + b)."""
    operator: BinaryOperator
    left: Expression
    right: Expression


@dataclass
class UnaryOp(Expression):
    """A unary operation (e.g., -n)."""
    operator: UnaryOperator
    operand: Expression


@dataclass
class Arguments(AstNode):
    """A parenthesized argument list, positioned from '(' to ')'."""
    items: List[Expression]


@dataclass
class Call(Expression):
    """A native function call (e.g., abs(x))."""
    head: Atom
    arguments: Arguments


# =============================================================================
# Visitor Helpers
# =============================================================================

class DumpVisitor(AstVisitor):
    """Debug visitor that renders the AST structure as indented text."""

    def __init__(self, indent: int = 0, lines: Optional[List[str]] = None):
        self.indent = indent
        self.lines = lines if lines is not None else []

    def _emit(self, text: str) -> None:
        self.lines.append("  " * self.indent + text)

    def _child(self) -> "DumpVisitor":
        return DumpVisitor(self.indent + 2, self.lines)

    def generic_visit(self, node: AstNode) -> None:
        self._emit(f"{node.__class__.__name__} @ {node.position}")
        for name, value in node.__dict__.items():
            if name == "position":
                continue
            if isinstance(value, AstNode):
                self._emit(f"  {name}:")
                value.accept(self._child())
            elif isinstance(value, list):
                self._emit(f"  {name}: [")
                for item in value:
                    item.accept(self._child())
                self._emit("  ]")
            elif isinstance(value, Enum):
                self._emit(f"  {name}: {value.name}")
            else:
                self._emit(f"  {name}: {value!r}")


def dump_ast(node: AstNode) -> str:
    """Render an AST node for debugging."""
    visitor = DumpVisitor()
    node.accept(visitor)
    return "\n".join(visitor.lines)
