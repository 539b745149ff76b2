"""
exprlang - a small embeddable expression language.

This module provides:
- Scanner: Grammar-agnostic tokenizer framework
- Lexer: Tokenizes expression source text
- TokenCursor: Grammar-agnostic parser cursor
- Parser: Builds an AST by precedence climbing
- Runtime: Values, the Program state and the tree-walking interpreter

Usage:
    from exprlang import Program, evaluate

    program = Program.init()
    evaluate('set("xs", [1, 2, 3])', program)
    value = evaluate("xs[1] * 10 + 0.5", program)
    print(value)          # 20.5

    # Or run the stages separately
    from exprlang import tokenize, parse, dump_ast

    tree = parse(tokenize("1 + 2 * 3"))
    print(dump_ast(tree))
"""

from .position import (
    Position,
    Located,
)

from .tokens import (
    Token,
    TokenType,
    KEYWORDS,
    INT_MIN,
    INT_MAX,
)

from .scanner import (
    Scanner,
    TokenGrammar,
)

from .lexer import (
    ExpressionGrammar,
    Lexer,
    tokenize,
)

from .cursor import (
    TokenCursor,
)

from .parser import (
    ExpressionParser,
    parse,
)

from .ast import (
    # Base
    AstNode,
    AstVisitor,
    # Operators
    BinaryOperator,
    UnaryOperator,
    # Expressions
    Expression,
    Atom,
    Literal,
    Identifier,
    Group,
    VectorLiteral,
    FieldAccess,
    IndexAccess,
    BinaryOp,
    UnaryOp,
    Arguments,
    Call,
    # Helpers
    dump_ast,
)

from .errors import (
    Diagnostic,
    ExprError,
    LexerError,
    ParserError,
    BindingError,
    TypeMismatchError,
    InvalidValueError,
    NativeCallError,
    NativeError,
    ProgramExit,
)

from .runtime import (
    Value,
    ValueType,
    Object,
    Arena,
    Program,
    Interpreter,
    evaluate,
    evaluate_node,
)

__all__ = [
    # Positions
    'Position',
    'Located',

    # Tokens
    'Token',
    'TokenType',
    'KEYWORDS',
    'INT_MIN',
    'INT_MAX',

    # Lexer
    'Scanner',
    'TokenGrammar',
    'ExpressionGrammar',
    'Lexer',
    'tokenize',

    # Parser
    'TokenCursor',
    'ExpressionParser',
    'parse',

    # AST
    'AstNode',
    'AstVisitor',
    'BinaryOperator',
    'UnaryOperator',
    'Expression',
    'Atom',
    'Literal',
    'Identifier',
    'Group',
    'VectorLiteral',
    'FieldAccess',
    'IndexAccess',
    'BinaryOp',
    'UnaryOp',
    'Arguments',
    'Call',
    'dump_ast',

    # Errors
    'Diagnostic',
    'ExprError',
    'LexerError',
    'ParserError',
    'BindingError',
    'TypeMismatchError',
    'InvalidValueError',
    'NativeCallError',
    'NativeError',
    'ProgramExit',

    # Runtime
    'Value',
    'ValueType',
    'Object',
    'Arena',
    'Program',
    'Interpreter',
    'evaluate',
    'evaluate_node',
]
