"""
Error taxonomy for the expression language.

Every failure is a message plus the source position responsible for it.
Errors are raised where they are detected and propagate unchanged up to the
host; the only rewrite is a native function's message gaining the position
of the call that invoked it.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E2xx: Binding errors (unknown variable, field, function)
- E3xx: Type errors
- E4xx: Value errors
- E5xx: Native function errors
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .position import Position


@dataclass
class Diagnostic:
    """A single positioned error message."""
    code: str                       # E001, E101, etc.
    message: str                    # Human-readable message
    position: Position
    source_line: Optional[str] = None   # The line of source the error is on
    hints: List[str] = field(default_factory=list)

    def excerpt(self) -> List[str]:
        """The source line with the error span underlined, if known."""
        if self.source_line is None or self.position.is_empty:
            return []
        line_num = str(self.position.lines.start)
        col = self.position.columns.start
        if len(self.position.lines) <= 1:
            end_col = self.position.columns.stop
        else:
            end_col = len(self.source_line) + 1
        underline_len = max(1, end_col - col)
        return [
            "  |",
            f"{line_num:>3} | {self.source_line}",
            f"    | {' ' * (col - 1)}{'^' * underline_len}",
        ]

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = [f"{self.position}: error[{self.code}]: {self.message}"]
        if show_source:
            parts.extend(self.excerpt())
        for hint in self.hints:
            parts.append(f"    = hint: {hint}")
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to a JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "range": {
                "lines": [self.position.lines.start, self.position.lines.stop],
                "columns": [self.position.columns.start, self.position.columns.stop],
            },
            "hints": self.hints,
        }


class ExprError(Exception):
    """Base exception for positioned expression-language errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def position(self) -> Position:
        return self.diagnostic.position

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def with_source(self, source: str) -> "ExprError":
        """Attach the offending source line so format() can underline it."""
        lines = source.splitlines()
        line_num = self.position.lines.start
        if 1 <= line_num <= len(lines):
            self.diagnostic.source_line = lines[line_num - 1]
        return self

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexerError(ExprError):
    """Error during lexical analysis (E0xx)."""
    pass


class ParserError(ExprError):
    """Error during parsing (E1xx)."""
    pass


class BindingError(ExprError):
    """A name that does not resolve (E2xx)."""
    pass


class TypeMismatchError(ExprError):
    """An operation applied to an unsupported type (E3xx)."""
    pass


class InvalidValueError(ExprError):
    """A value that is missing or out of the allowed range (E4xx)."""
    pass


class NativeCallError(ExprError):
    """A native function reported a failure (E5xx)."""
    pass


class NativeError(Exception):
    """
    Raised by native functions to report a failure.

    Carries only a message; the interpreter attaches the position of the
    call site and re-raises it as a NativeCallError.
    """
    pass


class ProgramExit(Exception):
    """
    Raised by the `exit` native function to end the current evaluation.

    This is a control-flow signal for the host, not an ExprError: program
    state is left exactly as it was when `exit` was called.
    """

    def __init__(self, position: Optional[Position] = None):
        self.position = position or Position()
        super().__init__("exit")


# --- Lexer error codes ---

def error_bad_character(char: str, position: Position) -> LexerError:
    """E001: Character that starts no token."""
    return LexerError(Diagnostic("E001", f"bad character {char!r}", position))


def error_unclosed_string(position: Position) -> LexerError:
    """E002: Input ended before the closing quote."""
    return LexerError(Diagnostic(
        "E002", "unclosed string", position,
        hints=["string literals must be closed with matching quotes"],
    ))


def error_dangling_escape(position: Position) -> LexerError:
    """E003: Escape character at end of input."""
    return LexerError(Diagnostic("E003", "expected character, not end of input", position))


def error_invalid_number(message: str, position: Position) -> LexerError:
    """E004: Numeric literal that cannot be represented."""
    return LexerError(Diagnostic("E004", message, position))


# --- Parser error codes ---

def error_unexpected_token(found: str, position: Position,
                           expected: Optional[str] = None) -> ParserError:
    """E101: Unexpected token."""
    if expected is None:
        message = f"unexpected token: {found}"
    else:
        message = f"expected token {expected}, got token {found}"
    return ParserError(Diagnostic("E101", message, position))


def error_unexpected_eof() -> ParserError:
    """E102: Ran out of tokens."""
    return ParserError(Diagnostic("E102", "unexpected end of input", Position()))


def error_unclosed(what: str, position: Position) -> ParserError:
    """E103: Grouping still open when the input ran out."""
    return ParserError(Diagnostic("E103", f"unclosed {what}", position))


# --- Binding error codes ---

def error_undefined_variable(name: str, position: Position) -> BindingError:
    """E201: Undefined variable."""
    return BindingError(Diagnostic("E201", f"no variable with the name {name!r} found", position))


def error_unknown_field(name: str, position: Position) -> BindingError:
    """E202: Object has no such field."""
    return BindingError(Diagnostic("E202", f"no field named {name!r}", position))


def error_unknown_handle(kind: str, handle: int, position: Position) -> BindingError:
    """E203: Handle that resolves to nothing in its arena."""
    return BindingError(Diagnostic("E203", f"no {kind} at handle {handle}", position))


# --- Type error codes ---

def error_binary_operands(op: str, left: str, right: str,
                          position: Position) -> TypeMismatchError:
    """E301: Binary operator on unsupported operand types."""
    return TypeMismatchError(Diagnostic(
        "E301", f"cannot perform binary operator {op!r} on {left} with {right}", position,
    ))


def error_unary_operand(op: str, operand: str, position: Position) -> TypeMismatchError:
    """E302: Unary operator on an unsupported operand type."""
    return TypeMismatchError(Diagnostic(
        "E302", f"cannot perform unary operator {op!r} on {operand}", position,
    ))


def error_field_of(type_name: str, position: Position) -> TypeMismatchError:
    """E303: Field access on a non-object."""
    return TypeMismatchError(Diagnostic("E303", f"cannot get field of {type_name}", position))


def error_cannot_index(type_name: str, position: Position) -> TypeMismatchError:
    """E304: Indexing a value that is not a vector."""
    return TypeMismatchError(Diagnostic("E304", f"cannot index {type_name}", position))


def error_cannot_index_with(type_name: str, position: Position) -> TypeMismatchError:
    """E304: Indexing with something other than an int."""
    return TypeMismatchError(Diagnostic("E304", f"cannot index with {type_name}", position))


def error_cannot_call(type_name: str, position: Position) -> TypeMismatchError:
    """E305: Calling a value that is not a function."""
    return TypeMismatchError(Diagnostic("E305", f"cannot call {type_name}", position))


# --- Value error codes ---

def error_no_value(position: Position) -> InvalidValueError:
    """E401: An expression produced no value where one is required."""
    return InvalidValueError(Diagnostic("E401", "return value is none", position))


def error_invalid_index(index: int, position: Position) -> InvalidValueError:
    """E402: Negative vector index."""
    return InvalidValueError(Diagnostic("E402", f"invalid index: {index}", position))


def error_arithmetic(message: str, position: Position) -> InvalidValueError:
    """E403: Integer overflow or remainder by zero."""
    return InvalidValueError(Diagnostic("E403", message, position))


# --- Native function error codes ---

def error_native_call(message: str, position: Position) -> NativeCallError:
    """E501: Failure reported by a native function."""
    return NativeCallError(Diagnostic("E501", message, position))
