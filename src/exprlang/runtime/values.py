"""
Runtime values for the interpreter.

A Value pairs the Python data with its language type. Scalars are
immutable Python objects; vectors hold a list of Values and are copied
whenever they leave a variable, so evaluated vectors are never aliased.
Objects and functions are handles into the Program's arenas.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from ..tokens import INT_MAX, INT_MIN


class ValueType(Enum):
    """Runtime type tags, valued by their display names."""
    INT = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"
    VECTOR = "vector"
    OBJECT = "object"
    FUNCTION = "function"

    def __str__(self) -> str:
        return self.value


@dataclass
class Value:
    """
    A runtime value with its language type.

    The `data` field holds the Python object: int, float, bool, str,
    a list of Values for vectors, or an arena handle for objects and
    functions.
    """
    data: Any
    type: ValueType

    def __repr__(self) -> str:
        return f"Value({self.data!r}, {self.type})"

    def __str__(self) -> str:
        """Display form, as the REPL prints it."""
        if self.type == ValueType.FLOAT:
            return _display_float(self.data)
        if self.type == ValueType.BOOLEAN:
            return "true" if self.data else "false"
        if self.type == ValueType.STRING:
            return self.data
        if self.type == ValueType.VECTOR:
            return "[" + ", ".join(item.literal() for item in self.data) + "]"
        if self.type in (ValueType.OBJECT, ValueType.FUNCTION):
            return f"{self.type}:{self.data:08x}"
        return str(self.data)

    def literal(self) -> str:
        """Source form: lexing and evaluating it yields an equal value."""
        if self.type == ValueType.INT and self.data == INT_MIN:
            # The lexer only reads magnitudes up to INT_MAX
            return f"({INT_MIN + 1} - 1)"
        if self.type == ValueType.FLOAT:
            text = _literal_float(self.data)
            return _FLOAT_EXPRESSIONS.get(text, text)
        if self.type == ValueType.STRING:
            escaped = self.data.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(self)

    def copy(self) -> "Value":
        """Clone, recursively for vectors."""
        if self.type == ValueType.VECTOR:
            return Value([item.copy() for item in self.data], ValueType.VECTOR)
        return Value(self.data, self.type)

    @property
    def is_numeric(self) -> bool:
        return self.type in (ValueType.INT, ValueType.FLOAT)


# Non-finite floats have no literal syntax; these evaluate to them
_FLOAT_EXPRESSIONS = {
    "inf": "(1 / 0)",
    "-inf": "(-1 / 0)",
    "nan": "(0 / 0)",
}


def _literal_float(x: float) -> str:
    if math.isnan(x):
        return "nan"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    text = repr(x)
    if "e" in text or "E" in text:
        # Positional notation: the lexer has no exponent syntax
        text = format(Decimal(text), "f")
        if "." not in text:
            text += ".0"
    return text


def _display_float(x: float) -> str:
    text = _literal_float(x)
    if text.endswith(".0"):
        return text[:-2]
    return text


# Convenience constructors

def int_val(n: int) -> Value:
    """Create an integer value; must fit in 64 signed bits."""
    n = int(n)
    if not INT_MIN <= n <= INT_MAX:
        raise OverflowError(f"{n} does not fit in a 64-bit integer")
    return Value(n, ValueType.INT)


def float_val(x: float) -> Value:
    """Create a float value."""
    return Value(float(x), ValueType.FLOAT)


def bool_val(b: bool) -> Value:
    """Create a boolean value."""
    return Value(bool(b), ValueType.BOOLEAN)


def string_val(s: str) -> Value:
    """Create a string value."""
    return Value(str(s), ValueType.STRING)


def vector_val(items: List[Value]) -> Value:
    """Create a vector value from a list of Values."""
    return Value(list(items), ValueType.VECTOR)


def object_val(handle: int) -> Value:
    """Create a reference to an object in the Program's object arena."""
    return Value(handle, ValueType.OBJECT)


def function_val(handle: int) -> Value:
    """Create a reference to a native function in the Program's function arena."""
    return Value(handle, ValueType.FUNCTION)


@dataclass
class Object:
    """
    A heap object: named fields plus a metadata map of the same shape.

    The metadata map is carried along but nothing reads it yet.
    """
    fields: Dict[str, Value] = field(default_factory=dict)
    meta: Dict[str, Value] = field(default_factory=dict)

    def insert(self, name: str, value: Value) -> "Object":
        """Set a field and return the object, for building in one expression."""
        self.fields[name] = value
        return self

    def set(self, name: str, value: Value) -> Optional[Value]:
        """Set a field, returning its previous value if there was one."""
        previous = self.fields.get(name)
        self.fields[name] = value
        return previous

    def get(self, name: str) -> Optional[Value]:
        return self.fields.get(name)
