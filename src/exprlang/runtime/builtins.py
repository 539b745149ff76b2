"""
Built-in native functions bound into every new Program.

Registration order is fixed (exit, set, abs), so the built-ins always get
function handles 0, 1 and 2.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from ..errors import NativeError, ProgramExit
from ..tokens import INT_MIN
from .values import Value, ValueType, float_val, int_val

if TYPE_CHECKING:
    from .program import NativeFunction, Program

logger = logging.getLogger(__name__)


@dataclass
class BuiltinFunction:
    """A built-in function and the name it is bound to."""
    name: str
    implementation: "NativeFunction"
    doc: str = ""


def _exit(args: List[Value], program: "Program") -> Optional[Value]:
    """End the current top-level evaluation."""
    logger.debug("exit requested")
    raise ProgramExit()


def _set(args: List[Value], program: "Program") -> Optional[Value]:
    """set(name, value): bind `value` to the variable called `name`."""
    if len(args) < 2:
        return None
    name, value = args[0], args[1]
    if name.type != ValueType.STRING:
        raise NativeError(f"expected string for argument #1, got {name.type}")
    program.set(name.data, value)
    logger.debug("set %r = %r", name.data, value)
    return None


def _abs(args: List[Value], program: "Program") -> Optional[Value]:
    """abs(x): absolute value of an int or float; other values pass through."""
    if not args:
        return None
    value = args[0]
    if value.type == ValueType.INT:
        if value.data == INT_MIN:
            raise NativeError("attempt to negate with overflow")
        return int_val(abs(value.data))
    if value.type == ValueType.FLOAT:
        return float_val(abs(value.data))
    return value


BUILTINS: List[BuiltinFunction] = [
    BuiltinFunction("exit", _exit, "end the current evaluation"),
    BuiltinFunction("set", _set, "set(name, value): bind a variable"),
    BuiltinFunction("abs", _abs, "abs(x): absolute value"),
]


def register_builtins(program: "Program") -> None:
    """Bind every built-in function into `program`, in order."""
    for builtin in BUILTINS:
        program.new_function(builtin.name, builtin.implementation)
