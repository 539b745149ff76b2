"""
Expression runtime - values, program state and the tree-walking interpreter.

This module provides:
- Value: Runtime values tagged with their language type
- Program: Variable environment plus the object and native-function arenas
- Builtins: The exit, set and abs native functions
- Interpreter: Evaluates AST nodes against a Program
"""

from .values import (
    Value,
    ValueType,
    Object,
    int_val,
    float_val,
    bool_val,
    string_val,
    vector_val,
    object_val,
    function_val,
)

from .program import (
    Arena,
    Program,
    NativeFunction,
)

from .builtins import (
    BuiltinFunction,
    BUILTINS,
    register_builtins,
)

from .interpreter import (
    Interpreter,
    evaluate,
    evaluate_node,
)

__all__ = [
    # Values
    'Value',
    'ValueType',
    'Object',
    'int_val',
    'float_val',
    'bool_val',
    'string_val',
    'vector_val',
    'object_val',
    'function_val',

    # Program
    'Arena',
    'Program',
    'NativeFunction',

    # Builtins
    'BuiltinFunction',
    'BUILTINS',
    'register_builtins',

    # Interpreter
    'Interpreter',
    'evaluate',
    'evaluate_node',
]
