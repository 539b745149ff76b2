"""
Tree-walking interpreter.

Evaluates AST nodes against a Program. Every evaluation yields a Value,
None for expressions that produce no value (such as a `set(...)` call or
the `none` literal), or raises a positioned ExprError.
"""

import logging
import math
from typing import Optional

from ..ast import (
    AstNode, BinaryOp, BinaryOperator, Call, Expression, FieldAccess,
    Group, Identifier, IndexAccess, Literal, UnaryOp, UnaryOperator,
    VectorLiteral,
)
from ..errors import (
    NativeError,
    error_arithmetic, error_binary_operands, error_cannot_call,
    error_cannot_index, error_cannot_index_with, error_field_of,
    error_invalid_index, error_native_call, error_no_value,
    error_unary_operand, error_undefined_variable, error_unknown_field,
    error_unknown_handle,
)
from ..lexer import tokenize
from ..parser import parse
from ..tokens import INT_MAX, INT_MIN, TokenType
from .program import Program
from .values import (
    Value, ValueType, bool_val, float_val, int_val, string_val, vector_val,
)

logger = logging.getLogger(__name__)

# Verb used in integer overflow messages
_OVERFLOW_VERBS = {
    BinaryOperator.ADD: "add",
    BinaryOperator.SUB: "subtract",
    BinaryOperator.MUL: "multiply",
    BinaryOperator.MOD: "calculate the remainder",
}


class Interpreter:
    """
    Tree-walking evaluator for expression ASTs.

    Evaluates nodes by dispatching to type-specific methods. The Program
    is passed to every call; the interpreter itself holds no state.
    """

    def evaluate(self, node: Expression, program: Program) -> Optional[Value]:
        """Evaluate an expression to a Value, or None if it produces none."""
        if isinstance(node, Literal):
            return self._eval_literal(node)
        elif isinstance(node, Identifier):
            return self._eval_identifier(node, program)
        elif isinstance(node, Group):
            return self.evaluate(node.expression, program)
        elif isinstance(node, VectorLiteral):
            return self._eval_vector(node, program)
        elif isinstance(node, FieldAccess):
            return self._eval_field_access(node, program)
        elif isinstance(node, IndexAccess):
            return self._eval_index_access(node, program)
        elif isinstance(node, BinaryOp):
            return self._eval_binary_op(node, program)
        elif isinstance(node, UnaryOp):
            return self._eval_unary_op(node, program)
        elif isinstance(node, Call):
            return self._eval_call(node, program)
        else:
            raise RuntimeError(f"Unknown expression type: {type(node).__name__}")

    def _require(self, node: Expression, program: Program) -> Value:
        """Evaluate a node that must produce a value."""
        value = self.evaluate(node, program)
        if value is None:
            raise error_no_value(node.position)
        return value

    # --- Atoms ---

    def _eval_literal(self, lit: Literal) -> Optional[Value]:
        if lit.literal_type == TokenType.INT:
            return int_val(lit.value)
        elif lit.literal_type == TokenType.FLOAT:
            return float_val(lit.value)
        elif lit.literal_type == TokenType.BOOLEAN:
            return bool_val(lit.value)
        elif lit.literal_type == TokenType.STRING:
            return string_val(lit.value)
        elif lit.literal_type == TokenType.NONE:
            return None
        else:
            raise RuntimeError(f"Unknown literal type: {lit.literal_type}")

    def _eval_identifier(self, ident: Identifier, program: Program) -> Value:
        value = program.get(ident.name)
        if value is None:
            raise error_undefined_variable(ident.name, ident.position)
        return value.copy()

    def _eval_vector(self, vec: VectorLiteral, program: Program) -> Value:
        return vector_val([self._require(element, program) for element in vec.elements])

    def _eval_field_access(self, access: FieldAccess, program: Program) -> Value:
        head = self._require(access.head, program)
        if head.type != ValueType.OBJECT:
            raise error_field_of(str(head.type), access.position)

        obj = program.objects.get(head.data)
        if obj is None:
            raise error_unknown_handle("object", head.data, access.head.position)

        value = obj.get(access.field.value)
        if value is None:
            raise error_unknown_field(access.field.value, access.field.position)
        return value.copy()

    def _eval_index_access(self, access: IndexAccess, program: Program) -> Optional[Value]:
        head = self._require(access.head, program)
        index = self._require(access.index, program)

        if head.type != ValueType.VECTOR:
            raise error_cannot_index(str(head.type), access.position)
        if index.type != ValueType.INT:
            raise error_cannot_index_with(str(index.type), access.position)
        if index.data < 0:
            raise error_invalid_index(index.data, access.index.position)

        # Past the end is no value rather than an error
        if index.data >= len(head.data):
            return None
        return head.data[index.data].copy()

    # --- Operators ---

    def _eval_binary_op(self, op: BinaryOp, program: Program) -> Value:
        left = self._require(op.left, program)
        right = self._require(op.right, program)

        if not (left.is_numeric and right.is_numeric):
            raise error_binary_operands(op.operator.value, str(left.type),
                                        str(right.type), op.position)

        if op.operator == BinaryOperator.DIV:
            return float_val(_float_div(float(left.data), float(right.data)))
        if op.operator == BinaryOperator.POW:
            return float_val(_float_pow(float(left.data), float(right.data)))

        if left.type == ValueType.INT and right.type == ValueType.INT:
            return self._int_arithmetic(op, left.data, right.data)

        a, b = float(left.data), float(right.data)
        if op.operator == BinaryOperator.ADD:
            return float_val(a + b)
        elif op.operator == BinaryOperator.SUB:
            return float_val(a - b)
        elif op.operator == BinaryOperator.MUL:
            return float_val(a * b)
        elif op.operator == BinaryOperator.MOD:
            return float_val(_float_mod(a, b))
        else:
            raise RuntimeError(f"Unknown binary operator: {op.operator}")

    def _int_arithmetic(self, op: BinaryOp, a: int, b: int) -> Value:
        if op.operator == BinaryOperator.ADD:
            result = a + b
        elif op.operator == BinaryOperator.SUB:
            result = a - b
        elif op.operator == BinaryOperator.MUL:
            result = a * b
        elif op.operator == BinaryOperator.MOD:
            if b == 0:
                raise error_arithmetic(
                    "attempt to calculate the remainder with a divisor of zero",
                    op.right.position,
                )
            # Truncated remainder: the result takes the dividend's sign
            result = abs(a) % abs(b)
            if a < 0:
                result = -result
        else:
            raise RuntimeError(f"Unknown binary operator: {op.operator}")

        if not INT_MIN <= result <= INT_MAX:
            raise error_arithmetic(
                f"attempt to {_OVERFLOW_VERBS[op.operator]} with overflow", op.position
            )
        return int_val(result)

    def _eval_unary_op(self, op: UnaryOp, program: Program) -> Value:
        operand = self._require(op.operand, program)

        if op.operator == UnaryOperator.NEG:
            if operand.type == ValueType.INT:
                if operand.data == INT_MIN:
                    raise error_arithmetic("attempt to negate with overflow", op.position)
                return int_val(-operand.data)
            if operand.type == ValueType.FLOAT:
                return float_val(-operand.data)
        elif op.operator == UnaryOperator.NOT:
            if operand.type == ValueType.BOOLEAN:
                return bool_val(not operand.data)
        else:
            raise RuntimeError(f"Unknown unary operator: {op.operator}")

        raise error_unary_operand(op.operator.value, str(operand.type), op.position)

    # --- Calls ---

    def _eval_call(self, call: Call, program: Program) -> Optional[Value]:
        head = self._require(call.head, program)
        if head.type != ValueType.FUNCTION:
            raise error_cannot_call(str(head.type), call.position)

        args = [self._require(arg, program) for arg in call.arguments.items]

        native_fn = program.native_functions.get(head.data)
        if native_fn is None:
            raise error_unknown_handle("function", head.data, call.head.position)

        try:
            return native_fn(args, program)
        except NativeError as e:
            raise error_native_call(str(e), call.position) from e


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def _float_div(a: float, b: float) -> float:
    """IEEE division: dividing by zero gives an infinity or nan."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _float_mod(a: float, b: float) -> float:
    """Truncated float remainder; nan where it is undefined."""
    if b == 0.0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    return math.fmod(a, b)


def _float_pow(a: float, b: float) -> float:
    """Floating-point power; overflow gives an infinity, a complex result nan."""
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and _is_odd_integer(b):
            return -math.inf
        return math.inf
    except ValueError:
        if a == 0.0:
            if _is_odd_integer(b):
                return math.copysign(math.inf, a)
            return math.inf
        return math.nan


def evaluate_node(node: AstNode, program: Program) -> Optional[Value]:
    """Evaluate an already-parsed tree."""
    return Interpreter().evaluate(node, program)


def evaluate(source: str, program: Program) -> Optional[Value]:
    """
    Lex, parse and evaluate source text against `program`.

    This is the host entry point:

        from exprlang import Program, evaluate

        program = Program.init()
        evaluate('set("x", 2)', program)
        print(evaluate("x * 21", program))    # 42

    Returns:
        The resulting Value, or None if the expression produced no value

    Raises:
        ExprError: On any lexer, parser or evaluation error
        ProgramExit: If the `exit` function was called
    """
    tokens = tokenize(source)
    tree = parse(tokens)
    result = Interpreter().evaluate(tree, program)
    logger.debug("evaluated %r -> %r", source, result)
    return result
