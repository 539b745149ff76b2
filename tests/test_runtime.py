"""
Tests for runtime values, the Program state and the built-in functions.
"""

import math

import pytest

from exprlang import NativeError, ProgramExit
from exprlang.runtime import (
    Value, ValueType, Object, Arena, Program, BUILTINS,
    int_val, float_val, bool_val, string_val, vector_val,
    object_val, function_val,
)


# --- Value Tests ---

class TestValues:
    """Test runtime value constructors."""

    def test_int_value(self):
        v = int_val(42)
        assert v.data == 42
        assert v.type == ValueType.INT

    def test_int_range(self):
        """Ints are 64-bit signed."""
        int_val(2 ** 63 - 1)
        int_val(-(2 ** 63))
        with pytest.raises(OverflowError):
            int_val(2 ** 63)

    def test_float_value(self):
        v = float_val(3)
        assert v.data == 3.0
        assert isinstance(v.data, float)
        assert v.type == ValueType.FLOAT

    def test_bool_and_string(self):
        assert bool_val(True).type == ValueType.BOOLEAN
        assert string_val("hi").data == "hi"

    def test_handles(self):
        assert object_val(3) == Value(3, ValueType.OBJECT)
        assert function_val(3) == Value(3, ValueType.FUNCTION)
        assert object_val(3) != function_val(3)

    def test_is_numeric(self):
        assert int_val(1).is_numeric
        assert float_val(1.0).is_numeric
        assert not bool_val(True).is_numeric
        assert not string_val("1").is_numeric


class TestValueDisplay:
    """Test display and literal forms."""

    def test_scalars(self):
        assert str(int_val(-7)) == "-7"
        assert str(bool_val(True)) == "true"
        assert str(bool_val(False)) == "false"
        assert str(string_val("a b")) == "a b"

    def test_integral_float_displays_without_fraction(self):
        assert str(float_val(3.0)) == "3"
        assert float_val(3.0).literal() == "3.0"

    def test_fractional_float(self):
        assert str(float_val(0.5)) == "0.5"
        assert float_val(0.5).literal() == "0.5"

    def test_float_without_exponent(self):
        """Literal forms never use exponent notation."""
        assert float_val(1e20).literal() == "100000000000000000000.0"
        assert str(float_val(1e20)) == "100000000000000000000"
        assert float_val(1e-7).literal() == "0.0000001"

    def test_special_floats(self):
        assert str(float_val(math.inf)) == "inf"
        assert str(float_val(-math.inf)) == "-inf"
        assert str(float_val(math.nan)) == "nan"

    def test_extreme_literals(self):
        """Values with no literal syntax get an expression form."""
        assert int_val(-(2 ** 63)).literal() == "(-9223372036854775807 - 1)"
        assert float_val(math.inf).literal() == "(1 / 0)"
        assert float_val(-math.inf).literal() == "(-1 / 0)"
        assert float_val(math.nan).literal() == "(0 / 0)"
        assert int_val(-5).literal() == "-5"

    def test_string_literal_escapes(self):
        assert string_val('say "hi"').literal() == '"say \\"hi\\""'
        assert string_val("a\\b").literal() == '"a\\\\b"'

    def test_vector_display(self):
        """Vector elements show in literal form."""
        v = vector_val([int_val(1), string_val("a"), float_val(2.0)])
        assert str(v) == '[1, "a", 2.0]'
        assert str(vector_val([])) == "[]"

    def test_nested_vector(self):
        v = vector_val([vector_val([int_val(1)]), vector_val([])])
        assert str(v) == "[[1], []]"

    def test_handle_display(self):
        assert str(object_val(5)) == "object:00000005"
        assert str(function_val(255)) == "function:000000ff"


class TestValueCopy:
    """Test value copying."""

    def test_vector_copy_is_deep(self):
        inner = vector_val([int_val(1)])
        outer = vector_val([inner])
        clone = outer.copy()
        clone.data[0].data.append(int_val(2))
        assert len(inner.data) == 1
        assert clone != outer

    def test_scalar_copy_equal(self):
        v = string_val("x")
        assert v.copy() == v
        assert v.copy() is not v


# --- Program Tests ---

class TestArena:
    """Test the append-only arena."""

    def test_handles_are_sequential(self):
        arena = Arena()
        assert arena.create("a") == 0
        assert arena.create("b") == 1
        assert len(arena) == 2

    def test_get(self):
        arena = Arena()
        arena.create("a")
        assert arena.get(0) == "a"
        assert arena.get(1) is None
        assert arena.get(-1) is None

    def test_get_mut_shares_item(self):
        arena = Arena()
        handle = arena.create(Object())
        arena.get_mut(handle).insert("x", int_val(1))
        assert arena.get(handle).get("x") == int_val(1)

    def test_handles_stay_valid(self):
        """Adding items never moves earlier ones."""
        arena = Arena()
        first = arena.create("first")
        for i in range(100):
            arena.create(i)
        assert arena.get(first) == "first"


class TestObject:
    """Test heap objects."""

    def test_insert_chains(self):
        obj = Object().insert("x", int_val(1)).insert("y", int_val(2))
        assert obj.get("x") == int_val(1)
        assert obj.get("y") == int_val(2)

    def test_set_returns_previous(self):
        obj = Object()
        assert obj.set("x", int_val(1)) is None
        assert obj.set("x", int_val(2)) == int_val(1)

    def test_missing_field(self):
        assert Object().get("nope") is None


class TestProgram:
    """Test program state."""

    def test_init_binds_builtins(self):
        """exit, set and abs get handles 0, 1 and 2."""
        program = Program.init()
        assert program.get("exit") == function_val(0)
        assert program.get("set") == function_val(1)
        assert program.get("abs") == function_val(2)
        assert len(program.native_functions) == len(BUILTINS)

    def test_empty_program(self):
        program = Program()
        assert program.variables == {}
        assert len(program.objects) == 0

    def test_set_returns_previous(self):
        program = Program()
        assert program.set("x", int_val(1)) is None
        assert program.set("x", int_val(2)) == int_val(1)
        assert program.get("x") == int_val(2)

    def test_new_object(self):
        program = Program.init()
        program.new_object("p", Object().insert("x", int_val(1)))
        handle = program.get("p")
        assert handle == object_val(0)
        assert program.objects.get(0).get("x") == int_val(1)

    def test_new_function(self):
        program = Program.init()
        program.new_function("double", lambda args, prog: int_val(args[0].data * 2))
        assert program.get("double") == function_val(3)

    def test_programs_are_independent(self):
        a = Program.init()
        b = Program.init()
        a.set("x", int_val(1))
        assert b.get("x") is None


# --- Builtin Tests ---

class TestBuiltins:
    """Test the built-in native functions directly."""

    @pytest.fixture
    def program(self):
        return Program.init()

    def call(self, program, name, *args):
        fn = program.native_functions.get(program.get(name).data)
        return fn(list(args), program)

    def test_abs_int(self, program):
        assert self.call(program, "abs", int_val(-3)) == int_val(3)

    def test_abs_float(self, program):
        assert self.call(program, "abs", float_val(-2.5)) == float_val(2.5)

    def test_abs_passes_other_values(self, program):
        assert self.call(program, "abs", string_val("s")) == string_val("s")

    def test_abs_no_arguments(self, program):
        assert self.call(program, "abs") is None

    def test_abs_int_min(self, program):
        with pytest.raises(NativeError):
            self.call(program, "abs", int_val(-(2 ** 63)))

    def test_set_binds(self, program):
        assert self.call(program, "set", string_val("x"), int_val(5)) is None
        assert program.get("x") == int_val(5)

    def test_set_too_few_arguments(self, program):
        assert self.call(program, "set", string_val("x")) is None
        assert program.get("x") is None

    def test_set_needs_string_name(self, program):
        with pytest.raises(NativeError) as exc_info:
            self.call(program, "set", int_val(1), int_val(5))
        assert str(exc_info.value) == "expected string for argument #1, got int"

    def test_exit(self, program):
        with pytest.raises(ProgramExit):
            self.call(program, "exit")
