"""Tests for the C type spelling predicates."""

from typeresolve.classify import (
    PointeeCategory,
    has_array_suffix,
    is_c_array,
    is_c_float,
    is_c_integer,
    is_c_pointer,
    is_function,
    is_pointer,
    is_typedef_function,
    pointee_category,
)
from typeresolve.constants import RUNTIME_PACKAGE
from typeresolve.registry import ProgramRegistry


def _registry(**typedefs: str) -> ProgramRegistry:
    reg = ProgramRegistry()
    for name, underlying in typedefs.items():
        reg.add_typedef(name, underlying)
    return reg


class TestNumericPredicates:
    def test_direct_integer_spellings(self):
        reg = _registry()
        assert is_c_integer(reg, "int")
        assert is_c_integer(reg, "unsigned long long")
        assert is_c_integer(reg, "long unsigned int")
        assert not is_c_integer(reg, "float")
        assert not is_c_integer(reg, "char *")

    def test_integer_spelling_is_normalized_first(self):
        assert is_c_integer(_registry(), "const unsigned  int")

    def test_integer_through_typedef_chain(self):
        reg = _registry(size_type="unsigned long", index_type="size_type")
        assert is_c_integer(reg, "size_type")
        assert is_c_integer(reg, "index_type")

    def test_float_through_typedef(self):
        reg = _registry(real="double")
        assert is_c_float(reg, "real")
        assert is_c_float(reg, "long double")
        assert not is_c_float(reg, "int")

    def test_cyclic_typedef_chain_terminates(self):
        reg = _registry(a="b", b="a")
        assert not is_c_integer(reg, "a")
        assert not is_c_float(reg, "b")


class TestShapePredicates:
    def test_is_function(self):
        assert is_function("void (*)(void)")
        assert is_function("int (int, float)")
        assert is_function("int (*)(int (*)(int))")
        assert not is_function("int (*)")
        assert not is_function("int *")

    def test_is_c_pointer(self):
        assert is_c_pointer("int *")
        assert is_c_pointer("int *  ")
        assert not is_c_pointer("int")
        assert not is_c_pointer("int *[3]")
        assert not is_c_pointer("")

    def test_is_c_array(self):
        assert is_c_array("char [40]")
        assert is_c_array("char [40] ")
        assert not is_c_array("int *")
        assert not is_c_array("")

    def test_is_pointer_on_descriptors(self):
        assert is_pointer("[]int")
        assert is_pointer("*noarch.File")
        assert not is_pointer("int")

    def test_has_array_suffix_stops_at_first_star(self):
        assert has_array_suffix("int [2] *")
        assert not has_array_suffix("int * [2]")
        assert not has_array_suffix("int")


class TestTypedefFunction:
    def test_typedef_of_function_pointer(self):
        reg = _registry(handler="void (*)(int)")
        assert is_typedef_function(reg, "handler")
        assert is_typedef_function(reg, "handler *")

    def test_plain_typedef_is_not_function(self):
        reg = _registry(my_int="int")
        assert not is_typedef_function(reg, "my_int")
        assert not is_typedef_function(reg, "int *")


class TestPointeeCategory:
    def test_file_handle_is_opaque(self):
        assert pointee_category("noarch.File") is PointeeCategory.OPAQUE_HANDLE
        assert (
            pointee_category(f"{RUNTIME_PACKAGE}.File")
            is PointeeCategory.OPAQUE_HANDLE
        )

    def test_everything_else_is_value(self):
        assert pointee_category("int") is PointeeCategory.VALUE
        assert pointee_category("[]byte") is PointeeCategory.VALUE
        assert pointee_category("File") is PointeeCategory.VALUE
