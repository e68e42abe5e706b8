"""Tests for splitting C function type spellings."""

import pytest

from typeresolve.errors import FunctionGrammarError, MalformedTypeError
from typeresolve.function_grammar import BlockShape, classify_block, split_function


class TestSplitSimpleFunctions:
    def test_function_pointer(self):
        parts = split_function("int (*)(int, float)")
        assert parts.prefix == ""
        assert parts.fields == ["int", "float"]
        assert parts.returns == ["int"]

    def test_plain_function_signature(self):
        parts = split_function("int (int, float)")
        assert parts.fields == ["int", "float"]
        assert parts.returns == ["int"]

    def test_empty_argument_list_yields_one_empty_field(self):
        parts = split_function("int ()")
        assert parts.fields == [""]

    def test_commas_inside_nested_arguments_are_not_separators(self):
        parts = split_function("int (*)(int (*)(int, char), char)")
        assert parts.fields == ["int (*)(int, char)", "char"]
        assert parts.returns == ["int"]

    def test_pointer_return_type(self):
        parts = split_function("char *(*)(int)")
        assert parts.returns == ["char *"]


class TestSplitReturnBlocks:
    def test_nested_function_pointer(self):
        parts = split_function("void (*(*)(int *, void *, const char *))(void)")
        assert parts.prefix == "*"
        assert parts.fields == ["void"]
        assert parts.returns == ["void (int *, void *, const char *)"]

    def test_indirection_sequence(self):
        parts = split_function("void (*(int *, char *))(void)")
        assert parts.prefix == ""
        assert parts.returns == ["void (int *, char *)"]

    def test_array_of_function_pointers(self):
        parts = split_function("int ( * [2])(int)")
        assert parts.prefix == "[2]"
        assert parts.fields == ["int"]
        assert parts.returns == ["int"]

    def test_deep_indirection(self):
        parts = split_function("int ( *( *(*)))(char)")
        assert parts.prefix.replace(" ", "") == "**"
        assert parts.returns == ["int"]


class TestClassifyBlock:
    @pytest.mark.parametrize(
        "block, shape",
        [
            ("(*)", BlockShape.TRIVIAL_POINTER),
            ("( * [2])", BlockShape.ARRAY_OF_POINTERS),
            ("(*(int *, void *))", BlockShape.INDIRECTION_SEQUENCE),
            ("( *(*)(int *, void *, char *))", BlockShape.NESTED_FUNCTION_POINTER),
            ("( *( *(*)))", BlockShape.DEEP_INDIRECTION),
        ],
    )
    def test_block_shapes(self, block, shape):
        assert classify_block(block) is shape


class TestSplitErrors:
    def test_not_a_function(self):
        with pytest.raises(FunctionGrammarError, match="Is not function"):
            split_function("int *")

    def test_missing_closing_paren(self):
        with pytest.raises(FunctionGrammarError, match="does not end with"):
            split_function("int (int) x")

    def test_missing_return_type(self):
        with pytest.raises(FunctionGrammarError):
            split_function("(int)")

    def test_indirection_block_without_star(self):
        with pytest.raises(FunctionGrammarError, match="without indirection"):
            split_function("void (x(int))(void)")

    def test_errors_name_the_input_spelling(self):
        with pytest.raises(MalformedTypeError, match="Cannot parse function 'int \\*'"):
            split_function("int *")
