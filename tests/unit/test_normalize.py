"""Tests for the C type spelling normalizer."""

import pytest

from typeresolve.normalize import normalize


class TestNormalizePointers:
    def test_space_inserted_before_star(self):
        assert normalize("int*") == "int *"

    def test_separated_stars_collapse(self):
        assert normalize("char * *") == "char **"

    def test_three_level_pointer(self):
        assert normalize("int ***") == "int ***"

    def test_function_pointer_marker_stays_attached(self):
        assert normalize("int (*)(int)") == "int (*)(int)"

    def test_spaced_function_pointer_marker_is_reattached(self):
        assert normalize("int ( *)(int)") == "int (*)(int)"

    def test_qualifier_between_stars(self):
        assert normalize("char * const *") == "char **"
        assert normalize("const char *const *") == "char **"

    def test_qualified_function_pointer_marker(self):
        assert normalize("int (* const)(int)") == "int (*)(int)"
        assert normalize("int (* const *)(int)") == "int ( **)(int)"


class TestNormalizeQualifiers:
    def test_const_removed(self):
        assert normalize("const char *") == "char *"

    def test_all_qualifiers_removed(self):
        assert normalize("volatile int * restrict") == "int *"
        assert normalize("int * __restrict") == "int *"
        assert normalize("char * _Nullable") == "char *"

    def test_qualifier_inside_identifier_kept(self):
        assert normalize("constant_t") == "constant_t"
        assert normalize("struct volatile_state") == "struct volatile_state"

    def test_qualifiers_inside_function_arguments(self):
        assert normalize("int (*)(int, const char *)") == "int (*)(int, char *)"


class TestNormalizeWhitespaceAndArrays:
    def test_control_whitespace_removed(self):
        assert normalize("int\n") == "int"
        assert normalize("\tunsigned int\r") == "unsigned int"

    def test_repeated_spaces_collapse(self):
        assert normalize("unsigned    long   long") == "unsigned long long"

    def test_outer_whitespace_trimmed(self):
        assert normalize("   int   ") == "int"

    def test_space_before_bracket(self):
        assert normalize("char[40]") == "char [40]"

    def test_multidimensional_brackets_joined(self):
        assert normalize("int[2] [3]") == "int [2][3]"
        assert normalize("int [2][3]") == "int [2][3]"

    def test_empty(self):
        assert normalize("") == ""
        assert normalize("const") == ""


class TestNormalizeIdempotence:
    @pytest.mark.parametrize(
        "spelling",
        [
            "const char * const *",
            "int[2] [3]",
            "void (*(*)(int *, void *, const char *))(void)",
            "struct Foo   *",
            "int ( * [2])(int)",
            "unsigned\tlong",
            "char * * *",
        ],
    )
    def test_normalize_is_a_fixed_point(self, spelling):
        once = normalize(spelling)
        assert normalize(once) == once
