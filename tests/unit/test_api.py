"""Tests for the composable API functions in typeresolve.api."""

import logging

from typeresolve.api import dump_translation, resolve_type, scan_source, translate_source
from typeresolve.errors import ErrorKind
from typeresolve.registry import ProgramRegistry
from typeresolve.resolve_types import (
    DeclarationKind,
    Resolution,
    ResolverConfig,
    TranslatedDeclaration,
)

SOURCE = """\
typedef unsigned long size_type;
struct Node { struct Node *next; size_type len; };
FILE *log_file;
mystery_t broken;
int (*op)(int, float);
"""


class TestResolveType:
    def test_returns_resolution(self):
        result = resolve_type("int *")
        assert isinstance(result, Resolution)
        assert result.ok
        assert result.descriptor == "[]int"
        assert str(result) == "[]int"

    def test_uses_given_registry(self):
        registry = ProgramRegistry()
        registry.declare("Node")
        assert resolve_type("struct Node *", registry).descriptor == "[]Node"

    def test_failure_rendering(self):
        result = resolve_type("mystery_t")
        assert not result.ok
        assert result.error_kind is ErrorKind.UNKNOWN
        assert str(result).startswith("interface{}  # ")

    def test_config(self):
        result = resolve_type("mystery_t", config=ResolverConfig(placeholder="any"))
        assert result.descriptor == "any"


class TestScanSource:
    def test_collects_declarations_and_registry(self):
        result = scan_source(SOURCE, "list.c")
        names = [d.name for d in result.declarations]
        assert names[:3] == ["size_type", "next", "len"]
        assert result.registry.is_already_declared("Node")

    def test_grows_existing_registry(self):
        registry = ProgramRegistry()
        scan_source("typedef int handle;\n", registry=registry)
        scan_source("typedef handle *handles;\n", registry=registry)
        assert set(registry.typedefs) == {"handle", "handles"}


class TestTranslateSource:
    def test_translates_every_declaration(self):
        translated = translate_source(SOURCE, "list.c")
        assert all(isinstance(t, TranslatedDeclaration) for t in translated)
        by_name = {t.name: t for t in translated}
        assert by_name["size_type"].descriptor == "uint32"
        assert by_name["next"].descriptor == "[]Node"
        assert by_name["len"].descriptor == "size_type"
        assert by_name["log_file"].descriptor == "*noarch.File"
        assert by_name["op"].descriptor == "func(int, float32)(int)"
        assert by_name["op"].kind == DeclarationKind.VARIABLE

    def test_failures_keep_going(self):
        by_name = {t.name: t for t in translate_source(SOURCE, "list.c")}
        assert by_name["broken"].descriptor == "interface{}"
        assert by_name["broken"].error
        assert by_name["op"].error is None

    def test_unwind_typedefs(self):
        config = ResolverConfig(unwind_typedefs=True)
        by_name = {t.name: t for t in translate_source(SOURCE, "list.c", config)}
        assert by_name["len"].descriptor == "uint32"

    def test_logs_summary(self, caplog):
        with caplog.at_level(logging.INFO, logger="typeresolve.api"):
            translate_source(SOURCE, "list.c")
        assert "1 failed" in caplog.text


class TestDumpTranslation:
    def test_one_line_per_declaration(self):
        text = dump_translation("int counter;\nchar *name;\n")
        lines = text.splitlines()
        assert lines == [
            "  variable counter: int -> int",
            "  variable name: char * -> []byte",
        ]
