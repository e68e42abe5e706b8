"""Named constants: eliminates magic strings across the codebase."""

from __future__ import annotations

PLACEHOLDER_TYPE = "interface{}"
VOID_DESCRIPTOR = ""

RUNTIME_PACKAGE = "github.com/Konstantin8105/c4go/noarch"

SLICE_MARKER = "[]"
POINTER_MARKER = "*"
FUNC_POINTER_MARKER = "(*)"
FUNC_KEYWORD = "func"
LIST_SEPARATOR = ", "

STRUCT_PREFIX = "struct "
UNION_PREFIX = "union "
ENUM_PREFIX = "enum "
CLASS_PREFIX = "class "
AGGREGATE_PREFIXES: tuple[str, ...] = (STRUCT_PREFIX, UNION_PREFIX, CLASS_PREFIX)

UNSIZED_ARRAY_SUFFIX = " []"
POINTER_SUFFIX = " *"

ANONYMOUS_MARKER = "anonymous"
ANONYMOUS_ANNOTATION = "(anonymous"
ANONYMOUS_UNION_PHRASE = "anonymous union"
ANONYMOUS_TEMPLATE = "{kind} (anonymous {kind} at {filename}:{line}:{col})"
SCOPE_SEPARATOR_REPLACEMENT = "D"

FIXED_ARRAY_PATTERN = r"([\w\* ]+)((\[\d+\])+)"
ARRAY_SIZE_PATTERN = r"\[(\d+)\]"
FUNC_POINTER_SHAPE_PATTERN = r"[\w ]+\(\*.*?\)\(.*\)"
FUNC_SIGNATURE_SHAPE_PATTERN = r"[\w ]+ \(.*\)"

DEFAULT_MAX_DEPTH = 64
DEFAULT_FILENAME = "input.c"
C_LANGUAGE = "c"
