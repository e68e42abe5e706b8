"""Declarative C → Go type tables.

Some of these rest on assumptions that do not hold for every architecture
(the width of ``long`` for one). Every such assumption lives here so it can
be revisited in one place. Keep each table sorted by name.
"""

from __future__ import annotations

from .constants import PLACEHOLDER_TYPE, RUNTIME_PACKAGE, VOID_DESCRIPTOR

C_INTEGER_TYPES: frozenset[str] = frozenset(
    {
        "int",
        "long",
        "long long",
        "long long int",
        "long long unsigned int",
        "long unsigned int",
        "short",
        "unsigned int",
        "unsigned long",
        "unsigned long long",
        "unsigned short",
        "unsigned short int",
    }
)

C_FLOAT_TYPES: frozenset[str] = frozenset({"double", "float", "long double"})

PRIMITIVE_TYPES: dict[str, str] = {
    "_Bool": "int",
    "bool": "bool",
    "char": "byte",
    "char *": "[]byte",
    "double": "float64",
    "float": "float32",
    "int": "int",
    "long": "int32",
    "long double": "float64",
    "long int": "int32",
    "long long": "int64",
    "long long int": "int64",
    "long long unsigned int": "uint64",
    "long unsigned int": "uint32",
    "short": "int16",
    "signed char": "int8",
    "unsigned char": "uint8",
    "unsigned int": "uint32",
    "unsigned long": "uint32",
    "unsigned long long": "uint64",
    "unsigned short": "uint16",
    "unsigned short int": "uint16",
    "void": VOID_DESCRIPTOR,
    "void *": PLACEHOLDER_TYPE,
    # NULL macro
    "null": "null",
    # fixed width
    "__uint16_t": "uint16",
    "__uint32_t": "uint32",
    "__uint64_t": "uint64",
    "uint32": "uint32",
    "uint64": "uint64",
    # platform internals with no faithful equivalent
    "FILE": f"{RUNTIME_PACKAGE}.File",
    "__builtin_va_list": "int64",
    "__int128": "int64",
    "__mbstate_t": "int64",
    "__sFILEX": PLACEHOLDER_TYPE,
    "__sbuf": "int64",
    "unsigned __int128": "uint64",
}

STD_STRUCT_TYPES: dict[str, str] = {
    "div_t": f"{RUNTIME_PACKAGE}.DivT",
    "fpos_t": "int",
    "ldiv_t": f"{RUNTIME_PACKAGE}.LdivT",
    "lldiv_t": f"{RUNTIME_PACKAGE}.LldivT",
    "struct tm": f"{RUNTIME_PACKAGE}.Tm",
    "time_t": f"{RUNTIME_PACKAGE}.TimeT",
    "tm": f"{RUNTIME_PACKAGE}.Tm",
}

# (fragment, replacement) pairs rewritten inside a spelling before lookup.
FRAGMENT_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    ("struct __locale_data", "int"),
    ("__locale_data", "int"),
    ("__sFILEX", "int"),
)

# Spellings containing one of these collapse to the given descriptor outright.
COLLAPSED_FRAGMENTS: dict[str, str] = {
    "__locale_struct": "int",
}

# Pointers to these are single-level pointers, never slices.
OPAQUE_HANDLE_TYPES: frozenset[str] = frozenset({f"{RUNTIME_PACKAGE}.File"})

# Specifier words, sorted, → the spelling clang prints for them.
CANONICAL_SPECIFIERS: dict[str, str] = {
    "char signed": "signed char",
    "char unsigned": "unsigned char",
    "double long": "long double",
    "int long": "long",
    "int long long": "long long",
    "int long long signed": "long long",
    "int long long unsigned": "unsigned long long",
    "int long signed": "long",
    "int long unsigned": "unsigned long",
    "int short": "short",
    "int short signed": "short",
    "int short unsigned": "unsigned short",
    "int signed": "int",
    "int unsigned": "unsigned int",
    "long long signed": "long long",
    "long long unsigned": "unsigned long long",
    "long signed": "long",
    "long unsigned": "unsigned long",
    "short signed": "short",
    "short unsigned": "unsigned short",
    "signed": "int",
    "unsigned": "unsigned int",
}

QUALIFIER_KEYWORDS: tuple[str, ...] = (
    "const",
    "volatile",
    "__restrict",
    "restrict",
    "_Nullable",
)
