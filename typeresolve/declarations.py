"""DeclarationScanner: tree-sitter C AST -> type spellings + registry entries.

Walks a translation unit, renders every declared entity's type as a
clang-style spelling (``int (*)(int, float)``, ``char [40]``) and grows the
registry with the typedefs and aggregates it discovers, in source order.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable

from .constants import ANONYMOUS_TEMPLATE, DEFAULT_FILENAME, STRUCT_PREFIX, UNION_PREFIX
from .parser import ParsedSource
from .registry import ProgramRegistry
from .resolve_types import CDeclaration, DeclarationKind, SourceLocation
from .sanitize import sanitize
from .tables import CANONICAL_SPECIFIERS

logger = logging.getLogger(__name__)

_NAME_TYPES = frozenset(
    {"identifier", "type_identifier", "field_identifier", "primitive_type"}
)
_POINTER_TYPES = frozenset({"pointer_declarator", "abstract_pointer_declarator"})
_ARRAY_TYPES = frozenset({"array_declarator", "abstract_array_declarator"})
_FUNCTION_TYPES = frozenset({"function_declarator", "abstract_function_declarator"})
_PAREN_TYPES = frozenset(
    {"parenthesized_declarator", "abstract_parenthesized_declarator"}
)
_WRAPPER_TYPES = frozenset({"init_declarator", "attributed_declarator"})
_DECORATION_TYPES = frozenset(
    {"attribute_specifier", "attribute_declaration", "ms_call_modifier", "comment"}
)
_VARIADIC_TYPES = frozenset({"variadic_parameter", "..."})
_ARITHMETIC_SPECIFIER_TYPES = frozenset({"primitive_type", "sized_type_specifier"})

_AGGREGATE_KEYWORDS: dict[str, str] = {
    "struct_specifier": "struct",
    "union_specifier": "union",
    "enum_specifier": "enum",
}


def _join(base: str, suffix: str) -> str:
    return f"{base} {suffix}" if suffix else base


def _canonical_specifier(words: list[str]) -> str:
    """``long unsigned int`` → ``unsigned long``, as clang spells it."""
    return CANONICAL_SPECIFIERS.get(" ".join(sorted(words)), " ".join(words))


_INTEGER_SUFFIX_CHARS = "uUlL"
_HEX_LITERAL_RE = re.compile(r"0[xX]([0-9a-fA-F]+)")
_OCTAL_LITERAL_RE = re.compile(r"0([0-7]+)")
_DECIMAL_LITERAL_RE = re.compile(r"[0-9]+")


def _array_size_text(size: str) -> str:
    """Decimal form of a C integer literal size; other sizes stay verbatim.

    Macro and expression sizes (``[N]``, ``[2 * K]``) cannot be evaluated
    without a preprocessor and are kept as written.
    """
    literal = size.strip().rstrip(_INTEGER_SUFFIX_CHARS)
    match = _HEX_LITERAL_RE.fullmatch(literal)
    if match:
        return str(int(match.group(1), 16))
    match = _OCTAL_LITERAL_RE.fullmatch(literal)
    if match:
        return str(int(match.group(1), 8))
    if _DECIMAL_LITERAL_RE.fullmatch(literal):
        return str(int(literal))
    if size:
        logger.debug("array size %r is not an integer literal", size)
    return size


@dataclass
class ScanResult:
    declarations: list[CDeclaration] = field(default_factory=list)
    registry: ProgramRegistry = field(default_factory=ProgramRegistry)


class DeclarationScanner:
    """Collects C declarations and feeds a ``ProgramRegistry``.

    Source is scanned unpreprocessed: array sizes given as integer literals
    are rendered in decimal, but macro or expression sizes are kept verbatim
    and will not resolve to a Go type.
    """

    def __init__(self, registry: ProgramRegistry, filename: str = DEFAULT_FILENAME):
        self.registry = registry
        self.filename = filename
        self._source: bytes = b""
        self._declarations: list[CDeclaration] = []
        self._DISPATCH: dict[str, Callable] = {
            "type_definition": self._scan_typedef,
            "declaration": self._scan_declaration,
            "function_definition": self._scan_function_def,
            "field_declaration": self._scan_field,
            "struct_specifier": self._scan_aggregate,
            "union_specifier": self._scan_aggregate,
            "enum_specifier": self._scan_aggregate,
        }

    # ── helpers ──────────────────────────────────────────────────

    def _node_text(self, node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def _source_loc(self, node) -> SourceLocation:
        s, e = node.start_point, node.end_point
        return SourceLocation(
            start_line=s[0] + 1,
            start_col=s[1],
            end_line=e[0] + 1,
            end_col=e[1],
        )

    def _record(self, name: str, kind: DeclarationKind, c_type: str, node) -> None:
        self._declarations.append(
            CDeclaration(
                name=name, kind=kind, c_type=c_type, location=self._source_loc(node)
            )
        )

    def _anonymous_name(self, node, keyword: str) -> str:
        row, col = node.start_point[0], node.start_point[1]
        return sanitize(
            ANONYMOUS_TEMPLATE.format(
                kind=keyword, filename=self.filename, line=row + 1, col=col + 1
            )
        )

    # ── entry point ──────────────────────────────────────────────

    def scan(self, parsed: ParsedSource) -> list[CDeclaration]:
        self._source = parsed.source
        self.filename = parsed.filename
        self._declarations = []
        self._walk(parsed.root_node)
        logger.info(
            "%s: %d declarations, %d typedefs",
            self.filename,
            len(self._declarations),
            len(self.registry.typedefs),
        )
        return self._declarations

    def _walk(self, node) -> None:
        handler = self._DISPATCH.get(node.type)
        if handler:
            handler(node)
        for child in node.children:
            self._walk(child)

    # ── spelling rendering ───────────────────────────────────────

    def _type_spelling(self, type_node) -> str:
        keyword = _AGGREGATE_KEYWORDS.get(type_node.type)
        if keyword is None:
            words = self._node_text(type_node).split()
            if type_node.type in _ARITHMETIC_SPECIFIER_TYPES:
                return _canonical_specifier(words)
            return " ".join(words)
        name_node = type_node.child_by_field_name("name")
        if name_node is not None:
            return f"{keyword} {self._node_text(name_node)}"
        return f"{keyword} {self._anonymous_name(type_node, keyword)}"

    def _base_spelling(self, node, type_node) -> str:
        """Type specifier of *node* with its leading qualifiers, e.g. ``const char``."""
        qualifiers = [
            self._node_text(c) for c in node.children if c.type == "type_qualifier"
        ]
        return " ".join(qualifiers + [self._type_spelling(type_node)])

    def _inner_declarator(self, node):
        if node.type in _PAREN_TYPES or node.type == "attributed_declarator":
            return next(
                (c for c in node.named_children if c.type not in _DECORATION_TYPES),
                None,
            )
        return node.child_by_field_name("declarator")

    def _render_declarator(self, node) -> tuple[str, str]:
        """Return ``(declared name, spelling suffix)`` for a declarator.

        The suffix is the declarator with its identifier removed, so that
        ``(*fp)(int a)`` renders as ``(*)(int)``. Abstract declarators yield an
        empty name.
        """
        if node is None:
            return "", ""
        ntype = node.type
        if ntype in _NAME_TYPES:
            return self._node_text(node), ""
        if ntype in _WRAPPER_TYPES:
            return self._render_declarator(self._inner_declarator(node))
        name, inner = self._render_declarator(self._inner_declarator(node))
        if ntype in _POINTER_TYPES:
            return name, "*" + inner
        if ntype in _ARRAY_TYPES:
            size_node = node.child_by_field_name("size")
            size = self._node_text(size_node) if size_node is not None else ""
            size = _array_size_text(size)
            return name, f"{inner}[{size}]"
        if ntype in _FUNCTION_TYPES:
            params = self._render_parameters(node.child_by_field_name("parameters"))
            return name, f"{inner}({params})"
        if ntype in _PAREN_TYPES:
            return name, f"({inner})"
        logger.debug("unexpected declarator %s: %r", ntype, self._node_text(node))
        return name, inner

    def _render_parameters(self, params_node) -> str:
        if params_node is None:
            return ""
        parts: list[str] = []
        for child in params_node.children:
            if child.type == "parameter_declaration":
                parts.append(self._spelling_of(child)[1])
            elif child.type in _VARIADIC_TYPES:
                parts.append("...")
        return ", ".join(parts)

    def _spelling_of(self, node) -> tuple[str, str]:
        """``(name, full spelling)`` for a node with ``type``/``declarator`` fields."""
        type_node = node.child_by_field_name("type")
        base = self._base_spelling(node, type_node) if type_node is not None else ""
        name, suffix = self._render_declarator(node.child_by_field_name("declarator"))
        return name, _join(base, suffix)

    def _declares_function(self, node) -> bool:
        """True if the operator nearest the declared name is a function call."""
        derivation = ""
        while node is not None and node.type not in _NAME_TYPES:
            if node.type not in _WRAPPER_TYPES and node.type not in _PAREN_TYPES:
                derivation = node.type
            node = self._inner_declarator(node)
        return derivation in _FUNCTION_TYPES

    # ── C: typedef ───────────────────────────────────────────────

    def _scan_typedef(self, node):
        """Register each ``typedef <type> <declarator>, ...`` alias."""
        type_node = node.child_by_field_name("type")
        if type_node is None:
            return
        base = self._base_spelling(node, type_node)
        aggregate = self._type_spelling(type_node)
        is_enum = type_node.type == "enum_specifier"
        for decl in node.children_by_field_name("declarator"):
            name, suffix = self._render_declarator(decl)
            if not name:
                continue
            c_type = _join(base, suffix)
            if is_enum and not suffix:
                self.registry.add_enum_typedef(name)
            else:
                typedef_base = None
                if not suffix and aggregate.startswith((STRUCT_PREFIX, UNION_PREFIX)):
                    typedef_base = aggregate
                self.registry.add_typedef(name, c_type, typedef_base)
            self._record(name, DeclarationKind.TYPEDEF, c_type, decl)

    # ── C: declarations ──────────────────────────────────────────

    def _scan_declaration(self, node):
        type_node = node.child_by_field_name("type")
        if type_node is None:
            return
        base = self._base_spelling(node, type_node)
        for decl in node.children_by_field_name("declarator"):
            name, suffix = self._render_declarator(decl)
            kind = (
                DeclarationKind.FUNCTION
                if self._declares_function(decl)
                else DeclarationKind.VARIABLE
            )
            self._record(name, kind, _join(base, suffix), decl)

    def _scan_function_def(self, node):
        name, c_type = self._spelling_of(node)
        self._record(name, DeclarationKind.FUNCTION, c_type, node)

    def _scan_field(self, node):
        type_node = node.child_by_field_name("type")
        if type_node is None:
            return
        base = self._base_spelling(node, type_node)
        for decl in node.children_by_field_name("declarator"):
            name, suffix = self._render_declarator(decl)
            self._record(name, DeclarationKind.FIELD, _join(base, suffix), decl)

    # ── C: struct / union / enum ─────────────────────────────────

    def _scan_aggregate(self, node):
        """Definitions (with a body) make their name known to the registry."""
        if node.child_by_field_name("body") is None:
            return
        keyword = _AGGREGATE_KEYWORDS[node.type]
        name_node = node.child_by_field_name("name")
        name = (
            self._node_text(name_node)
            if name_node is not None
            else self._anonymous_name(node, keyword)
        )
        self.registry.declare(name)
