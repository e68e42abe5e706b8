"""TypeResolver: maps C type spellings to Go type descriptors.

Some general rules:

1. The Go type must be deterministic. Against a fixed registry snapshot the
   same C type always yields the same descriptor. New types are discovered
   while a translation unit is processed, so a spelling may resolve
   differently once more typedefs are known, exactly as a C compiler will not
   let a type be used before it is defined.

2. Modifiers with no Go meaning (``const``, ``volatile``, ...) are dropped.
   Validating C is left to the C front-end.

3. If all else fails an error is reported together with the placeholder type
   ``interface{}``, so code generation can step over the failure and keep
   producing output for the rest of the translation unit.
"""

from __future__ import annotations

import logging
import re

from .classify import PointeeCategory, is_function, pointee_category
from .constants import (
    AGGREGATE_PREFIXES,
    ANONYMOUS_UNION_PHRASE,
    ENUM_PREFIX,
    FIXED_ARRAY_PATTERN,
    FUNC_POINTER_SHAPE_PATTERN,
    FUNC_SIGNATURE_SHAPE_PATTERN,
    POINTER_MARKER,
    POINTER_SUFFIX,
    SLICE_MARKER,
    STRUCT_PREFIX,
    UNION_PREFIX,
    UNSIZED_ARRAY_SUFFIX,
)
from .errors import (
    MalformedTypeError,
    TypeCycleError,
    TypeResolutionError,
    UnknownTypeError,
    UnsupportedTypeError,
)
from .function_grammar import split_function
from .normalize import normalize
from .registry import TypeRegistry
from .resolve_types import FunctionSignature, Resolution, ResolverConfig
from .tables import (
    COLLAPSED_FRAGMENTS,
    FRAGMENT_SUBSTITUTIONS,
    PRIMITIVE_TYPES,
    STD_STRUCT_TYPES,
)

logger = logging.getLogger(__name__)

_FIXED_ARRAY_RE = re.compile(FIXED_ARRAY_PATTERN)
_ARRAY_DIGITS_RE = re.compile(r"[0-9]+")
_FUNC_POINTER_SHAPE_RE = re.compile(FUNC_POINTER_SHAPE_PATTERN)
_FUNC_SIGNATURE_SHAPE_RE = re.compile(FUNC_SIGNATURE_SHAPE_PATTERN)


class _Walk:
    """Recursion bookkeeping for one top-level resolution."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        self.depth = 0
        self.typedef_chain: list[str] = []


class TypeResolver:
    """Resolves C type spellings against a registry snapshot.

    Holds no mutable state of its own; concurrent calls are safe as long as
    the registry supports concurrent reads.
    """

    def __init__(self, registry: TypeRegistry, config: ResolverConfig = ResolverConfig()):
        self.registry = registry
        self.config = config

    # ── public surface ───────────────────────────────────────────

    def resolve(self, spelling: str) -> Resolution:
        """Resolve *spelling*, reporting failure as placeholder + error."""
        try:
            return Resolution(descriptor=self.resolve_or_raise(spelling))
        except TypeResolutionError as exc:
            logger.debug("unresolved %r: %s", spelling, exc)
            return Resolution(
                descriptor=self.config.placeholder,
                error=str(exc),
                error_kind=exc.kind,
            )

    def resolve_or_raise(self, spelling: str) -> str:
        """Resolve *spelling* or raise ``TypeResolutionError``."""
        return self._resolve(spelling, _Walk(self.config.max_depth))

    def parse_function(self, spelling: str) -> FunctionSignature:
        """Split a function type and resolve its parameters and return types."""
        return self._separate_function(spelling, _Walk(self.config.max_depth))

    # ── recursion ────────────────────────────────────────────────

    def _resolve(self, spelling: str, walk: _Walk) -> str:
        if walk.depth >= walk.max_depth:
            raise TypeCycleError(
                f"nesting deeper than {walk.max_depth} levels", spelling
            )
        walk.depth += 1
        try:
            return self._resolve_step(spelling, walk)
        except TypeResolutionError as exc:
            raise exc.wrap(f"Cannot resolve type '{spelling}'") from exc
        finally:
            walk.depth -= 1

    def _resolve_step(self, spelling: str, walk: _Walk) -> str:
        registry = self.registry

        if ":" in spelling:
            raise MalformedTypeError(
                "probably an incorrect type translation (stray ':')", spelling
            )

        s = normalize(spelling)
        if not s:
            raise MalformedTypeError(
                "probably an incorrect type translation (empty type)", spelling
            )

        for fragment, descriptor in COLLAPSED_FRAGMENTS.items():
            if fragment in s:
                logger.debug("collapsing %r to %s", s, descriptor)
                return descriptor
        for fragment, replacement in FRAGMENT_SUBSTITUTIONS:
            s = s.replace(fragment, replacement)

        if s in PRIMITIVE_TYPES:
            return registry.qualify(PRIMITIVE_TYPES[s])

        base = registry.base_type_of_typedef(s)
        if base is not None and base.startswith(UNION_PREFIX):
            return base[len(UNION_PREFIX) :]

        # Function types are always referenced through their alias.
        if s.endswith(POINTER_SUFFIX):
            alias = s[: -len(POINTER_SUFFIX)]
            underlying = registry.typedef_underlying(alias)
            if underlying is not None and is_function(underlying):
                return alias

        if (
            not self.config.unwind_typedefs
            and registry.typedef_underlying(s) is not None
            and not registry.is_enum_typedef(s)
        ):
            if s in STD_STRUCT_TYPES:
                return registry.qualify(STD_STRUCT_TYPES[s])
            return s

        if s in STD_STRUCT_TYPES:
            return registry.qualify(STD_STRUCT_TYPES[s])

        if is_function(s):
            return self._separate_function(s, walk).descriptor

        if registry.is_enum_typedef(s):
            return self._resolve("int", walk)

        underlying = registry.typedef_underlying(s)
        if underlying is not None:
            if is_function(underlying):
                return s
            return self._unwind_typedef(s, underlying, walk)

        bare = _strip_aggregate_prefix(s)
        if registry.is_already_declared(bare):
            return registry.qualify(bare)

        if s.endswith(POINTER_MARKER):
            return self._resolve_pointer(s, walk)

        flat = s.replace("(", "").replace(")", "")
        match = _FIXED_ARRAY_RE.search(flat)
        if match:
            element = self._resolve(match.group(1), walk)
            dimensions = _ARRAY_DIGITS_RE.sub("", match.group(2))
            return dimensions + element

        if s.startswith(STRUCT_PREFIX):
            return s[len(STRUCT_PREFIX) :]
        if s.startswith(UNION_PREFIX):
            return s[len(UNION_PREFIX) :]

        if s.startswith(ENUM_PREFIX):
            # Never reached with a trailing "*": the pointer step runs first.
            if s.endswith(POINTER_MARKER):
                return POINTER_MARKER + s[len(ENUM_PREFIX) : -len(POINTER_SUFFIX)]
            return s[len(ENUM_PREFIX) :]

        if ANONYMOUS_UNION_PHRASE in s:
            raise UnsupportedTypeError(
                "anonymous unions must be named before resolution", s
            )

        if _FUNC_POINTER_SHAPE_RE.search(s):
            raise UnsupportedTypeError(
                f"function pointers are not supported [1] : '{s}'", s
            )
        if _FUNC_SIGNATURE_SHAPE_RE.search(s):
            raise UnsupportedTypeError(
                f"function pointers are not supported [2] : '{s}'", s
            )

        if s.endswith(UNSIZED_ARRAY_SUFFIX):
            element = self._resolve(s[: -len(UNSIZED_ARRAY_SUFFIX)], walk)
            return SLICE_MARKER + element

        raise UnknownTypeError(
            f"I couldn't find an appropriate Go type for the C type '{s}'.", s
        )

    def _unwind_typedef(self, name: str, underlying: str, walk: _Walk) -> str:
        if name in walk.typedef_chain:
            chain = " -> ".join(walk.typedef_chain + [name])
            raise TypeCycleError(f"typedef cycle : {chain}", name)
        walk.typedef_chain.append(name)
        try:
            return self._resolve(underlying, walk)
        finally:
            walk.typedef_chain.pop()

    def _resolve_pointer(self, s: str, walk: _Walk) -> str:
        pointee = self._resolve(s[:-1].strip(), walk)
        if pointee_category(pointee) is PointeeCategory.OPAQUE_HANDLE:
            return POINTER_MARKER + pointee
        return SLICE_MARKER + pointee

    def _separate_function(self, spelling: str, walk: _Walk) -> FunctionSignature:
        try:
            parts = split_function(spelling)
            params: list[str] = []
            for field in parts.fields:
                if not field:
                    continue
                try:
                    params.append(self._resolve(field, walk))
                except TypeResolutionError as exc:
                    raise exc.wrap(f"Error in field '{field}'") from exc
            returns: list[str] = []
            for ret in parts.returns:
                try:
                    returns.append(self._resolve(ret, walk))
                except TypeResolutionError as exc:
                    raise exc.wrap(f"Error in return field '{ret}'") from exc
        except TypeResolutionError as exc:
            raise exc.wrap(f"Cannot separate function '{spelling}'") from exc
        return FunctionSignature(prefix=parts.prefix, params=params, returns=returns)


def _strip_aggregate_prefix(s: str) -> str:
    for prefix in AGGREGATE_PREFIXES:
        if s.startswith(prefix):
            return s[len(prefix) :]
    return s
